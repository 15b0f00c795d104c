from datetime import date
from decimal import Decimal

import pytest
from django.urls import reverse

from savers.forms import PurposeForm, MovementForm
from savers.models import Participant, Movement
from savers.services import ParticipationService, MovementService, get_current_participation
from savers.stats import get_participant_ranking, get_saver_movements
from savings_groups.models import Cycle

from .conftest import PASSWORD


@pytest.fixture
def participant(saver, active_cycle):
    return Participant.objects.create(cycle=active_cycle, user=saver)


@pytest.mark.django_db
class TestParticipationService:

    def test_join_active_cycle(self, saver, group, active_cycle):
        success, participant = ParticipationService.join_cycle(saver, group)

        assert success
        assert participant.cycle == active_cycle
        assert participant.personal_purpose == ''
        assert participant.personal_goal == Decimal('0')

    def test_join_group_without_active_cycle(self, saver, group):
        success, message = ParticipationService.join_cycle(saver, group)

        assert not success
        assert message == "Este grupo no tiene un ciclo activo"

    def test_join_refused_when_latest_cycle_terminated(self, saver, group, active_cycle):
        Cycle.objects.create(group=group, name='Ciclo nuevo', start_date=date(2025, 1, 15),
                             status=Cycle.TERMINATED)

        success, message = ParticipationService.join_cycle(saver, group)

        assert success is False
        assert message == "Este grupo no tiene un ciclo activo"
        assert get_current_participation(saver) is None

    def test_only_one_group_at_a_time(self, saver, participant, make_group, other_facilitator):
        other_group = make_group(other_facilitator, name='Otro grupo')
        Cycle.objects.create(group=other_group, name='Ciclo otro', start_date=date(2024, 1, 1))

        success, message = ParticipationService.join_cycle(saver, other_group)

        assert not success
        assert message == "Ya estás participando en un grupo. Solo puedes estar en un grupo a la vez."

    def test_update_purpose(self, participant):
        success, result = ParticipationService.update_purpose(participant, '  Comprar una nevera ', Decimal('300000'))

        participant.refresh_from_db()
        assert success
        assert participant.personal_purpose == 'Comprar una nevera'
        assert participant.personal_goal == Decimal('300000')

    @pytest.mark.parametrize('purpose, message', [
        ('', 'El propósito es requerido'),
        ('x' * 501, 'El propósito no puede exceder los 500 caracteres'),
    ])
    def test_invalid_purpose(self, participant, purpose, message):
        assert ParticipationService.update_purpose(participant, purpose) == (False, message)

    def test_start_new_cycle_requires_terminated_cycle(self, saver, participant):
        success, _ = ParticipationService.start_new_cycle(saver, participant)

        assert not success
        assert Participant.objects.filter(pk=participant.pk).exists()

    def test_start_new_cycle_removes_movements_and_participation(self, saver, participant, active_cycle):
        MovementService.record_movement(participant, date(2024, 2, 1), Decimal('10000'))
        MovementService.record_movement(participant, date(2024, 3, 1), Decimal('15000'))
        active_cycle.status = Cycle.TERMINATED
        active_cycle.save()
        participant.refresh_from_db()

        success, deleted = ParticipationService.start_new_cycle(saver, participant)

        assert success
        assert deleted == 2
        assert not Movement.objects.filter(user=saver).exists()
        assert get_current_participation(saver) is None


@pytest.mark.django_db
class TestMovementService:

    def test_record_and_total(self, participant):
        MovementService.record_movement(participant, date(2024, 2, 1), Decimal('10000'), 'Primera')
        MovementService.record_movement(participant, date(2024, 3, 1), Decimal('5000'))

        data = get_saver_movements(participant)

        assert data['movement_count'] == 2
        assert data['total_saved'] == Decimal('15000')
        assert [m.date for m in data['movements']] == [date(2024, 3, 1), date(2024, 2, 1)]

    def test_negative_amount_refused(self, participant):
        assert MovementService.record_movement(participant, date(2024, 2, 1), Decimal('-1')) == (
            False, "El monto no puede ser negativo"
        )

    def test_terminated_cycle_refuses_movements(self, participant, active_cycle):
        active_cycle.status = Cycle.TERMINATED
        active_cycle.save()
        participant.refresh_from_db()

        success, _ = MovementService.record_movement(participant, date(2024, 2, 1), Decimal('10'))

        assert not success

    def test_cannot_delete_someone_elses_movement(self, participant, make_user):
        _, movement = MovementService.record_movement(participant, date(2024, 2, 1), Decimal('10'))
        stranger = make_user('otro@example.com')

        success, _ = MovementService.delete_movement(movement, stranger)

        assert not success
        assert Movement.objects.filter(pk=movement.pk).exists()


@pytest.mark.django_db
def test_ranking_orders_by_total_saved(participant, active_cycle, make_user):
    rich = make_user('rica@example.com', first_name='Lucía', last_name='Mora')
    rich_participant = Participant.objects.create(cycle=active_cycle, user=rich)
    MovementService.record_movement(participant, date(2024, 2, 1), Decimal('1000'))
    MovementService.record_movement(rich_participant, date(2024, 2, 1), Decimal('3000'))
    MovementService.record_movement(rich_participant, date(2024, 3, 1), Decimal('500'))

    ranking = get_participant_ranking(active_cycle)

    assert [row['user'] for row in ranking] == [rich, participant.user]
    assert ranking[0]['rank'] == 1
    assert ranking[0]['total_saved'] == Decimal('3500')


@pytest.mark.django_db
class TestForms:

    def test_purpose_required(self):
        form = PurposeForm(data={'personal_purpose': '   ', 'personal_goal': ''})

        assert not form.is_valid()
        assert form.errors['personal_purpose'] == ['El propósito es requerido']

    def test_purpose_too_long(self):
        form = PurposeForm(data={'personal_purpose': 'x' * 501, 'personal_goal': ''})

        assert not form.is_valid()
        assert form.errors['personal_purpose'] == ['El propósito no puede exceder los 500 caracteres']

    def test_movement_messages(self):
        form = MovementForm(data={'date': '', 'amount': '-3', 'note': ''})

        assert not form.is_valid()
        assert form.errors['date'] == ['La fecha es requerida']
        assert form.errors['amount'] == ['El monto no puede ser negativo']


@pytest.mark.django_db
class TestSaverViews:

    def login(self, client, user):
        assert client.login(username=user.email, password=PASSWORD)

    def test_dashboard_without_participation_shows_search(self, client, saver):
        self.login(client, saver)

        response = client.get(reverse('savers:dashboard'))

        assert response.status_code == 200
        assert response.context['participant'] is None

    def test_group_search_lists_matches_with_status(self, client, saver, group, active_cycle):
        self.login(client, saver)

        response = client.get(reverse('savers:group_search'), {'q': 'esper'})

        results = response.context['results']
        assert [row['group'] for row in results] == [group]
        assert results[0]['can_join'] is True

    def test_join_then_register_movement(self, client, saver, group, active_cycle):
        self.login(client, saver)

        response = client.post(reverse('savers:join_group', args=[group.pk]))
        assert response.status_code == 302
        assert get_current_participation(saver).cycle == active_cycle

        response = client.post(reverse('savers:movement_create'), {
            'date': '2024-02-10',
            'amount': '20000',
            'note': 'Reunión de febrero',
        })
        assert response.status_code == 302
        assert Movement.objects.get(user=saver).amount == Decimal('20000')

        response = client.get(reverse('savers:dashboard'))
        assert response.context['total_saved'] == Decimal('20000')
        assert response.context['ranking'][0]['user'] == saver

    def test_delete_movement_modal_submit(self, client, saver, participant):
        _, movement = MovementService.record_movement(participant, date(2024, 2, 1), Decimal('10'))
        self.login(client, saver)

        response = client.post(reverse('savers:movement_delete_submit', args=[movement.pk]))

        assert response['HX-Redirect'] == reverse('savers:dashboard')
        assert response['HX-Alert-Message'] == 'Reunión eliminada'
        assert not Movement.objects.filter(pk=movement.pk).exists()

    def test_new_cycle_submit_on_active_cycle_is_refused(self, client, saver, participant):
        self.login(client, saver)

        response = client.post(reverse('savers:new_cycle_submit'))

        assert response['HX-Alert-Type'] == 'error'
        assert Participant.objects.filter(pk=participant.pk).exists()

    def test_facilitator_cannot_open_saver_dashboard(self, client, facilitator):
        self.login(client, facilitator)

        response = client.get(reverse('savers:dashboard'))

        assert response.status_code == 302
        assert response.url == reverse('core:home')
