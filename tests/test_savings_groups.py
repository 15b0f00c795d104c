from datetime import date
from types import SimpleNamespace

import pytest
from django.core.exceptions import ValidationError

from savings_groups.forms import SavingsGroupForm, CycleForm
from savings_groups.models import SavingsGroup, Cycle
from savings_groups.utils import (
    classify_cycle_status,
    get_cycle_status_counts,
    get_groups_for_user,
    get_facilitators_for_user,
    get_coordinators_for_user,
    WITHOUT_CYCLE,
    ACTIVE,
    TERMINATED,
)


class TestCycleClassification:

    def test_no_cycles(self):
        assert classify_cycle_status([]) == WITHOUT_CYCLE

    def test_latest_cycle_decides(self):
        cycles = [SimpleNamespace(id=1, status='ACTIVE'), SimpleNamespace(id=2, status='TERMINATED')]
        assert classify_cycle_status(cycles) == TERMINATED

    def test_latest_active_cycle_after_terminated_one(self):
        cycles = [SimpleNamespace(id=3, status='ACTIVE'), SimpleNamespace(id=2, status='TERMINATED')]
        assert classify_cycle_status(cycles) == ACTIVE

    @pytest.mark.django_db
    def test_status_counts(self, make_group, facilitator):
        without = make_group(facilitator, name='Sin ciclo')
        active = make_group(facilitator, name='Activo')
        terminated = make_group(facilitator, name='Terminado')
        Cycle.objects.create(group=active, name='Ciclo uno', start_date=date(2024, 1, 1))
        Cycle.objects.create(group=terminated, name='Ciclo dos', start_date=date(2023, 1, 1),
                             status=Cycle.TERMINATED)

        counts = get_cycle_status_counts(SavingsGroup.objects.filter(pk__in=[without.pk, active.pk, terminated.pk]))

        assert counts == {'without_cycle': 1, 'active': 1, 'terminated': 1}


@pytest.mark.django_db
class TestCycleModel:

    def test_second_active_cycle_is_refused(self, active_cycle, group):
        with pytest.raises(ValidationError) as excinfo:
            Cycle.objects.create(group=group, name='Otro ciclo', start_date=date(2024, 6, 1))

        assert 'status' in excinfo.value.message_dict

    def test_end_before_start_is_refused(self, group):
        with pytest.raises(ValidationError):
            Cycle.objects.create(group=group, name='Ciclo malo', start_date=date(2024, 6, 1),
                                 end_date=date(2024, 5, 1))

    def test_expected_end_date_defaults_to_group_duration(self, group):
        group.cycle_duration_months = 6
        group.save()
        cycle = Cycle.objects.create(group=group, name='Ciclo corto', start_date=date(2024, 1, 31))

        assert cycle.expected_end_date == date(2024, 7, 31)

    def test_latest_cycle_property(self, group, active_cycle):
        active_cycle.status = Cycle.TERMINATED
        active_cycle.save()
        newer = Cycle.objects.create(group=group, name='Ciclo 2025', start_date=date(2025, 1, 1))

        assert group.latest_cycle == newer
        assert group.cycle_status == ACTIVE


@pytest.mark.django_db
class TestScopes:

    def test_facilitator_sees_own_groups(self, make_group, facilitator, other_facilitator):
        own = make_group(facilitator, name='Propio')
        make_group(other_facilitator, name='Ajeno')

        assert list(get_groups_for_user(facilitator)) == [own]

    def test_coordinator_sees_facilitators_of_the_zone(self, coordinator, facilitator, other_facilitator,
                                                       make_group):
        in_zone = make_group(facilitator, name='Barranquilla uno')
        make_group(other_facilitator, name='Arauca uno')

        assert list(get_facilitators_for_user(coordinator)) == [facilitator]
        assert list(get_groups_for_user(coordinator)) == [in_zone]

    def test_coordinator_zone_is_case_insensitive(self, coordinator, facilitator):
        facilitator.profile.city = 'BARRANQUILLA'
        facilitator.profile.save()

        assert facilitator in get_facilitators_for_user(coordinator)

    def test_director_sees_country(self, director, facilitator, other_facilitator, venezuelan_facilitator,
                                   coordinator, make_group):
        make_group(facilitator, name='CO uno')
        make_group(other_facilitator, name='CO dos')
        make_group(venezuelan_facilitator, name='VE uno')

        assert set(get_facilitators_for_user(director)) == {facilitator, other_facilitator}
        assert list(get_coordinators_for_user(director)) == [coordinator]
        assert sorted(g.name for g in get_groups_for_user(director)) == ['CO dos', 'CO uno']

    def test_saver_sees_nothing(self, saver, group):
        assert not get_groups_for_user(saver).exists()
        assert not get_facilitators_for_user(saver).exists()


@pytest.mark.django_db
class TestSavingsGroupForm:

    def form_data(self, **overrides):
        data = {
            'name': 'Grupo Nuevo',
            'savings_type': 'Asca',
            'is_youth_group': '',
            'operating_country': 'CO',
            'operating_city': 'Barranquilla',
            'creation_year': '2024',
            'creation_month': '3',
            'cycle_duration_months': '12',
            'men': '3',
            'women': '5',
            'boys': '1',
            'girls': '2',
        }
        data.update(overrides)
        return data

    def test_total_members_is_sum_of_counts(self, facilitator):
        form = SavingsGroupForm(data=self.form_data())
        assert form.is_valid(), form.errors

        group = form.save(commit=False)
        group.facilitator = facilitator
        group.save()

        assert group.total_members == 11

    @pytest.mark.parametrize('field, value', [
        ('name', 'ab'),
        ('creation_year', '1999'),
        ('creation_month', '13'),
        ('cycle_duration_months', '0'),
        ('men', '-1'),
    ])
    def test_invalid_values(self, field, value):
        form = SavingsGroupForm(data=self.form_data(**{field: value}))

        assert not form.is_valid()
        assert field in form.errors

    def test_city_must_belong_to_country(self):
        form = SavingsGroupForm(data=self.form_data(operating_country='VE', operating_city='Barranquilla'))

        assert not form.is_valid()
        assert 'operating_city' in form.errors


@pytest.mark.django_db
class TestCycleForm:

    def test_valid_cycle_without_end_date(self, group):
        form = CycleForm(data={'name': 'Ciclo 2024', 'start_date': '2024-01-01', 'end_date': '', 'status': 'ACTIVE'},
                         group=group)

        assert form.is_valid(), form.errors
        cycle = form.save()
        assert cycle.group == group
        assert cycle.end_date == date(2025, 1, 1)

    def test_short_name_and_end_before_start(self, group):
        form = CycleForm(data={'name': 'C', 'start_date': '2024-05-01', 'end_date': '2024-04-01', 'status': 'ACTIVE'},
                         group=group)

        assert not form.is_valid()
        assert 'name' in form.errors
        assert 'end_date' in form.errors

    def test_second_active_cycle(self, group, active_cycle):
        form = CycleForm(data={'name': 'Ciclo dos', 'start_date': '2024-05-01', 'end_date': '', 'status': 'ACTIVE'},
                         group=group)

        assert not form.is_valid()
        assert 'status' in form.errors
