import json
from datetime import date

import pytest
from django.urls import reverse
from openpyxl import load_workbook
from io import BytesIO

from reports.models import MonthlyReport
from savings_groups.models import SavingsGroup, Cycle

from .conftest import PASSWORD


def login(client, user):
    assert client.login(username=user.email, password=PASSWORD)


# =============================================================================
# HOME & ROLE ROUTING
# =============================================================================

@pytest.mark.django_db
class TestRoleRouting:

    def test_anonymous_home_goes_to_login(self, client):
        response = client.get(reverse('core:home'))

        assert response.status_code == 302
        assert reverse('accounts:login') in response.url

    @pytest.mark.parametrize('user_fixture, url_name', [
        ('facilitator', 'core:facilitator_dashboard'),
        ('coordinator', 'core:coordinator_dashboard'),
        ('director', 'core:director_dashboard'),
        ('saver', 'savers:dashboard'),
    ])
    def test_home_redirects_by_role(self, client, request, user_fixture, url_name):
        login(client, request.getfixturevalue(user_fixture))

        response = client.get(reverse('core:home'))

        assert response.status_code == 302
        assert response.url == reverse(url_name)

    def test_wrong_role_is_sent_home(self, client, saver):
        login(client, saver)

        response = client.get(reverse('core:director_dashboard'))

        assert response.status_code == 302
        assert response.url == reverse('core:home')

    @pytest.mark.parametrize('user_fixture, url_name', [
        ('facilitator', 'core:facilitator_dashboard'),
        ('coordinator', 'core:coordinator_dashboard'),
        ('director', 'core:director_dashboard'),
    ])
    def test_dashboards_render(self, client, request, user_fixture, url_name, group, active_cycle, make_report):
        make_report(group, year=2024, month=3, amount='250000')
        login(client, request.getfixturevalue(user_fixture))

        response = client.get(reverse(url_name), {'year': 2024, 'month': 3})

        assert response.status_code == 200
        assert response.context['summary']['total_savings'] == 250000
        assert response.context['month_name'] == 'Marzo'


# =============================================================================
# FACILITATOR DRILL-DOWN
# =============================================================================

@pytest.mark.django_db
class TestFacilitatorDrillDown:

    def test_coordinator_sees_zone_facilitators_only(self, client, coordinator, facilitator, other_facilitator):
        login(client, coordinator)

        response = client.get(reverse('core:facilitator_list'))

        facilitators = [row['facilitator'] for row in response.context['facilitator_rows']]
        assert facilitators == [facilitator]

    def test_detail_outside_scope_is_404(self, client, coordinator, other_facilitator):
        login(client, coordinator)

        response = client.get(reverse('core:facilitator_detail', args=[other_facilitator.pk]))

        assert response.status_code == 404

    def test_detail_in_scope(self, client, director, facilitator, group, make_report):
        make_report(group, year=2024, month=3)
        login(client, director)

        response = client.get(reverse('core:facilitator_detail', args=[facilitator.pk]), {'year': 2024, 'month': 3})

        assert response.status_code == 200
        assert [row['group'] for row in response.context['group_rows']] == [group]
        assert response.context['report_totals']['report_count'] == 1

    def test_director_cannot_see_other_country(self, client, director, venezuelan_facilitator):
        login(client, director)

        response = client.get(reverse('core:facilitator_detail', args=[venezuelan_facilitator.pk]))

        assert response.status_code == 404


# =============================================================================
# GROUPS & CYCLES
# =============================================================================

@pytest.mark.django_db
class TestGroupViews:

    def test_create_group_computes_total_members(self, client, facilitator):
        login(client, facilitator)

        response = client.post(reverse('savings_groups:group_create'), {
            'name': 'Grupo Nuevo Amanecer',
            'savings_type': SavingsGroup.ASCA,
            'operating_country': 'CO',
            'operating_city': 'Barranquilla',
            'operating_zone': '',
            'men': '3',
            'women': '5',
            'boys': '1',
            'girls': '2',
            'creation_year': '2024',
            'creation_month': '2',
            'cycle_duration_months': '12',
        })

        group = SavingsGroup.objects.get(name='Grupo Nuevo Amanecer')
        assert response.status_code == 302
        assert group.facilitator == facilitator
        assert group.total_members == 11

    def test_other_facilitator_cannot_edit(self, client, other_facilitator, group):
        login(client, other_facilitator)

        response = client.get(reverse('savings_groups:group_edit', args=[group.pk]))

        assert response.status_code == 404

    def test_group_delete_submit(self, client, facilitator, group):
        login(client, facilitator)

        response = client.post(reverse('savings_groups:group_delete_submit', args=[group.pk]))

        assert response['HX-Redirect'] == reverse('savings_groups:group_list')
        assert response['HX-Close-Modal'] == 'true'
        assert not SavingsGroup.objects.filter(pk=group.pk).exists()

    def test_search_json_is_scoped(self, client, coordinator, group, make_group, other_facilitator):
        make_group(other_facilitator, name='Grupo Esperanza Arauca')
        login(client, coordinator)

        response = client.get(reverse('savings_groups:group_search'), {'q': 'esperanza'})

        data = json.loads(response.content)
        assert [row['id'] for row in data['results']] == [group.pk]
        assert data['results'][0]['cycle_status'] == 'WITHOUT_CYCLE'
        assert data['pagination']['total_count'] == 1

    def test_quick_stats(self, client, facilitator, group, active_cycle):
        login(client, facilitator)

        data = json.loads(client.get(reverse('savings_groups:group_quick_stats')).content)

        assert data['total_groups'] == 1
        assert data['cycle_status']['active'] == 1
        assert data['demographics']['total_members'] == 10


# =============================================================================
# REPORTS & EXPORTS
# =============================================================================

@pytest.mark.django_db
class TestReportViews:

    def test_report_delete_submit(self, client, facilitator, group, make_report):
        report = make_report(group)
        login(client, facilitator)

        response = client.post(reverse('reports:report_delete_submit', args=[report.pk]))

        assert response['HX-Redirect'] == reverse('reports:report_list')
        assert not MonthlyReport.objects.filter(pk=report.pk).exists()

    def test_monthly_summary_json(self, client, director, group, make_report):
        make_report(group, year=2024, month=3, amount='1500.50')
        login(client, director)

        data = json.loads(client.get(reverse('reports:monthly_summary'), {'year': 2024, 'month': 3}).content)

        assert data['month_name'] == 'Marzo'
        assert data['summary']['report_count'] == 1
        assert data['summary']['total_savings'] == '1500.50'

    def test_monthly_summary_json_empty_period(self, client, director):
        login(client, director)

        data = json.loads(client.get(reverse('reports:monthly_summary'), {'year': 2024, 'month': 3}).content)

        assert data['summary'] is None

    def test_export_pdf(self, client, director, group, make_report):
        make_report(group, year=2024, month=3)
        login(client, director)

        response = client.get(reverse('reports:export_summary_pdf'), {'year': 2024, 'month': 3})

        assert response['Content-Type'] == 'application/pdf'
        assert 'Reporte_Mensual_Marzo_2024.pdf' in response['Content-Disposition']
        assert response.content.startswith(b'%PDF')

    def test_export_pdf_without_data_redirects(self, client, director):
        login(client, director)

        response = client.get(reverse('reports:export_summary_pdf'), {'year': 2024, 'month': 3})

        assert response.status_code == 302
        assert response.url.startswith(reverse('reports:country_reports'))

    def test_export_excel(self, client, director, group, make_report):
        make_report(group, year=2024, month=3)
        make_report(group, year=2024, month=4)
        login(client, director)

        response = client.get(reverse('reports:export_reports_excel'), {'year': 2024, 'month': 3})

        assert 'Reportes_Marzo_2024.xlsx' in response['Content-Disposition']
        sheet = load_workbook(BytesIO(response.content)).active
        assert sheet.max_row == 2
        assert sheet.cell(row=2, column=2).value == group.name

    def test_exports_are_director_only(self, client, coordinator):
        login(client, coordinator)

        response = client.get(reverse('reports:export_reports_excel'))

        assert response.status_code == 302
        assert response.url == reverse('core:home')


@pytest.mark.django_db
def test_cycle_delete_submit_redirects_to_group(client, facilitator, group):
    cycle = Cycle.objects.create(group=group, name='Ciclo viejo', start_date=date(2023, 1, 1),
                                 status=Cycle.TERMINATED)
    login(client, facilitator)

    response = client.post(reverse('savings_groups:cycle_delete_submit', args=[cycle.pk]))

    assert response['HX-Redirect'] == reverse('savings_groups:group_detail', args=[group.pk])
    assert not Cycle.objects.filter(pk=cycle.pk).exists()
