from decimal import Decimal
from io import BytesIO

import pytest
from django.core.management import call_command, CommandError
from openpyxl import load_workbook

from reports.forms import MonthlyReportForm
from reports.models import MonthlyReport
from reports.stats import get_scoped_monthly_summary, get_reports_for_user, get_report_totals
from reports.utils import (
    build_monthly_summary_pdf,
    build_reports_workbook,
    get_summary_pdf_filename,
    get_reports_excel_filename,
)
from savings_groups.models import SavingsGroup


@pytest.fixture
def march_summary():
    return {
        'year': 2024,
        'month': 3,
        'month_name': 'Marzo',
        'report_count': 2,
        'group_count': 2,
        'total_members': 15,
        'total_attendance': Decimal('12.5'),
        'total_savings': Decimal('150'),
        'asca_count': 1,
        'rosca_count': 0,
        'simple_count': 1,
        'youth_count': 1,
        'total_men': 6,
        'total_women': 7,
        'total_children': 2,
        'savings_by_type': {
            'Asca': Decimal('50'),
            'Rosca': Decimal('0'),
            'Simple': Decimal('100'),
            'youth': Decimal('50'),
        },
    }


class TestExports:

    def test_filenames(self):
        assert get_summary_pdf_filename('Marzo', 2024) == 'Reporte_Mensual_Marzo_2024.pdf'
        assert get_reports_excel_filename('Marzo', 2024) == 'Reportes_Marzo_2024.xlsx'

    def test_pdf_is_a_pdf_document(self, march_summary):
        pdf = build_monthly_summary_pdf(march_summary, 'Marzo', 2024, 'Colombia', 'Marta López')

        assert pdf.startswith(b'%PDF')
        assert len(pdf) > 1000

    def test_pdf_with_markup_characters_in_names(self, march_summary, settings):
        settings.OPEN_HANDS = dict(settings.OPEN_HANDS, ORGANIZATION_NAME='Manos <Abiertas> & Co')

        pdf = build_monthly_summary_pdf(march_summary, 'Marzo', 2024, 'Colombia & <Venezuela>', 'Marta <López>')

        assert pdf.startswith(b'%PDF')

    @pytest.mark.django_db
    def test_workbook_has_one_row_per_report(self, group, make_report):
        make_report(group, amount='100')
        make_report(group, amount='25.50', comments='Segunda reunión')

        workbook = build_reports_workbook(MonthlyReport.objects.select_related('group', 'facilitator'), 'Marzo', 2024)
        buffer = BytesIO()
        workbook.save(buffer)
        sheet = load_workbook(BytesIO(buffer.getvalue())).active

        assert sheet.title == 'Marzo 2024'
        assert sheet.max_row == 3
        assert sheet.cell(row=1, column=2).value == 'Grupo'
        assert sorted(sheet.cell(row=r, column=10).value for r in (2, 3)) == [25.5, 100.0]


@pytest.mark.django_db
class TestMonthlyReportForm:

    def form_data(self, group, /, **overrides):
        data = {
            'group': str(group.pk),
            'year': '2024',
            'month': '3',
            'meetings_count': '4',
            'average_attendance': '9.5',
            'amount_saved': '1500',
            'comments': '',
        }
        data.update(overrides)
        return data

    def test_valid_report_is_owned_by_facilitator(self, facilitator, group):
        form = MonthlyReportForm(data=self.form_data(group), facilitator=facilitator)
        assert form.is_valid(), form.errors

        report = form.save()

        assert report.facilitator == facilitator
        assert report.amount_saved == Decimal('1500')

    def test_group_of_another_facilitator_is_refused(self, other_facilitator, group):
        form = MonthlyReportForm(data=self.form_data(group), facilitator=other_facilitator)

        assert not form.is_valid()
        assert 'group' in form.errors

    @pytest.mark.parametrize('field, value', [
        ('year', '2019'),
        ('month', '0'),
        ('meetings_count', '-1'),
        ('average_attendance', '-2'),
        ('amount_saved', '-5'),
    ])
    def test_out_of_range_values(self, facilitator, group, field, value):
        form = MonthlyReportForm(data=self.form_data(group, **{field: value}), facilitator=facilitator)

        assert not form.is_valid()
        assert field in form.errors

    def test_missing_group_message(self, facilitator, group):
        form = MonthlyReportForm(data=self.form_data(group, group=''), facilitator=facilitator)

        assert not form.is_valid()
        assert form.errors['group'] == ['Debes seleccionar un grupo']


@pytest.mark.django_db
class TestScopedSummary:

    def test_director_summary_covers_the_country(self, director, facilitator, venezuelan_facilitator,
                                                 make_group, make_report):
        simple = make_group(facilitator, name='Simple', savings_type='Simple', men=4, women=6)
        asca = make_group(facilitator, name='Asca', savings_type='Asca', is_youth_group=True, men=2, women=3)
        foreign = make_group(venezuelan_facilitator, name='Fuera', savings_type='Rosca')
        make_report(simple, amount='100')
        make_report(asca, amount='50')
        make_report(foreign, amount='999')

        summary = get_scoped_monthly_summary(director, 2024, 3)

        assert summary['group_count'] == 2
        assert summary['total_members'] == 15
        assert summary['total_savings'] == Decimal('150')
        assert summary['savings_by_type']['youth'] == Decimal('50')

    def test_summary_is_invalidated_after_a_new_report(self, facilitator, group, make_report):
        make_report(group, amount='100')
        assert get_scoped_monthly_summary(facilitator, 2024, 3)['total_savings'] == Decimal('100')

        make_report(group, amount='20')

        assert get_scoped_monthly_summary(facilitator, 2024, 3)['total_savings'] == Decimal('120')

    def test_summary_is_invalidated_after_group_delete(self, facilitator, group, make_report):
        make_report(group, amount='100')
        assert get_scoped_monthly_summary(facilitator, 2024, 3) is not None

        group.delete()

        assert get_scoped_monthly_summary(facilitator, 2024, 3) is None

    def test_facilitator_drill_down(self, coordinator, facilitator, make_user, make_group, make_report):
        colleague = make_user('colega@example.com', 'FACILITATOR', city='Barranquilla')
        make_report(make_group(facilitator, name='Uno'), amount='10')
        make_report(make_group(colleague, name='Dos'), amount='30')

        zone = get_scoped_monthly_summary(coordinator, 2024, 3)
        only_facilitator = get_scoped_monthly_summary(coordinator, 2024, 3, facilitator=facilitator)

        assert zone['total_savings'] == Decimal('40')
        assert only_facilitator['total_savings'] == Decimal('10')

    def test_reports_for_user_and_totals(self, coordinator, group, other_facilitator, make_group, make_report):
        make_report(group, amount='10')
        make_report(group, amount='15', month=4)
        make_report(make_group(other_facilitator, name='Arauca'), amount='99')

        reports = get_reports_for_user(coordinator, year=2024, month=3)

        assert get_report_totals(reports) == {'report_count': 1, 'total_saved': Decimal('10')}
        assert get_reports_for_user(coordinator).count() == 2


@pytest.mark.django_db
class TestMonthlySummaryCommand:

    def test_prints_summary_and_writes_pdf(self, director, group, make_report, tmp_path, capsys):
        make_report(group, amount='100')
        pdf_path = tmp_path / 'marzo.pdf'

        call_command('monthly_summary', username=director.email, year=2024, month=3, pdf=str(pdf_path))

        output = capsys.readouterr().out
        assert 'Marzo 2024' in output
        assert '$100,00' in output
        assert pdf_path.read_bytes().startswith(b'%PDF')

    def test_empty_period(self, director, capsys):
        call_command('monthly_summary', username=director.email, year=2024, month=3)

        assert 'No groups or reports' in capsys.readouterr().out

    def test_unknown_user(self):
        with pytest.raises(CommandError):
            call_command('monthly_summary', username='nadie@example.com', year=2024, month=3)
