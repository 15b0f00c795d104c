from decimal import Decimal
from types import SimpleNamespace

import pytest

from reports.stats import get_monthly_summary, is_group_active_in_period


def make_group(id, members=0, savings_type='Simple', youth=False, year=2023, month=1,
               men=0, women=0, boys=0, girls=0):
    return SimpleNamespace(
        id=id,
        total_members=members,
        men=men,
        women=women,
        boys=boys,
        girls=girls,
        savings_type=savings_type,
        is_youth_group=youth,
        creation_year=year,
        creation_month=month,
    )


def make_report(group_id, amount, year=2024, month=3, attendance=None):
    return SimpleNamespace(
        id=None,
        group_id=group_id,
        year=year,
        month=month,
        amount_saved=Decimal(amount),
        average_attendance=Decimal(attendance) if attendance is not None else None,
    )


class TestEmptyPeriods:

    def test_no_groups_and_no_reports_is_none(self):
        assert get_monthly_summary([], [], 2024, 3) is None

    def test_groups_created_later_and_reports_of_other_months_is_none(self):
        groups = [make_group(1, members=10, year=2024, month=6)]
        reports = [make_report(1, '100', month=7)]

        assert get_monthly_summary(groups, reports, 2024, 3) is None


class TestScenarios:

    def test_two_groups_one_report_each(self):
        groups = [
            make_group(1, members=10, savings_type='Simple', youth=False),
            make_group(2, members=5, savings_type='Asca', youth=True),
        ]
        reports = [make_report(1, '100'), make_report(2, '50')]

        summary = get_monthly_summary(groups, reports, 2024, 3)

        assert summary['group_count'] == 2
        assert summary['report_count'] == 2
        assert summary['total_members'] == 15
        assert summary['simple_count'] == 1
        assert summary['asca_count'] == 1
        assert summary['rosca_count'] == 0
        assert summary['youth_count'] == 1
        assert summary['total_savings'] == Decimal('150')
        assert summary['savings_by_type'] == {
            'Asca': Decimal('50'),
            'Rosca': Decimal('0'),
            'Simple': Decimal('100'),
            'youth': Decimal('50'),
        }
        assert summary['month_name'] == 'Marzo'

    def test_group_created_after_period_is_excluded_but_its_report_counts(self):
        groups = [make_group(1, members=12, year=2024, month=4)]
        reports = [make_report(1, '80')]

        summary = get_monthly_summary(groups, reports, 2024, 3)

        assert summary['group_count'] == 0
        assert summary['total_members'] == 0
        assert summary['report_count'] == 1
        assert summary['total_savings'] == Decimal('80')
        assert summary['savings_by_type']['Simple'] == Decimal('80')


class TestProperties:

    @pytest.fixture
    def groups(self):
        return [
            make_group(1, members=10, savings_type='Simple', men=4, women=6),
            make_group(2, members=8, savings_type='Rosca', youth=True, boys=3, girls=5),
            make_group(3, members=7, savings_type='Asca', men=2, women=5),
            make_group(4, members=9, savings_type='Asca', youth=True, year=2024, month=3),
        ]

    def test_members_do_not_depend_on_duplicate_reports(self, groups):
        single = get_monthly_summary(groups, [make_report(1, '10')], 2024, 3)
        duplicated = get_monthly_summary(
            groups, [make_report(1, '10'), make_report(1, '10'), make_report(1, '10')], 2024, 3
        )

        assert single['total_members'] == duplicated['total_members'] == 34
        assert duplicated['report_count'] == 3
        assert duplicated['total_savings'] == Decimal('30')

    def test_type_counts_add_up_to_group_count(self, groups):
        summary = get_monthly_summary(groups, [], 2024, 3)

        assert summary['asca_count'] + summary['rosca_count'] + summary['simple_count'] == summary['group_count']

    def test_type_buckets_partition_total_savings_and_youth_is_a_subset(self, groups):
        reports = [
            make_report(1, '100.50'),
            make_report(2, '40'),
            make_report(3, '25.25'),
            make_report(4, '60'),
        ]

        summary = get_monthly_summary(groups, reports, 2024, 3)
        by_type = summary['savings_by_type']

        assert by_type['Asca'] + by_type['Rosca'] + by_type['Simple'] == summary['total_savings']
        assert by_type['youth'] == Decimal('100')
        assert by_type['youth'] <= summary['total_savings']

    def test_demographics_and_attendance(self, groups):
        reports = [make_report(1, '0', attendance='8.5'), make_report(2, '0', attendance='6')]

        summary = get_monthly_summary(groups, reports, 2024, 3)

        assert summary['total_men'] == 6
        assert summary['total_women'] == 11
        assert summary['total_children'] == 8
        assert summary['total_attendance'] == Decimal('14.5')

    def test_reports_of_other_periods_are_ignored(self, groups):
        reports = [make_report(1, '100'), make_report(1, '999', month=2), make_report(1, '999', year=2023)]

        summary = get_monthly_summary(groups, reports, 2024, 3)

        assert summary['report_count'] == 1
        assert summary['total_savings'] == Decimal('100')

    def test_report_group_resolved_from_report_when_not_in_groups(self):
        outside_group = make_group(99, savings_type='Rosca', youth=True)
        report = SimpleNamespace(id=1, group_id=99, group=outside_group, year=2024, month=3,
                                 amount_saved=Decimal('30'), average_attendance=None)

        summary = get_monthly_summary([], [report], 2024, 3)

        assert summary['savings_by_type']['Rosca'] == Decimal('30')
        assert summary['savings_by_type']['youth'] == Decimal('30')

    def test_reports_without_known_group_type_are_skipped(self, groups):
        orphan = SimpleNamespace(id=7, group_id=500, group=None, year=2024, month=3,
                                 amount_saved=Decimal('999'), average_attendance=Decimal('10'))
        odd_group = make_group(501, savings_type='Otro')
        odd = SimpleNamespace(id=8, group_id=501, group=odd_group, year=2024, month=3,
                              amount_saved=Decimal('50'), average_attendance=None)

        summary = get_monthly_summary(groups, [make_report(1, '20'), orphan, odd], 2024, 3)
        by_type = summary['savings_by_type']

        assert summary['report_count'] == 1
        assert summary['total_savings'] == Decimal('20')
        assert summary['total_attendance'] == Decimal('0')
        assert by_type['Asca'] + by_type['Rosca'] + by_type['Simple'] == summary['total_savings']


class TestGroupActivity:

    @pytest.mark.parametrize('year, month, expected', [
        (2023, 12, True),
        (2024, 2, True),
        (2024, 3, True),
        (2024, 4, False),
        (2025, 1, False),
    ])
    def test_created_on_or_before_period(self, year, month, expected):
        assert is_group_active_in_period(make_group(1, year=year, month=month), 2024, 3) is expected

    def test_without_creation_year_never_counts(self):
        assert is_group_active_in_period(make_group(1, year=None), 2024, 3) is False

    def test_missing_creation_month_counts_as_january(self):
        assert is_group_active_in_period(make_group(1, year=2024, month=None), 2024, 1) is True
