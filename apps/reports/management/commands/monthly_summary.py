# reports/management/commands/monthly_summary.py

"""
Print the monthly summary a user would see on their dashboard.

USAGE EXAMPLES:
===============

# Summary for a director's country
python manage.py monthly_summary --username director@example.com --year 2024 --month 3

# Also write the PDF export
python manage.py monthly_summary --username director@example.com --year 2024 --month 3 --pdf /tmp/marzo.pdf
"""

from django.core.management.base import BaseCommand, CommandError
from django.contrib.auth.models import User
from django.db.models import Q
import logging

from reports.stats import get_scoped_monthly_summary
from reports.utils import build_monthly_summary_pdf
from savings_groups.utils import get_scope_label
from core.utils import format_money, get_month_name

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = 'Print (and optionally export as PDF) the monthly summary over a user\'s scope'

    def add_arguments(self, parser):
        parser.add_argument('--username', type=str, required=True, help='Username or email of the acting user')
        parser.add_argument('--year', type=int, required=True, help='Year of the period')
        parser.add_argument('--month', type=int, required=True, help='Month of the period (1-12)')
        parser.add_argument('--pdf', type=str, help='Write the summary PDF to this path')

    def handle(self, *args, **options):
        username = options['username']
        year = options['year']
        month = options['month']

        if not 1 <= month <= 12:
            raise CommandError("--month must be between 1 and 12")

        user = User.objects.filter(Q(username__iexact=username) | Q(email__iexact=username)).first()
        if user is None:
            raise CommandError(f"User '{username}' not found")

        summary = get_scoped_monthly_summary(user, year, month)
        month_name = get_month_name(month)
        scope = get_scope_label(user)

        self.stdout.write(self.style.SUCCESS('=' * 60))
        self.stdout.write(self.style.SUCCESS(f"MONTHLY SUMMARY {month_name} {year} - {scope}"))
        self.stdout.write(self.style.SUCCESS('=' * 60))

        if summary is None:
            self.stdout.write(self.style.WARNING("No groups or reports for this period."))
            return

        self.stdout.write(f"Reports:           {summary['report_count']}")
        self.stdout.write(f"Groups:            {summary['group_count']}")
        self.stdout.write(f"Members:           {summary['total_members']}")
        self.stdout.write(f"Attendance:        {summary['total_attendance']}")
        self.stdout.write(f"Total saved:       {format_money(summary['total_savings'])}")
        self.stdout.write(
            f"Types:             Asca {summary['asca_count']} / Rosca {summary['rosca_count']} / "
            f"Simple {summary['simple_count']} / Youth {summary['youth_count']}"
        )
        self.stdout.write(
            f"Demographics:      men {summary['total_men']} / women {summary['total_women']} / "
            f"children {summary['total_children']}"
        )
        for bucket, amount in summary['savings_by_type'].items():
            self.stdout.write(f"Saved ({bucket}):".ljust(19) + format_money(amount))

        if options.get('pdf'):
            pdf = build_monthly_summary_pdf(
                summary,
                month_name,
                year,
                country=scope,
                director_name=user.get_full_name() or user.email,
            )
            with open(options['pdf'], 'wb') as handle:
                handle.write(pdf)
            self.stdout.write(self.style.SUCCESS(f"PDF written to {options['pdf']}"))
            logger.info(f"Monthly summary PDF for {month_name} {year} written to {options['pdf']}")
