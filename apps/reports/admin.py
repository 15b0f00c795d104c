from django.contrib import admin

from .models import MonthlyReport


@admin.register(MonthlyReport)
class MonthlyReportAdmin(admin.ModelAdmin):
    list_display = ['group', 'facilitator', 'year', 'month', 'meetings_count', 'amount_saved']
    list_filter = ['year', 'month', 'group__savings_type']
    search_fields = ['group__name', 'facilitator__email', 'comments']
    list_select_related = ['group', 'facilitator']
