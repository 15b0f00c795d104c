from django.contrib import admin

from .models import SavingsGroup, Cycle


class CycleInline(admin.TabularInline):
    model = Cycle
    extra = 0
    fields = ['name', 'start_date', 'end_date', 'status']


@admin.register(SavingsGroup)
class SavingsGroupAdmin(admin.ModelAdmin):
    list_display = ['name', 'savings_type', 'is_youth_group', 'facilitator', 'operating_country', 'operating_city', 'total_members']
    list_filter = ['savings_type', 'is_youth_group', 'operating_country']
    search_fields = ['name', 'operating_city', 'facilitator__email']
    list_select_related = ['facilitator']
    inlines = [CycleInline]


@admin.register(Cycle)
class CycleAdmin(admin.ModelAdmin):
    list_display = ['name', 'group', 'start_date', 'end_date', 'status']
    list_filter = ['status']
    search_fields = ['name', 'group__name']
