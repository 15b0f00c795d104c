from django.contrib import admin

from .models import Participant, Movement


@admin.register(Participant)
class ParticipantAdmin(admin.ModelAdmin):
    list_display = ['user', 'cycle', 'personal_goal', 'created_at']
    search_fields = ['user__email', 'user__first_name', 'user__last_name', 'cycle__group__name']
    list_select_related = ['user', 'cycle', 'cycle__group']


@admin.register(Movement)
class MovementAdmin(admin.ModelAdmin):
    list_display = ['user', 'cycle', 'date', 'amount', 'note']
    list_filter = ['date']
    search_fields = ['user__email', 'note']
    date_hierarchy = 'date'
