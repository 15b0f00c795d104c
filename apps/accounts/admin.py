# accounts/admin.py

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.contrib.auth.models import User

from .models import UserProfile


# =============================================================================
# USER PROFILE INLINE
# =============================================================================

class UserProfileInline(admin.StackedInline):
    model = UserProfile
    can_delete = False
    verbose_name = 'Profile'
    verbose_name_plural = 'Profile'
    fk_name = 'user'

    fieldsets = (
        ('Role', {
            'fields': ('role', 'coordination_zone')
        }),
        ('Residence', {
            'fields': ('country', 'city')
        }),
        ('Personal Information', {
            'fields': ('phone', 'church', 'birth_date'),
            'classes': ('collapse',)
        }),
    )


# =============================================================================
# USER ADMIN
# =============================================================================

class CustomUserAdmin(BaseUserAdmin):
    inlines = (UserProfileInline,)
    list_display = ('username', 'email', 'first_name', 'last_name', 'get_role', 'is_active')
    list_select_related = ('profile',)
    list_filter = BaseUserAdmin.list_filter + ('profile__role',)

    def get_inline_instances(self, request, obj=None):
        # The profile is created by signal on the first save
        if obj is None:
            return []
        return super().get_inline_instances(request, obj)

    @admin.display(description='Role', ordering='profile__role')
    def get_role(self, obj):
        profile = getattr(obj, 'profile', None)
        return profile.get_role_display() if profile else '-'


admin.site.unregister(User)
admin.site.register(User, CustomUserAdmin)


# =============================================================================
# USER PROFILE ADMIN
# =============================================================================

@admin.register(UserProfile)
class UserProfileAdmin(admin.ModelAdmin):
    list_display = ('user', 'role', 'country', 'city', 'coordination_zone', 'created_at')
    list_filter = ('role', 'country', 'city')
    search_fields = ('user__username', 'user__email', 'user__first_name', 'user__last_name', 'city')
    raw_id_fields = ('user',)
    readonly_fields = ('created_at', 'updated_at')
