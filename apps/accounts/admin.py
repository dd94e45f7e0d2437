# ==========================================
# apps/accounts/admin.py
# ==========================================

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.html import format_html
from .models import User, RolePreference


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    Admin interface for exchange users.

    Provides:
    - User listing with profile statistics
    - Filtering by role, ban and staff status
    - Bulk ban/unban actions for moderation
    """

    list_display = [
        'email',
        'display_name',
        'role_badge',
        'completed_count',
        'cancel_count',
        'rating_avg',
        'is_banned_badge',
        'created_at',
    ]

    list_filter = [
        'role_preference',
        'is_banned',
        'is_active',
        'is_staff',
        'created_at',
    ]

    search_fields = [
        'email',
        'display_name',
    ]

    ordering = ['-created_at']
    date_hierarchy = 'created_at'

    # Remove username field references from BaseUserAdmin
    fieldsets = (
        ('Basic Information', {
            'fields': ('email', 'display_name', 'role_preference', 'password')
        }),
        ('Exchange Statistics', {
            'fields': ('rating_avg', 'completed_count', 'cancel_count'),
        }),
        ('Moderation', {
            'fields': ('is_banned',),
        }),
        ('Permissions', {
            'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'last_login'),
            'classes': ('collapse',),
        }),
    )

    add_fieldsets = (
        ('Create User', {
            'classes': ('wide',),
            'fields': ('email', 'display_name', 'role_preference', 'password1', 'password2'),
        }),
        ('Permissions', {
            'fields': ('is_active', 'is_staff', 'is_superuser'),
        }),
    )

    # Statistics are owned by the services layer
    readonly_fields = [
        'rating_avg',
        'completed_count',
        'cancel_count',
        'created_at',
        'last_login',
    ]

    filter_horizontal = ['groups', 'user_permissions']

    def role_badge(self, obj):
        """Display role preference as colored badge."""
        colors = {
            RolePreference.BUYER: ('#3B82F6', 'white'),
            RolePreference.SELLER: ('#22C55E', 'white'),
            RolePreference.ADMIN: ('#F97316', 'white'),
        }
        bg, fg = colors.get(obj.role_preference, ('#ccc', '#666'))
        return format_html(
            '<span style="background: {}; color: {}; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            bg, fg, obj.get_role_preference_display()
        )
    role_badge.short_description = 'Role'
    role_badge.admin_order_field = 'role_preference'

    def is_banned_badge(self, obj):
        """Display ban status as colored badge."""
        bg, label = ('#B85C5C', 'Banned') if obj.is_banned else ('#6B8E5E', 'OK')
        return format_html(
            '<span style="background: {}; color: white; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            bg, label
        )
    is_banned_badge.short_description = 'Standing'
    is_banned_badge.admin_order_field = 'is_banned'

    actions = [
        'ban_users',
        'unban_users',
    ]

    @admin.action(description='Ban selected users from the exchange')
    def ban_users(self, request, queryset):
        """Ban selected users (excludes staff for safety)."""
        safe_queryset = queryset.filter(is_staff=False, is_superuser=False)
        count = safe_queryset.update(is_banned=True)
        skipped = queryset.count() - count
        msg = f'Banned {count} user(s).'
        if skipped:
            msg += f' Skipped {skipped} staff user(s).'
        self.message_user(request, msg)

    @admin.action(description='Lift ban for selected users')
    def unban_users(self, request, queryset):
        count = queryset.update(is_banned=False)
        self.message_user(request, f'Unbanned {count} user(s).')
