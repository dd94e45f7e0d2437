from django.contrib import admin
from django.utils.html import format_html
from .models import SwipeRequest, RequestStatus, AuditLogEntry, AuditOutcome


STATUS_COLORS = {
    RequestStatus.REQUESTED: ('#E5C49A', '#2C1810'),
    RequestStatus.ACCEPTED: ('#A47449', 'white'),
    RequestStatus.ORDERED: ('#5E7E8E', 'white'),
    RequestStatus.PICKED_UP: ('#7E6B8E', 'white'),
    RequestStatus.COMPLETED: ('#6B8E5E', 'white'),
    RequestStatus.CANCELLED: ('#999', 'white'),
    RequestStatus.DISPUTED: ('#B85C5C', 'white'),
}


class AuditLogInline(admin.TabularInline):
    """Read-only audit trail within a request."""
    model = AuditLogEntry
    extra = 0
    fields = ['created_at', 'actor', 'action', 'outcome', 'from_status', 'to_status']
    readonly_fields = fields
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False

    def has_change_permission(self, request, obj=None):
        return False


@admin.register(SwipeRequest)
class SwipeRequestAdmin(admin.ModelAdmin):
    """
    Admin interface for swipe requests.

    Requests are changed only through the transition services, so every
    field is read-only here.
    """

    list_display = [
        'id',
        'buyer',
        'seller',
        'status_badge',
        'buyer_completed',
        'seller_completed',
        'version',
        'updated_at',
    ]
    list_filter = ['status', 'created_at']
    search_fields = ['id', 'buyer__email', 'seller__email', 'items_text', 'order_id_text']
    readonly_fields = [
        'id', 'post', 'buyer', 'seller', 'status', 'items_text', 'instructions',
        'est_total', 'ordered_proof_path', 'order_id_text', 'buyer_completed',
        'seller_completed', 'completed_at', 'cancel_reason', 'cancelled_by',
        'version', 'created_at', 'updated_at',
    ]
    inlines = [AuditLogInline]

    def status_badge(self, obj):
        bg, fg = STATUS_COLORS.get(obj.status, ('#ccc', '#666'))
        return format_html(
            '<span style="background: {}; color: {}; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            bg, fg, obj.get_status_display()
        )
    status_badge.short_description = 'Status'

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(AuditLogEntry)
class AuditLogEntryAdmin(admin.ModelAdmin):
    list_display = ['created_at', 'request', 'actor', 'action', 'outcome_badge', 'from_status', 'to_status']
    list_filter = ['outcome', 'action', 'created_at']
    search_fields = ['request__id', 'actor__email']
    readonly_fields = [
        'id', 'request', 'actor', 'action', 'outcome', 'from_status',
        'to_status', 'metadata', 'created_at',
    ]

    def outcome_badge(self, obj):
        color = '#6B8E5E' if obj.outcome == AuditOutcome.APPLIED else '#B85C5C'
        return format_html(
            '<span style="color: {}; font-weight: bold;">{}</span>',
            color, obj.get_outcome_display()
        )
    outcome_badge.short_description = 'Outcome'

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
