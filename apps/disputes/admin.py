from django.contrib import admin
from django.utils.html import format_html
from .models import Dispute, DisputeStatus


@admin.register(Dispute)
class DisputeAdmin(admin.ModelAdmin):
    """
    Admin interface for disputes.

    Resolving goes through the API so the audit trail stays complete.
    """

    list_display = ['request', 'opener', 'reason', 'status_badge', 'resolved_by', 'created_at']
    list_filter = ['status', 'created_at']
    search_fields = ['reason', 'description', 'opener__email', 'request__id']
    readonly_fields = [
        'id', 'request', 'opener', 'reason', 'description', 'status',
        'resolution', 'resolved_by', 'created_at', 'resolved_at',
    ]

    def status_badge(self, obj):
        color = '#B85C5C' if obj.status == DisputeStatus.OPEN else '#6B8E5E'
        return format_html(
            '<span style="color: {}; font-weight: bold;">{}</span>',
            color, obj.get_status_display()
        )
    status_badge.short_description = 'Status'

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
