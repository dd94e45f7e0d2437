from django.contrib import admin
from django.utils.html import format_html
from .models import Post, PostStatus


@admin.register(Post)
class PostAdmin(admin.ModelAdmin):
    """
    Admin interface for posts.

    Capacity is owned by the capacity service and cannot be edited here.
    """

    list_display = [
        'seller',
        'location',
        'get_capacity_display',
        'status_badge',
        'closed_by_seller',
        'created_at',
    ]
    list_filter = ['status', 'closed_by_seller', 'created_at']
    search_fields = ['seller__email', 'seller__display_name', 'location', 'notes']
    readonly_fields = ['id', 'capacity_total', 'capacity_remaining', 'created_at', 'updated_at']
    ordering = ['-created_at']

    def get_capacity_display(self, obj):
        return f"{obj.capacity_remaining}/{obj.capacity_total}"
    get_capacity_display.short_description = 'Swipes left'

    def status_badge(self, obj):
        color = "#6B8E5E" if obj.status == PostStatus.OPEN else "#999"
        return format_html('<span style="color: {};">{}</span>', color, obj.get_status_display())
    status_badge.short_description = 'Status'

    def has_delete_permission(self, request, obj=None):
        # Posts are never deleted
        return False
