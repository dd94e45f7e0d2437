from django.contrib import admin
from .models import Rating


@admin.register(Rating)
class RatingAdmin(admin.ModelAdmin):
    list_display = ['request', 'rater', 'ratee', 'stars', 'created_at']
    list_filter = ['stars', 'created_at']
    search_fields = ['rater__email', 'ratee__email', 'comment']
    readonly_fields = ['id', 'request', 'rater', 'ratee', 'stars', 'created_at']

    def has_add_permission(self, request):
        # Ratings go through submit_rating so averages stay in sync
        return False
