from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'orders'

# Router for ViewSets
router = DefaultRouter()
router.register(r'', views.SwipeRequestViewSet, basename='request')

urlpatterns = [
    # Request ViewSet routes
    # GET    /api/requests/              - List user's requests
    # POST   /api/requests/              - File a request
    # GET    /api/requests/{id}/         - Get request details

    # Lifecycle actions
    # POST   /api/requests/{id}/accept/          - Accept (seller)
    # POST   /api/requests/{id}/decline/         - Decline (seller)
    # POST   /api/requests/{id}/mark_ordered/    - Order placed (seller)
    # POST   /api/requests/{id}/mark_picked_up/  - Picked up (buyer)
    # POST   /api/requests/{id}/mark_completed/  - Confirm completion (either)
    # POST   /api/requests/{id}/cancel/          - Cancel (either)
    # GET    /api/requests/{id}/audit/           - Audit trail

    path('', include(router.urls)),
]
