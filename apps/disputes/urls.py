from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'disputes'

router = DefaultRouter()
router.register(r'', views.DisputeViewSet, basename='dispute')

urlpatterns = [
    # GET    /api/disputes/               - List visible disputes
    # POST   /api/disputes/               - Open dispute
    # GET    /api/disputes/{id}/          - Get dispute
    # POST   /api/disputes/{id}/resolve/  - Resolve (admin)
    path('', include(router.urls)),
]
