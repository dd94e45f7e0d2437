from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'posts'

# Router for ViewSets
router = DefaultRouter()
router.register(r'', views.PostViewSet, basename='post')

urlpatterns = [
    # GET    /api/posts/                - List open posts
    # POST   /api/posts/                - Publish a post
    # GET    /api/posts/mine/           - Current user's posts
    # GET    /api/posts/{id}/           - Get post details
    # POST   /api/posts/{id}/close/     - Close post (seller)
    # GET    /api/posts/{id}/requests/  - Requests on post (seller)
    path('', include(router.urls)),
]
