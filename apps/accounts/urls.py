from django.urls import path
from . import views

app_name = 'accounts'

urlpatterns = [
    # Current user
    path('me/', views.get_current_user, name='current-user'),
    path('me/update/', views.update_profile, name='update-profile'),

    # Public profiles
    path('users/<uuid:pk>/', views.UserDetailView.as_view(), name='user-detail'),
    path('leaderboard/', views.leaderboard, name='leaderboard'),
]
