from django.urls import path
from . import views

app_name = 'notifications'

urlpatterns = [
    path('webhook/', views.request_webhook, name='webhook'),
]
