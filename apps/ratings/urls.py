from django.urls import path
from . import views

app_name = 'ratings'

urlpatterns = [
    # GET  /api/ratings/?ratee={id}|request={id}  - List ratings
    # POST /api/ratings/                          - Submit rating
    path('', views.ratings, name='ratings'),
]
