"""
URL configuration for the Users app.
"""
from django.urls import path

from apps.users.views import AccountView, ProfileListView

app_name = 'users'

urlpatterns = [
    path('me/', AccountView.as_view(), name='account'),
    path('profiles/', ProfileListView.as_view(), name='profile-list'),
]
