"""
URL configuration for the AI Services app.
"""
from django.urls import path

from apps.ai_services.views import ActivityFromUploadView, SuggestionsView

app_name = 'ai_services'

urlpatterns = [
    path('suggestions/', SuggestionsView.as_view(), name='suggestions'),
    path('activity-from-upload/', ActivityFromUploadView.as_view(), name='activity-from-upload'),
]
