"""
URL configuration for the Maps app.
"""
from django.urls import path

from apps.maps.views import AutocompleteView, HotelSearchView, PlaceDetailsView, StaticMapView

app_name = 'maps'

urlpatterns = [
    path('autocomplete/', AutocompleteView.as_view(), name='autocomplete'),
    path('place/', PlaceDetailsView.as_view(), name='place'),
    path('hotels/', HotelSearchView.as_view(), name='hotels'),
    path('static/', StaticMapView.as_view(), name='static'),
]
