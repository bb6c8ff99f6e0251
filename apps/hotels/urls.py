"""
URL configuration for the Hotels app.
"""
from django.urls import path

from apps.hotels.views import HotelOfferSearchView

app_name = 'hotels'

urlpatterns = [
    path('', HotelOfferSearchView.as_view(), name='search'),
]
