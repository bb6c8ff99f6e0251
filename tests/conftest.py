"""Shared test fixtures for The Trip API."""
from datetime import date

import pytest
from django.core.cache import cache
from rest_framework.test import APIClient

from apps.trips.models import Trip, TripDay


@pytest.fixture(autouse=True)
def _clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def user(django_user_model):
    return django_user_model.objects.create_user(
        username='traveler-1',
        email='traveler@example.com',
        password='unused-password',
        display_name='Tess Traveler',
        firebase_uid='firebase-uid-1',
    )


@pytest.fixture
def other_user(django_user_model):
    return django_user_model.objects.create_user(
        username='traveler-2',
        email='friend@example.com',
        password='unused-password',
        display_name='Frankie Friend',
    )


@pytest.fixture
def anon_client():
    return APIClient()


@pytest.fixture
def api_client(user):
    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.fixture
def other_client(other_user):
    client = APIClient()
    client.force_authenticate(user=other_user)
    return client


@pytest.fixture
def trip(user):
    trip = Trip.objects.create(
        user=user,
        title='Lisbon long weekend',
        home_city='Lisbon',
        start_date=date(2025, 6, 1),
        end_date=date(2025, 6, 3),
    )
    for day_number in (1, 2, 3):
        TripDay.objects.create(trip=trip, date=date(2025, 6, day_number), city='Lisbon')
    return trip


@pytest.fixture
def day(trip):
    return trip.days.order_by('date').first()
