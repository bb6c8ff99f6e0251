import json
from datetime import date
from unittest.mock import patch

import pytest
from django.test import override_settings

from apps.trips.models import Trip, TripCollaborator

pytestmark = pytest.mark.django_db


def test_list_trips_returns_owned_trips_and_account(api_client, trip, user):
    response = api_client.get('/api/trips/')

    assert response.status_code == 200
    assert response.data['success'] is True
    assert [t['id'] for t in response.data['trips']] == [str(trip.id)]
    listed = response.data['trips'][0]
    assert listed['isOwner'] is True
    assert [d['date'] for d in listed['days']] == ['2025-06-01', '2025-06-02', '2025-06-03']
    assert response.data['user'] == {
        'id': str(user.id),
        'credits': 50,
        'displayName': 'Tess Traveler',
        'email': 'traveler@example.com',
    }


def test_list_trips_is_capped_at_25(api_client, user):
    for index in range(30):
        Trip.objects.create(user=user, title=f'Trip {index}')

    response = api_client.get('/api/trips/')

    assert len(response.data['trips']) == 25


def test_list_trips_filters_by_title(api_client, user, trip):
    Trip.objects.create(user=user, title='Tokyo in spring')

    response = api_client.get('/api/trips/', {'title': 'tokyo'})

    assert [t['title'] for t in response.data['trips']] == ['Tokyo in spring']


def test_list_trips_includes_shared_trips(other_client, trip):
    TripCollaborator.objects.create(trip=trip, email='Friend@Example.com')

    response = other_client.get('/api/trips/')

    assert [t['id'] for t in response.data['trips']] == [str(trip.id)]
    assert response.data['trips'][0]['isOwner'] is False


def test_create_trip_builds_inclusive_days(api_client):
    response = api_client.post('/api/trips/', {
        'title': 'Rome',
        'startDate': '2025-09-10',
        'endDate': '2025-09-12',
        'homeCity': 'Rome',
    }, format='json')

    assert response.status_code == 201
    trip = response.data['trip']
    assert trip['startDate'] == '2025-09-10'
    assert [(d['date'], d['city']) for d in trip['days']] == [
        ('2025-09-10', 'Rome'),
        ('2025-09-11', 'Rome'),
        ('2025-09-12', 'Rome'),
    ]


def test_create_trip_single_day_uses_default_city(api_client):
    response = api_client.post('/api/trips/', {
        'title': 'Day trip',
        'startDate': '2025-09-10T08:00:00Z',
    }, format='json')

    assert response.status_code == 201
    assert [(d['date'], d['city']) for d in response.data['trip']['days']] == [('2025-09-10', 'Paris')]


def test_create_trip_without_dates_has_no_days(api_client):
    response = api_client.post('/api/trips/', {'title': 'Someday'}, format='json')

    assert response.status_code == 201
    assert response.data['trip']['days'] == []
    assert response.data['trip']['startDate'] is None


def test_create_trip_requires_title(api_client):
    response = api_client.post('/api/trips/', {'title': ''}, format='json')

    assert response.status_code == 400
    assert response.data['error']['code'] == 'validation_error'
    assert 'title' in response.data['error']['details']


def test_create_trip_rejects_reversed_dates(api_client):
    response = api_client.post('/api/trips/', {
        'title': 'Backwards',
        'startDate': '2025-09-12',
        'endDate': '2025-09-10',
    }, format='json')

    assert response.status_code == 400
    assert 'endDate' in response.data['error']['details']


@override_settings(MAX_TRIP_DAYS=5)
def test_create_trip_rejects_overlong_range(api_client):
    response = api_client.post('/api/trips/', {
        'title': 'Gap year',
        'startDate': '2025-01-01',
        'endDate': '2025-01-06',
    }, format='json')

    assert response.status_code == 400
    assert not Trip.objects.exists()


def test_create_trip_on_last_representable_date(api_client):
    response = api_client.post('/api/trips/', {'title': 'End of time', 'startDate': '9999-12-31'}, format='json')

    assert response.status_code == 201
    assert [d['date'] for d in response.data['trip']['days']] == ['9999-12-31']


def test_create_trip_rejects_huge_range_before_building_days(api_client):
    with patch('apps.trips.serializers.build_day_dates') as build:
        response = api_client.post('/api/trips/', {
            'title': 'Forever',
            'startDate': '0001-01-01',
            'endDate': '9999-12-31',
        }, format='json')

    assert response.status_code == 400
    assert 'endDate' in response.data['error']['details']
    build.assert_not_called()


def test_create_trip_with_demo_header(anon_client):
    response = anon_client.post(
        '/api/trips/',
        {'title': 'Demo run', 'startDate': '2025-06-01'},
        format='json',
        HTTP_X_TRIP_DEMO_USER=json.dumps({'id': 'walker'}),
    )

    assert response.status_code == 201
    assert Trip.objects.get().user.username == 'demo-walker'


def test_create_trip_rejects_unparseable_date(api_client):
    response = api_client.post('/api/trips/', {'title': 'Oops', 'startDate': 'soon'}, format='json')

    assert response.status_code == 400
    assert 'startDate' in response.data['error']['details']


def test_retrieve_trip(api_client, trip):
    response = api_client.get(f'/api/trips/{trip.id}/')

    assert response.status_code == 200
    assert response.data['trip']['title'] == 'Lisbon long weekend'
    assert len(response.data['trip']['days']) == 3


def test_retrieve_shared_trip_as_collaborator(other_client, trip):
    TripCollaborator.objects.create(trip=trip, email='friend@example.com')

    response = other_client.get(f'/api/trips/{trip.id}/')

    assert response.status_code == 200
    assert response.data['trip']['isOwner'] is False


def test_retrieve_other_users_trip_is_not_found(other_client, trip):
    response = other_client.get(f'/api/trips/{trip.id}/')

    assert response.status_code == 404
    assert response.data['error']['message'] == 'Trip not found'


def test_update_trip_fields(api_client, trip):
    response = api_client.patch(f'/api/trips/{trip.id}/', {
        'title': 'Lisbon and Porto',
        'profileId': 'family',
        'profile': {'pace': 'relaxed'},
    }, format='json')

    assert response.status_code == 200
    assert response.data['trip']['title'] == 'Lisbon and Porto'
    assert response.data['trip']['profileId'] == 'family'
    assert response.data['trip']['profile'] == {'pace': 'relaxed'}


def test_update_trip_empty_date_clears_it(api_client, trip):
    response = api_client.patch(f'/api/trips/{trip.id}/', {'endDate': ''}, format='json')

    assert response.status_code == 200
    trip.refresh_from_db()
    assert trip.end_date is None
    assert trip.start_date == date(2025, 6, 1)


def test_update_shared_trip_as_collaborator_is_not_found(other_client, trip):
    TripCollaborator.objects.create(trip=trip, email='friend@example.com')

    response = other_client.patch(f'/api/trips/{trip.id}/', {'title': 'Mine now'}, format='json')

    assert response.status_code == 404
    trip.refresh_from_db()
    assert trip.title == 'Lisbon long weekend'


def test_delete_trip_cascades(api_client, trip):
    response = api_client.delete(f'/api/trips/{trip.id}/')

    assert response.status_code == 200
    assert response.data == {'success': True}
    assert not Trip.objects.filter(id=trip.id).exists()


def test_delete_other_users_trip_is_not_found(other_client, trip):
    response = other_client.delete(f'/api/trips/{trip.id}/')

    assert response.status_code == 404
    assert Trip.objects.filter(id=trip.id).exists()


def test_add_collaborator_is_idempotent(api_client, trip):
    for _ in range(2):
        response = api_client.post(
            f'/api/trips/{trip.id}/collaborators/', {'email': 'Friend@Example.com'}, format='json',
        )
        assert response.status_code == 200
        assert response.data['added'] is True

    assert list(trip.collaborators.values_list('email', flat=True)) == ['friend@example.com']


def test_list_collaborators(api_client, trip):
    TripCollaborator.objects.create(trip=trip, email='friend@example.com')

    response = api_client.get(f'/api/trips/{trip.id}/collaborators/')

    assert [c['email'] for c in response.data['collaborators']] == ['friend@example.com']


def test_add_collaborator_requires_valid_email(api_client, trip):
    response = api_client.post(f'/api/trips/{trip.id}/collaborators/', {'email': 'nope'}, format='json')

    assert response.status_code == 400


def test_add_collaborator_to_unowned_trip(other_client, trip):
    response = other_client.post(
        f'/api/trips/{trip.id}/collaborators/', {'email': 'x@example.com'}, format='json',
    )

    assert response.status_code == 404
    assert response.data['error']['message'] == 'Trip not found or not owned'
