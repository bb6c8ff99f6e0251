from datetime import date
from unittest.mock import MagicMock, patch

import pytest
from django.test import override_settings

from apps.hotels.services.hotels_com import (
    build_check_out,
    build_offer_url,
    normalize_hotel,
    parse_currency,
    parse_distance,
    search_hotels,
)
from common.exceptions import ServiceNotConfigured, UpstreamServiceError

RAPIDAPI = override_settings(RAPIDAPI_HOTELS_HOST='hotels4.p.rapidapi.com', RAPIDAPI_HOTELS_KEY='rapid-key')

RAW_HOTEL = {
    'id': 424242,
    'name': ' Hotel Avenida ',
    'address': {
        'streetAddress': 'Av. da Liberdade 1',
        'locality': 'Lisbon',
        'countryName': 'Portugal',
    },
    'landmarks': [{'label': 'City center', 'distance': '0.5 miles'}],
    'ratePlan': {'price': {'current': '$1,234'}},
    'urls': {'hotelSearchResultUrl': '/search/424242'},
    'neighborhood': 'Avenida',
}


def _response(status_code=200, json_data=None):
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.json.return_value = json_data
    response.text = 'too many requests' if status_code == 429 else 'body'
    return response


def test_parse_currency():
    assert parse_currency('$1,234.50') == 1234.5
    assert parse_currency(99) == 99.0
    assert parse_currency('') is None
    assert parse_currency('free') is None


def test_parse_distance_converts_miles():
    assert parse_distance([{'distance': '2 miles'}]) == pytest.approx(3.21868)
    assert parse_distance([{'label': 'x'}, {'distance': '1.5 km'}]) == 1.5
    assert parse_distance([]) is None
    assert parse_distance(None) is None


def test_build_offer_url_preference_order():
    assert build_offer_url({'urls': {'hotelInfositeUrl': '/info', 'hotelSearchResultUrl': '/s'}}) == 'https://www.hotels.com/info'
    assert build_offer_url({'urls': {'hotelSearchResultUrl': '/s'}}) == 'https://www.hotels.com/s'
    assert build_offer_url({'id': 7}) == 'https://www.hotels.com/ho7'
    assert build_offer_url({}) is None


def test_build_check_out():
    assert build_check_out('2025-06-30') == '2025-07-01'
    assert build_check_out('2025-06-30', '2025-07-04') == '2025-07-04'
    assert build_check_out('whenever') == 'whenever'


def test_normalize_hotel():
    hotel = normalize_hotel(RAW_HOTEL, 'EUR')

    assert hotel == {
        'id': '424242',
        'name': 'Hotel Avenida',
        'distanceKm': pytest.approx(0.80467),
        'address': 'Av. da Liberdade 1, Lisbon, Portugal',
        'price': 1234.0,
        'currency': 'EUR',
        'description': 'Avenida • Hotels.com',
        'offer': 'https://www.hotels.com/search/424242',
    }


def test_normalize_hotel_prefers_exact_price_and_skips_nameless():
    entry = {**RAW_HOTEL, 'ratePlan': {'price': {'current': '$10', 'exactCurrent': 9.87}}}
    assert normalize_hotel(entry)['price'] == 9.87
    assert normalize_hotel({'id': 1, 'name': '  '}) is None


def test_search_requires_credentials():
    with pytest.raises(ServiceNotConfigured):
        search_hotels(38.7, -9.1, '2025-06-01')


@RAPIDAPI
def test_search_builds_request_and_normalizes():
    payload = {'searchResults': {'results': [RAW_HOTEL, {'id': 2}]}}
    with patch('apps.hotels.services.hotels_com.requests.get', return_value=_response(json_data=payload)) as mocked:
        hotels, source = search_hotels(38.7223, -9.1393, '2025-06-01', adults=3, radius_km=5, limit=10)

    assert source == 'hotels.com'
    assert [h['name'] for h in hotels] == ['Hotel Avenida']
    args, kwargs = mocked.call_args
    assert args[0] == 'https://hotels4.p.rapidapi.com/hotels/nearby'
    assert kwargs['headers'] == {'X-RapidAPI-Key': 'rapid-key', 'X-RapidAPI-Host': 'hotels4.p.rapidapi.com'}
    assert kwargs['params'] == {
        'latitude': '38.722300',
        'longitude': '-9.139300',
        'checkIn': '2025-06-01',
        'checkOut': '2025-06-02',
        'adultsNumber': '3',
        'currency': 'USD',
        'locale': 'en_US',
        'sortOrder': 'PRICE',
        'radius': '5',
        'pageNumber': '1',
        'pageSize': '10',
    }


@RAPIDAPI
def test_search_rate_limited_serves_fallback():
    with patch('apps.hotels.services.hotels_com.requests.get', return_value=_response(status_code=429)):
        hotels, source = search_hotels(38.7, -9.1, '2025-06-01', currency='EUR')

    assert source == 'fallback'
    assert hotels
    assert all(h['currency'] == 'EUR' for h in hotels)


@RAPIDAPI
def test_search_upstream_error():
    with patch('apps.hotels.services.hotels_com.requests.get', return_value=_response(status_code=500)):
        with pytest.raises(UpstreamServiceError, match='500'):
            search_hotels(38.7, -9.1, '2025-06-01')


@pytest.mark.django_db
def test_hotels_endpoint_requires_auth(anon_client):
    response = anon_client.get('/api/hotels/', {'lat': 1, 'lng': 2, 'checkIn': '2025-06-01'})

    assert response.status_code == 401


@pytest.mark.django_db
def test_hotels_endpoint_validates_params(api_client):
    response = api_client.get('/api/hotels/', {'lat': 'north', 'checkIn': '2025-06-01'})

    assert response.status_code == 400
    assert set(response.data['error']['details']) >= {'lat', 'lng'}


@pytest.mark.django_db
def test_hotels_endpoint_not_configured(api_client):
    response = api_client.get('/api/hotels/', {'lat': 1, 'lng': 2, 'checkIn': '2025-06-01'})

    assert response.status_code == 503


@pytest.mark.django_db
@RAPIDAPI
def test_hotels_endpoint_returns_offers(api_client):
    payload = {'searchResults': {'results': [RAW_HOTEL]}}
    with patch('apps.hotels.services.hotels_com.requests.get', return_value=_response(json_data=payload)):
        response = api_client.get('/api/hotels/', {
            'lat': '38.72', 'lng': '-9.14', 'checkIn': date(2025, 6, 1).isoformat(),
        })

    assert response.status_code == 200
    assert response.data['source'] == 'hotels.com'
    assert response.data['hotels'][0]['offer'] == 'https://www.hotels.com/search/424242'


@RAPIDAPI
def test_search_unreadable_body_is_upstream_error():
    reply = _response()
    reply.json.side_effect = ValueError('Expecting value')
    with patch('apps.hotels.services.hotels_com.requests.get', return_value=reply):
        with pytest.raises(UpstreamServiceError, match='unreadable'):
            search_hotels(38.7, -9.1, '2025-06-01')


@RAPIDAPI
@pytest.mark.parametrize('payload', [[RAW_HOTEL], {'searchResults': ['x']}, None])
def test_search_unexpected_shape_yields_no_hotels(payload):
    with patch('apps.hotels.services.hotels_com.requests.get', return_value=_response(json_data=payload)):
        hotels, source = search_hotels(38.7, -9.1, '2025-06-01')

    assert hotels == []
    assert source == 'hotels.com'
