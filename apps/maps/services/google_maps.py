"""
Thin client for the Google Maps web services used by the trip planner:
Places Autocomplete, Place Details, Places Text Search and Static Maps.

Rendered static maps are cached using the Django cache framework so the
same map is only fetched once within the cache TTL.
"""
import hashlib
import logging
import math

import requests
from django.conf import settings
from django.core.cache import cache

from common.exceptions import ServiceNotConfigured, UpstreamServiceError

logger = logging.getLogger(__name__)

AUTOCOMPLETE_URL = 'https://maps.googleapis.com/maps/api/place/autocomplete/json'
DETAILS_URL = 'https://maps.googleapis.com/maps/api/place/details/json'
TEXT_SEARCH_URL = 'https://maps.googleapis.com/maps/api/place/textsearch/json'
STATIC_MAP_URL = 'https://maps.googleapis.com/maps/api/staticmap'

REQUEST_TIMEOUT = 10
STATIC_MAP_CACHE_TTL = 600
STATIC_MAP_CACHE_PREFIX = 'static_map'
EARTH_RADIUS_MILES = 3958.8


def haversine_miles(lat1, lng1, lat2, lng2):
    """Great-circle distance in miles between two coordinates."""
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lng2 - lng1)
    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    return 2 * EARTH_RADIUS_MILES * math.asin(math.sqrt(a))


def filter_hotels(hotels, min_rating=None, price_levels=None, origin=None, radius_miles=None):
    """
    Apply rating, price-level and radius filters to normalised hotels.

    ``distanceMiles`` is filled in for every hotel with a location whenever
    an ``origin`` ``(lat, lng)`` is given.
    """
    results = []
    for hotel in hotels:
        if min_rating is not None and (hotel.get('rating') or 0) < min_rating:
            continue
        if price_levels and hotel.get('priceLevel') not in price_levels:
            continue

        location = hotel.get('location') or {}
        if origin is not None and location.get('lat') is not None and location.get('lng') is not None:
            hotel['distanceMiles'] = round(
                haversine_miles(origin[0], origin[1], location['lat'], location['lng']), 2,
            )
        if radius_miles is not None and origin is not None:
            distance = hotel.get('distanceMiles')
            if distance is None or distance > radius_miles:
                continue

        results.append(hotel)
    return results


def sort_hotels(hotels, sort=None):
    """Order hotels by ``rating``, ``price`` or ``distance``; otherwise keep vendor order."""
    if sort == 'rating':
        return sorted(hotels, key=lambda h: h.get('rating') or 0, reverse=True)
    if sort == 'price':
        return sorted(hotels, key=lambda h: (h.get('priceLevel') is None, h.get('priceLevel') or 0))
    if sort == 'distance':
        return sorted(
            hotels,
            key=lambda h: (h.get('distanceMiles') is None, h.get('distanceMiles') or 0),
        )
    return hotels


class GoogleMapsClient:
    """
    Proxies Google Maps requests with the server-side API key.

    Raises ``ServiceNotConfigured`` when no key is set and
    ``UpstreamServiceError`` when Google answers with an HTTP error.
    Non-OK API statuses are reported back in an ``error`` key instead.
    """

    def __init__(self, api_key=None):
        self.api_key = api_key if api_key is not None else settings.GOOGLE_MAPS_API_KEY
        if not self.api_key:
            raise ServiceNotConfigured('Google Maps is not configured.')

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def autocomplete_cities(self, query, session_token=None):
        query = (query or '').strip()
        if len(query) < 2:
            return {'predictions': []}

        params = {'input': query, 'types': '(cities)', 'key': self.api_key}
        if session_token:
            params['sessiontoken'] = session_token

        data = self._get_json(AUTOCOMPLETE_URL, params, 'Failed to fetch suggestions.')
        if data.get('status') not in ('OK', 'ZERO_RESULTS'):
            logger.warning('Autocomplete status %s: %s', data.get('status'), data.get('error_message'))
            return {'predictions': [], 'error': data.get('error_message')}

        predictions = []
        for prediction in data.get('predictions') or []:
            formatting = prediction.get('structured_formatting') or {}
            predictions.append({
                'placeId': prediction.get('place_id'),
                'description': prediction.get('description'),
                'primary': formatting.get('main_text') or prediction.get('description'),
                'secondary': formatting.get('secondary_text') or '',
            })
        return {'predictions': predictions}

    def place_details(self, place_id):
        params = {
            'place_id': place_id,
            'key': self.api_key,
            'fields': 'formatted_address,name,geometry/location,place_id',
        }
        data = self._get_json(DETAILS_URL, params, 'Failed to load place.')
        if data.get('status') != 'OK':
            logger.warning('Place details status %s: %s', data.get('status'), data.get('error_message'))
            return {'error': data.get('error_message') or 'No details.'}

        result = data.get('result') or {}
        location = (result.get('geometry') or {}).get('location') or {}
        return {
            'placeId': result.get('place_id'),
            'name': result.get('name'),
            'address': result.get('formatted_address'),
            'location': {'lat': location.get('lat'), 'lng': location.get('lng')},
        }

    def search_hotels(self, text_query):
        """
        Text-search for ``hotels in <text_query>``.

        Returns
        -------
        dict
            ``hotels`` (list of ``{id, name, address, rating,
            userRatingsTotal, priceLevel, location, mapsUrl}``), plus
            ``error`` when Google reported a non-OK status.
        """
        params = {'query': f'hotels in {text_query}', 'key': self.api_key}
        data = self._get_json(TEXT_SEARCH_URL, params, 'Failed to search hotels.')
        if data.get('status') not in ('OK', 'ZERO_RESULTS'):
            logger.warning('Hotel textsearch status %s: %s', data.get('status'), data.get('error_message'))
            return {'hotels': [], 'error': data.get('error_message') or 'No results'}

        hotels = []
        for result in data.get('results') or []:
            location = (result.get('geometry') or {}).get('location') or {}
            hotels.append({
                'id': result.get('place_id'),
                'name': result.get('name'),
                'address': result.get('formatted_address'),
                'rating': result.get('rating'),
                'userRatingsTotal': result.get('user_ratings_total'),
                'priceLevel': result.get('price_level'),
                'location': {'lat': location.get('lat'), 'lng': location.get('lng')} if location else None,
                'mapsUrl': f"https://www.google.com/maps/place/?q=place_id:{result.get('place_id')}",
            })
        return {'hotels': hotels}

    def static_map(self, lat, lng, zoom='13', path=None):
        """
        Render a 600x320 (scale 2) roadmap PNG centred on ``lat,lng`` with a
        marker, optionally tracing an encoded polyline ``path``.

        The PNG bytes are cached for ``STATIC_MAP_CACHE_TTL`` seconds.
        """
        params = [
            ('center', f'{lat},{lng}'),
            ('zoom', zoom),
            ('size', '600x320'),
            ('scale', '2'),
            ('maptype', 'roadmap'),
            ('markers', f'color:0xff47da|{lat},{lng}'),
        ]
        if path:
            params.append(('path', f'weight:4|color:0x66f6ff|enc:{path}'))

        digest = hashlib.sha256(repr(params).encode('utf-8')).hexdigest()
        cache_key = f'{STATIC_MAP_CACHE_PREFIX}:{digest}'
        cached = cache.get(cache_key)
        if cached is not None:
            return cached

        response = self._get(STATIC_MAP_URL, params + [('key', self.api_key)], 'Failed to render map.')
        content = response.content
        cache.set(cache_key, content, STATIC_MAP_CACHE_TTL)
        return content

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _get(self, url, params, failure_message):
        try:
            response = requests.get(url, params=params, timeout=REQUEST_TIMEOUT)
        except requests.RequestException as exc:
            logger.error('Google Maps request to %s failed: %s', url, exc)
            raise UpstreamServiceError(failure_message) from exc

        if not response.ok:
            logger.error('Google Maps request to %s failed (%s): %s', url, response.status_code, response.text)
            raise UpstreamServiceError(failure_message)
        return response

    def _get_json(self, url, params, failure_message):
        response = self._get(url, params, failure_message)
        try:
            data = response.json()
        except ValueError as exc:
            logger.error('Google Maps returned invalid JSON from %s: %s', url, exc)
            raise UpstreamServiceError(failure_message) from exc
        if not isinstance(data, dict):
            logger.error('Google Maps returned unexpected JSON from %s: %r', url, data)
            raise UpstreamServiceError(failure_message)
        return data
