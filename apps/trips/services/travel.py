"""
Driving estimates between two places via the Google Directions API.
"""
import logging

import requests
from django.conf import settings

logger = logging.getLogger(__name__)

DIRECTIONS_URL = 'https://maps.googleapis.com/maps/api/directions/json'
REQUEST_TIMEOUT = 10


def fetch_travel_metadata(origin, destination):
    """
    Look up the driving route from *origin* to *destination*.

    Returns
    -------
    dict | None
        ``distanceMeters``, ``durationSeconds``, ``summary`` (e.g.
        ``"25 mins • 12.3 km"``) and ``polyline`` (encoded overview path),
        or ``None`` when the lookup is not possible or fails.
    """
    if not origin or not destination:
        return None
    if not settings.GOOGLE_MAPS_API_KEY:
        return None

    params = {
        'origin': origin,
        'destination': destination,
        'mode': 'driving',
        'key': settings.GOOGLE_MAPS_API_KEY,
    }

    try:
        response = requests.get(DIRECTIONS_URL, params=params, timeout=REQUEST_TIMEOUT)
    except requests.RequestException as exc:
        logger.error('Directions request failed: %s', exc)
        return None

    if not response.ok:
        logger.error('Directions request failed (%s): %s', response.status_code, response.text)
        return None

    try:
        data = response.json()
    except ValueError as exc:
        logger.error('Directions returned invalid JSON: %s', exc)
        return None
    if not isinstance(data, dict):
        logger.error('Directions returned unexpected JSON: %r', data)
        return None

    if data.get('status') != 'OK':
        logger.warning('Directions status %s: %s', data.get('status'), data.get('error_message'))
        return None

    routes = data.get('routes')
    route = routes[0] if isinstance(routes, list) and routes else None
    legs = route.get('legs') if isinstance(route, dict) else None
    leg = legs[0] if isinstance(legs, list) and legs else None
    if not isinstance(leg, dict):
        return None

    distance = leg.get('distance') or {}
    duration = leg.get('duration') or {}
    summary = ' • '.join(part for part in (duration.get('text'), distance.get('text')) if part)

    return {
        'distanceMeters': distance.get('value'),
        'durationSeconds': duration.get('value'),
        'summary': summary or None,
        'polyline': (route.get('overview_polyline') or {}).get('points'),
    }
