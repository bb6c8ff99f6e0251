"""
Hotel offer search against the Hotels.com API on RapidAPI.

Results are normalised into flat offer dicts the itinerary UI can show
next to a trip day.
"""
import logging
import re
import uuid
from datetime import timedelta

import requests
from django.conf import settings

from apps.trips.utils import parse_trip_date
from common.exceptions import ServiceNotConfigured, UpstreamServiceError

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 15
KM_PER_MILE = 1.60934
HOTELS_COM_BASE = 'https://www.hotels.com'

# Served when the RapidAPI quota is exhausted so the UI still has something to show.
FALLBACK_HOTELS = [
    {
        'id': 'fallback-1',
        'name': 'Central Station Hotel',
        'distanceKm': 0.8,
        'address': 'Near the central station',
        'price': 129.0,
        'description': 'City centre • Hotels.com',
        'offer': f'{HOTELS_COM_BASE}/',
    },
    {
        'id': 'fallback-2',
        'name': 'Old Town Boutique Rooms',
        'distanceKm': 1.4,
        'address': 'Old town',
        'price': 164.0,
        'description': 'Old town • Hotels.com',
        'offer': f'{HOTELS_COM_BASE}/',
    },
    {
        'id': 'fallback-3',
        'name': 'Riverside Budget Inn',
        'distanceKm': 2.6,
        'address': 'Riverside district',
        'price': 89.0,
        'description': 'Riverside • Hotels.com',
        'offer': f'{HOTELS_COM_BASE}/',
    },
]


def parse_currency(value):
    """``"$1,234.50"`` -> ``1234.5``; ``None`` when no number is present."""
    if isinstance(value, (int, float)):
        return float(value)
    if not value:
        return None
    cleaned = re.sub(r'[^0-9.]', '', value)
    try:
        return float(cleaned)
    except ValueError:
        return None


def parse_distance(landmarks):
    """
    Kilometres from the first landmark carrying a distance label such as
    ``"0.4 miles"`` or ``"1.2 km"``.
    """
    distance_text = next(
        (item.get('distance') for item in landmarks or [] if isinstance(item, dict) and item.get('distance')),
        None,
    )
    if not distance_text:
        return None
    match = re.search(r'([0-9.]+)', distance_text)
    if not match:
        return None
    try:
        value = float(match.group(1))
    except ValueError:
        return None
    if re.search(r'mile', distance_text, re.IGNORECASE):
        return value * KM_PER_MILE
    return value


def build_offer_url(entry):
    urls = entry.get('urls') or {}
    if urls.get('hotelInfositeUrl'):
        return f"{HOTELS_COM_BASE}{urls['hotelInfositeUrl']}"
    if urls.get('hotelSearchResultUrl'):
        return f"{HOTELS_COM_BASE}{urls['hotelSearchResultUrl']}"
    return f"{HOTELS_COM_BASE}/ho{entry['id']}" if entry.get('id') else None


def build_check_out(check_in, check_out=None):
    """The given check-out, else the day after check-in (or check-in itself if unparseable)."""
    if check_out:
        return check_out
    start = parse_trip_date(check_in)
    if start is None:
        return check_in
    return (start + timedelta(days=1)).isoformat()


def normalize_hotel(entry, currency='USD'):
    name = (entry.get('name') or '').strip()
    if not name:
        return None

    price = (entry.get('ratePlan') or {}).get('price') or {}
    exact = price.get('exactCurrent')
    price_value = exact if isinstance(exact, (int, float)) else parse_currency(price.get('current'))

    address = entry.get('address') or {}
    address_parts = [
        address.get('streetAddress'),
        address.get('locality'),
        address.get('region'),
        address.get('countryName'),
    ]
    neighborhood = entry.get('neighborhood')

    return {
        'id': str(entry['id']) if entry.get('id') is not None else str(uuid.uuid4()),
        'name': name,
        'distanceKm': parse_distance(entry.get('landmarks')),
        'address': ', '.join(part for part in address_parts if part),
        'price': price_value,
        'currency': currency,
        'description': f'{neighborhood} • Hotels.com' if neighborhood else None,
        'offer': build_offer_url(entry),
    }


def search_hotels(latitude, longitude, check_in, check_out=None, adults=None,
                  radius_km=None, currency=None, limit=None):
    """
    Search Hotels.com for offers near a point, cheapest first.

    Returns
    -------
    tuple[list[dict], str]
        The normalised offers and their source: ``"hotels.com"``, or
        ``"fallback"`` when RapidAPI rate-limited the request.

    Raises
    ------
    ServiceNotConfigured
        If the RapidAPI host or key is missing.
    UpstreamServiceError
        If RapidAPI answers with any other HTTP error.
    """
    host = settings.RAPIDAPI_HOTELS_HOST
    key = settings.RAPIDAPI_HOTELS_KEY
    if not host or not key:
        raise ServiceNotConfigured('Hotels.com RapidAPI credentials are not configured')

    currency = currency or 'USD'
    params = {
        'latitude': f'{latitude:.6f}',
        'longitude': f'{longitude:.6f}',
        'checkIn': check_in,
        'checkOut': build_check_out(check_in, check_out),
        'adultsNumber': str(adults or 2),
        'currency': currency,
        'locale': 'en_US',
        'sortOrder': 'PRICE',
    }
    if radius_km:
        params['radius'] = str(radius_km)
    if limit:
        params['pageNumber'] = '1'
        params['pageSize'] = str(limit)

    try:
        response = requests.get(
            f'https://{host}/hotels/nearby',
            params=params,
            headers={'X-RapidAPI-Key': key, 'X-RapidAPI-Host': host},
            timeout=REQUEST_TIMEOUT,
        )
    except requests.RequestException as exc:
        logger.error('Hotels.com request failed: %s', exc)
        raise UpstreamServiceError('Hotels.com search failed.') from exc

    if response.status_code == 429:
        logger.warning('Hotels.com rate limit hit; serving fallback hotels')
        return [{**hotel, 'currency': currency} for hotel in FALLBACK_HOTELS], 'fallback'

    if not response.ok:
        logger.error('Hotels.com search failed (%s): %s', response.status_code, response.text)
        raise UpstreamServiceError(f'Hotels.com search failed ({response.status_code}): {response.text}')

    try:
        payload = response.json()
    except ValueError as exc:
        logger.error('Hotels.com returned invalid JSON: %s', exc)
        raise UpstreamServiceError('Hotels.com returned an unreadable response.') from exc

    search_results = payload.get('searchResults') if isinstance(payload, dict) else None
    results = search_results.get('results') if isinstance(search_results, dict) else None
    if not isinstance(results, list):
        results = []

    hotels = [normalize_hotel(entry, currency) for entry in results if isinstance(entry, dict)]
    return [hotel for hotel in hotels if hotel], 'hotels.com'
