"""
Activity suggestion service that wraps the Claude AI call, stores
results by request hash and falls back to placeholder ideas.
"""
import hashlib
import logging

from apps.ai_services.models import AISuggestion
from apps.ai_services.services.claude_client import ClaudeService, is_claude_configured
from apps.trips.utils import parse_trip_date

logger = logging.getLogger(__name__)


def suggestion_hash(city, day=None, interests=None):
    """SHA-256 of ``city|day|interests`` with interests sorted."""
    key = '|'.join([
        city.strip().lower(),
        (day or '').strip(),
        ','.join(sorted(interest.strip().lower() for interest in interests or [])),
    ])
    return hashlib.sha256(key.encode('utf-8')).hexdigest()


def placeholder_suggestions(city, interests=None):
    return [
        {
            'title': f'Stroll through {city}',
            'description': 'Discover key landmarks with a self-guided walk.',
            'suggestedTime': '10:00',
        },
        {
            'title': 'Local dining',
            'description': f"Book a table inspired by your interests: {', '.join(interests or []) or 'food'}.",
            'suggestedTime': '19:30',
        },
    ]


def get_suggestions(city, day=None, interests=None):
    """
    Suggest activities for a city and day.

    Parameters
    ----------
    city : str
        City to plan in.
    day : str | None
        Trip day as sent by the client.
    interests : list[str] | None
        Traveler interests.

    Returns
    -------
    dict
        ``city``, ``day``, ``items`` and ``source`` (``cache``, ``ai``,
        ``placeholder`` or ``error``), plus ``error`` when the AI call
        failed.
    """
    interests = interests or []
    digest = suggestion_hash(city, day, interests)

    stored = AISuggestion.objects.filter(hash=digest).first()
    if stored is not None and (stored.payload or {}).get('items'):
        logger.debug('Suggestion cache hit for %s', city)
        return {'city': city, 'day': day, 'items': stored.payload['items'], 'source': 'cache'}

    items = []
    source = 'placeholder'
    error_message = None

    if is_claude_configured():
        try:
            items = ClaudeService().suggest_activities(city, day, interests)
        except Exception as exc:
            logger.error('Claude suggestions failed: %s', exc)
            source = 'error'
            error_message = str(exc) or 'Unknown AI error'
            items = []

        if items:
            source = 'ai'
            AISuggestion.objects.get_or_create(
                hash=digest,
                defaults={
                    'city': city,
                    'day': parse_trip_date(day),
                    'payload': {'items': items, 'interests': interests},
                },
            )

    if not items:
        items = placeholder_suggestions(city, interests)

    result = {'city': city, 'day': day, 'items': items, 'source': source}
    if error_message:
        result['error'] = error_message
    return result
