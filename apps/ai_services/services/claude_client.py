"""
Wrapper around the Anthropic Python SDK for Claude AI interactions.

Provides high-level methods for activity suggestions and for reading
booking confirmations used throughout The Trip.
"""
import json
import logging

import anthropic
from django.conf import settings

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = 'You are Fonda, a travel-planning copilot.'


def _get_client():
    """Return a configured Anthropic client."""
    return anthropic.Anthropic(api_key=settings.ANTHROPIC_API_KEY)


def _get_model():
    """Return the configured model identifier."""
    return getattr(settings, 'ANTHROPIC_MODEL', 'claude-sonnet-4-20250514')


def is_claude_configured():
    return bool(settings.ANTHROPIC_API_KEY)


def _strip_fences(response_text):
    response_text = response_text.strip()
    if response_text.startswith('```'):
        response_text = response_text.split('\n', 1)[1] if '\n' in response_text else ''
        if response_text.rstrip().endswith('```'):
            response_text = response_text.rstrip()[:-3]
    return response_text.strip()


def _message_text(message):
    return '\n'.join(
        block.text for block in message.content
        if getattr(block, 'type', None) == 'text'
    )


def build_suggestion_prompt(city, day=None, interests=None):
    interests_line = ', '.join(interests) if interests else 'surprise me'
    day_line = f'The date is {day}.' if day else "The traveler didn't specify a date."
    return (
        f"Suggest vivid, specific activities or experiences in {city}.\n"
        f"{day_line} They are interested in {interests_line}.\n"
        'Return STRICT JSON matching this schema (no prose): '
        '{"suggestions":[{"title":"string","description":"string","suggestedTime":"HH:MM"}]}\n'
        'Focus on realistic plans you could add to an itinerary.'
    )


def parse_suggestions(response_text):
    """
    Pull the suggestion list out of a model reply.

    Accepts either a bare JSON list or an object with a ``suggestions`` key.
    Anything else yields an empty list.
    """
    if not response_text:
        return []
    try:
        parsed = json.loads(_strip_fences(response_text))
    except json.JSONDecodeError as exc:
        logger.warning('Failed to parse Claude suggestions as JSON: %s', exc)
        return []

    if isinstance(parsed, list):
        suggestions = parsed
    elif isinstance(parsed, dict) and isinstance(parsed.get('suggestions'), list):
        suggestions = parsed['suggestions']
    else:
        return []
    return [item for item in suggestions if isinstance(item, dict) and item.get('title')]


class ClaudeService:
    """
    High-level interface to Claude for The Trip AI features.
    """

    def __init__(self):
        self.client = _get_client()
        self.model = _get_model()

    # ------------------------------------------------------------------
    # Activity suggestions
    # ------------------------------------------------------------------

    def suggest_activities(self, city, day=None, interests=None):
        """
        Ask Claude for things to do in a city.

        Parameters
        ----------
        city : str
            City to plan in.
        day : str | None
            Date of the trip day, passed through to the prompt as given.
        interests : list[str] | None
            Traveler interests such as ``["museums", "street food"]``.

        Returns
        -------
        list[dict]
            Items with ``title``, ``description`` and optionally
            ``suggestedTime`` (``HH:MM``). Empty when the reply could not
            be parsed.
        """
        prompt = build_suggestion_prompt(city, day, interests)

        try:
            message = self.client.messages.create(
                model=self.model,
                max_tokens=1024,
                temperature=0.6,
                system=SYSTEM_PROMPT,
                messages=[
                    {
                        'role': 'user',
                        'content': prompt,
                    }
                ],
            )
        except anthropic.APIError as exc:
            logger.error('Anthropic API error during suggestions: %s', exc)
            raise

        return parse_suggestions(_message_text(message))

    # ------------------------------------------------------------------
    # Confirmation extraction
    # ------------------------------------------------------------------

    def extract_activity(self, data_base64, mime_type):
        """
        Read a booking confirmation (image or PDF) and pull out activity
        details.

        Parameters
        ----------
        data_base64 : str
            Base64-encoded file contents.
        mime_type : str
            Media type of the upload, e.g. ``image/png`` or
            ``application/pdf``.

        Returns
        -------
        dict
            Any of ``title``, ``notes``, ``location``, ``startLocation``,
            ``type``, ``startTime``, ``endTime`` (``HH:MM``) and ``budget``.
            Empty when the reply was not valid JSON.
        """
        if mime_type == 'application/pdf':
            attachment = {
                'type': 'document',
                'source': {
                    'type': 'base64',
                    'media_type': mime_type,
                    'data': data_base64,
                },
            }
        else:
            attachment = {
                'type': 'image',
                'source': {
                    'type': 'base64',
                    'media_type': mime_type,
                    'data': data_base64,
                },
            }

        prompt = (
            "Extract trip activity details from this confirmation. "
            "Return valid JSON matching this schema:\n"
            '{"title":"string","notes":"string","location":"string",'
            '"startLocation":"string","type":"string","startTime":"HH:MM",'
            '"endTime":"HH:MM","budget":number}\n'
            "Use 24-hour HH:MM times. Omit fields you cannot find by setting "
            "them to empty strings. Title should be short.\n\n"
            "Respond ONLY with valid JSON. No markdown, no explanation."
        )

        try:
            message = self.client.messages.create(
                model=self.model,
                max_tokens=1024,
                temperature=0,
                system=f'{SYSTEM_PROMPT} Extract structured data from confirmations and respond with JSON only.',
                messages=[
                    {
                        'role': 'user',
                        'content': [
                            attachment,
                            {
                                'type': 'text',
                                'text': prompt,
                            },
                        ],
                    }
                ],
            )
        except anthropic.APIError as exc:
            logger.error('Anthropic API error during confirmation extraction: %s', exc)
            raise

        response_text = _message_text(message)
        try:
            activity = json.loads(_strip_fences(response_text) or '{}')
        except json.JSONDecodeError as exc:
            logger.error('Failed to parse Claude extraction: %s (%r)', exc, response_text)
            return {}

        return activity if isinstance(activity, dict) else {}
