from types import SimpleNamespace
from unittest.mock import patch

import pytest
from django.test import override_settings

from apps.ai_services.models import AISuggestion
from apps.ai_services.services.claude_client import (
    ClaudeService,
    build_suggestion_prompt,
    parse_suggestions,
)
from apps.ai_services.services.suggestions import suggestion_hash

pytestmark = pytest.mark.django_db

ITEMS = [{'title': 'Tile museum', 'description': 'Azulejos galore', 'suggestedTime': '11:00'}]


def _message(text):
    return SimpleNamespace(content=[SimpleNamespace(type='text', text=text)])


# ---------------------------------------------------------------------------
# Claude client helpers
# ---------------------------------------------------------------------------

def test_prompt_mentions_date_and_interests():
    prompt = build_suggestion_prompt('Lisbon', '2025-06-02', ['food', 'art'])
    assert 'in Lisbon' in prompt
    assert 'The date is 2025-06-02.' in prompt
    assert 'interested in food, art' in prompt


def test_prompt_without_date_or_interests():
    prompt = build_suggestion_prompt('Lisbon')
    assert "The traveler didn't specify a date." in prompt
    assert 'surprise me' in prompt


def test_parse_suggestions_accepts_object_list_and_fences():
    assert parse_suggestions('{"suggestions": [{"title": "A", "description": "x"}]}')[0]['title'] == 'A'
    assert parse_suggestions('[{"title": "B", "description": "y"}]')[0]['title'] == 'B'
    fenced = '```json\n{"suggestions": [{"title": "C", "description": "z"}]}\n```'
    assert parse_suggestions(fenced)[0]['title'] == 'C'


def test_parse_suggestions_bad_reply_is_empty():
    assert parse_suggestions('Sure! Here are some ideas') == []
    assert parse_suggestions('{"other": 1}') == []
    assert parse_suggestions('') == []


@override_settings(ANTHROPIC_API_KEY='sk-test')
def test_extract_activity_sends_pdf_as_document():
    with patch('apps.ai_services.services.claude_client.anthropic.Anthropic') as anthropic_cls:
        client = anthropic_cls.return_value
        client.messages.create.return_value = _message('{"title": "Museum", "startTime": "10:00"}')

        result = ClaudeService().extract_activity('ZGF0YQ==', 'application/pdf')

    assert result == {'title': 'Museum', 'startTime': '10:00'}
    content = client.messages.create.call_args.kwargs['messages'][0]['content']
    assert content[0]['type'] == 'document'
    assert content[0]['source']['media_type'] == 'application/pdf'


@override_settings(ANTHROPIC_API_KEY='sk-test')
def test_extract_activity_bad_json_is_empty():
    with patch('apps.ai_services.services.claude_client.anthropic.Anthropic') as anthropic_cls:
        anthropic_cls.return_value.messages.create.return_value = _message('no idea')

        assert ClaudeService().extract_activity('ZGF0YQ==', 'image/png') == {}


# ---------------------------------------------------------------------------
# Suggestions endpoint
# ---------------------------------------------------------------------------

def test_suggestion_hash_ignores_interest_order():
    assert suggestion_hash('Lisbon', '2025-06-02', ['food', 'art']) == suggestion_hash('Lisbon', '2025-06-02', ['art', 'food'])
    assert suggestion_hash('Lisbon', None, []) != suggestion_hash('Porto', None, [])


def test_suggestions_placeholder_without_key(anon_client):
    response = anon_client.post('/api/ai/suggestions/', {'city': 'Lisbon', 'interests': ['jazz']}, format='json')

    assert response.status_code == 200
    assert response.data['source'] == 'placeholder'
    titles = [item['title'] for item in response.data['items']]
    assert titles == ['Stroll through Lisbon', 'Local dining']
    assert 'jazz' in response.data['items'][1]['description']
    assert 'error' not in response.data


def test_suggestions_placeholder_defaults_to_food(anon_client):
    response = anon_client.post('/api/ai/suggestions/', {'city': 'Lisbon'}, format='json')

    assert response.data['items'][1]['description'].endswith('food.')
    assert response.data['items'][1]['suggestedTime'] == '19:30'


def test_suggestions_drop_blank_interests(anon_client):
    response = anon_client.post(
        '/api/ai/suggestions/', {'city': 'Lisbon', 'interests': ['', 'jazz', '  ']}, format='json',
    )

    assert response.status_code == 200
    assert response.data['items'][1]['description'] == 'Book a table inspired by your interests: jazz.'


def test_suggestions_require_city(anon_client):
    response = anon_client.post('/api/ai/suggestions/', {'city': ''}, format='json')

    assert response.status_code == 400


@override_settings(ANTHROPIC_API_KEY='sk-test')
def test_suggestions_from_claude_are_stored_then_served_from_cache(anon_client):
    payload = {'city': 'Lisbon', 'day': '2025-06-02', 'interests': ['art']}
    with patch('apps.ai_services.services.suggestions.ClaudeService') as service_cls:
        service_cls.return_value.suggest_activities.return_value = ITEMS
        first = anon_client.post('/api/ai/suggestions/', payload, format='json')
        second = anon_client.post('/api/ai/suggestions/', payload, format='json')

    assert first.data['source'] == 'ai'
    assert first.data['items'] == ITEMS
    assert second.data['source'] == 'cache'
    assert second.data['items'] == ITEMS
    service_cls.return_value.suggest_activities.assert_called_once_with('Lisbon', '2025-06-02', ['art'])

    stored = AISuggestion.objects.get()
    assert stored.city == 'Lisbon'
    assert str(stored.day) == '2025-06-02'


@override_settings(ANTHROPIC_API_KEY='sk-test')
def test_suggestions_error_falls_back_to_placeholders(anon_client):
    with patch('apps.ai_services.services.suggestions.ClaudeService') as service_cls:
        service_cls.return_value.suggest_activities.side_effect = RuntimeError('overloaded')
        response = anon_client.post('/api/ai/suggestions/', {'city': 'Lisbon'}, format='json')

    assert response.status_code == 200
    assert response.data['source'] == 'error'
    assert response.data['error'] == 'overloaded'
    assert len(response.data['items']) == 2
    assert not AISuggestion.objects.exists()


@override_settings(ANTHROPIC_API_KEY='sk-test')
def test_suggestions_empty_reply_uses_placeholders(anon_client):
    with patch('apps.ai_services.services.suggestions.ClaudeService') as service_cls:
        service_cls.return_value.suggest_activities.return_value = []
        response = anon_client.post('/api/ai/suggestions/', {'city': 'Lisbon'}, format='json')

    assert response.data['source'] == 'placeholder'
    assert not AISuggestion.objects.exists()


# ---------------------------------------------------------------------------
# Activity from upload
# ---------------------------------------------------------------------------

def test_upload_requires_authentication(anon_client):
    response = anon_client.post('/api/ai/activity-from-upload/', {'data': 'abc'}, format='json')

    assert response.status_code == 401


def test_upload_without_key(api_client):
    response = api_client.post('/api/ai/activity-from-upload/', {'data': 'abc'}, format='json')

    assert response.status_code == 500
    assert response.data['error']['message'] == 'ANTHROPIC_API_KEY is not configured'


def test_upload_requires_data(api_client):
    response = api_client.post('/api/ai/activity-from-upload/', {'fileName': 'x.png'}, format='json')

    assert response.status_code == 400


@override_settings(ANTHROPIC_API_KEY='sk-test')
def test_upload_returns_extracted_activity(api_client):
    with patch('apps.ai_services.views.ClaudeService') as service_cls:
        service_cls.return_value.extract_activity.return_value = {'title': 'Gulbenkian', 'startTime': '10:00'}
        response = api_client.post('/api/ai/activity-from-upload/', {
            'fileName': 'ticket.png',
            'mimeType': 'image/png',
            'data': 'aGVsbG8=',
        }, format='json')

    assert response.status_code == 200
    assert response.data['activity'] == {'title': 'Gulbenkian', 'startTime': '10:00'}
    service_cls.return_value.extract_activity.assert_called_once_with('aGVsbG8=', 'image/png')


@override_settings(ANTHROPIC_API_KEY='sk-test')
def test_upload_vendor_failure(api_client):
    with patch('apps.ai_services.views.ClaudeService') as service_cls:
        service_cls.return_value.extract_activity.side_effect = RuntimeError('boom')
        response = api_client.post('/api/ai/activity-from-upload/', {'data': 'aGVsbG8='}, format='json')

    assert response.status_code == 500
    assert response.data['error']['message'] == 'Failed to analyze document'
