"""
Views for the AI Services app.

Provides endpoints for activity suggestions and for turning an uploaded
booking confirmation into an activity draft, both powered by the Claude
AI service.
"""
import logging

from rest_framework import serializers, status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.ai_services.services.claude_client import ClaudeService, is_claude_configured
from apps.ai_services.services.suggestions import get_suggestions
from common.exceptions import error_response

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------
# Request serializers (used for validation only)
# -----------------------------------------------------------------------

class SuggestionRequestSerializer(serializers.Serializer):
    """Validates the suggestions request payload."""
    city = serializers.CharField(min_length=1, max_length=255)
    day = serializers.CharField(required=False, allow_blank=True)
    interests = serializers.ListField(
        child=serializers.CharField(allow_blank=True),
        required=False,
        help_text='Traveler interests, e.g. ["museums", "coffee"].',
    )


class ActivityUploadRequestSerializer(serializers.Serializer):
    """Validates the activity-from-upload request payload."""
    fileName = serializers.CharField(required=False, allow_blank=True)
    mimeType = serializers.CharField(required=False, allow_blank=True)
    data = serializers.CharField(
        min_length=1,
        help_text='Base64-encoded confirmation (image or PDF).',
    )


# -----------------------------------------------------------------------
# Views
# -----------------------------------------------------------------------

class SuggestionsView(APIView):
    """
    Suggest activities for a city and day.

    POST /api/ai/suggestions/

    Body: {"city": "Lisbon", "day": "2025-06-02", "interests": ["food"]}
    Response: {"success": true, "city": ..., "day": ..., "items": [...],
               "source": "ai" | "cache" | "placeholder" | "error"}
    """
    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request):
        serializer = SuggestionRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        result = get_suggestions(
            city=data['city'],
            day=data.get('day') or None,
            interests=[interest for interest in data.get('interests', []) if interest.strip()],
        )
        return Response({'success': True, **result})


class ActivityFromUploadView(APIView):
    """
    Extract an activity draft from an uploaded booking confirmation.

    POST /api/ai/activity-from-upload/

    Body: {"fileName": "museum.pdf", "mimeType": "application/pdf",
           "data": "<base64>"}
    """
    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = ActivityUploadRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        if not is_claude_configured():
            return error_response(
                'service_not_configured',
                'ANTHROPIC_API_KEY is not configured',
                status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        mime_type = data.get('mimeType') or 'application/octet-stream'
        try:
            activity = ClaudeService().extract_activity(data['data'], mime_type)
        except Exception as exc:
            logger.error('Failed to process activity upload %s: %s', data.get('fileName'), exc)
            return error_response(
                'analysis_failed',
                'Failed to analyze document',
                status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return Response({'success': True, 'activity': activity})
