"""
Views for the Users app.
"""
import logging
import uuid

from django.utils import timezone
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.users.serializers import AccountSerializer, TravelerProfileSerializer

logger = logging.getLogger(__name__)


class AccountView(APIView):
    """
    Return the authenticated traveler's account summary.

    GET /api/me/
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response({'success': True, 'user': AccountSerializer(request.user).data})


class ProfileListView(APIView):
    """
    List or save reusable traveler profiles.

    GET  /api/profiles/
    POST /api/profiles/
    Body: {"name": "Family", "travelerType": "family", "kids": ["7"],
           "preferences": {"museums": 3}, "pace": "relaxed"}

    Saving a profile with an existing ``id`` replaces it.
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response({'success': True, 'profiles': request.user.saved_profiles or []})

    def post(self, request):
        serializer = TravelerProfileSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        incoming = dict(serializer.validated_data)

        profile_id = incoming.get('id') or str(uuid.uuid4())
        profiles = [
            profile for profile in (request.user.saved_profiles or [])
            if profile.get('id') != profile_id
        ]
        profiles.append({
            **incoming,
            'id': profile_id,
            'updatedAt': timezone.now().isoformat(),
        })

        request.user.saved_profiles = profiles
        request.user.save(update_fields=['saved_profiles', 'updated_at'])
        logger.info('Saved profile %s for user %s', profile_id, request.user.id)

        return Response({'success': True, 'profiles': profiles})
