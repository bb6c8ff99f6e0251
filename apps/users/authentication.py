"""
DRF authentication backends for The Trip API.

``FirebaseAuthentication`` verifies a Firebase ID token sent as
``Authorization: Bearer <token>`` and provisions the matching account.
``DemoUserAuthentication`` accepts an ``X-Trip-Demo-User`` JSON header so
the dashboard can be tried without signing in.
"""
import json
import logging
import re

from django.contrib.auth import get_user_model
from rest_framework import exceptions
from rest_framework.authentication import BaseAuthentication, get_authorization_header

from apps.users.firebase import get_firebase_auth, is_firebase_configured
from common.exceptions import AuthenticationNotConfigured

logger = logging.getLogger(__name__)

DEMO_HEADER = 'HTTP_X_TRIP_DEMO_USER'

_BEARER_RE = re.compile(r'^Bearer (.+)$', re.IGNORECASE)


def _coerce_email(uid, email):
    if email and '@' in email:
        return email
    return f'{uid}@thetrip.local'


def _coerce_home_city(token):
    city = token.get('homeCity')
    return city if isinstance(city, str) and city else None


def slugify_identity(value):
    """Lowercase, dash-separated identifier capped at 40 characters."""
    slug = re.sub(r'[^a-z0-9]+', '-', value.lower())
    return slug.strip('-')[:40]


class FirebaseAuthentication(BaseAuthentication):
    """
    Authenticate requests carrying a Firebase ID token.

    Requests without a bearer token are left to the next authenticator.
    """

    def authenticate(self, request):
        header = get_authorization_header(request).decode('latin-1')
        match = _BEARER_RE.match(header)
        if not match:
            return None

        if not is_firebase_configured():
            raise AuthenticationNotConfigured()

        firebase_auth = get_firebase_auth()
        try:
            decoded = firebase_auth.verify_id_token(match.group(1), check_revoked=True)
        except Exception as exc:
            logger.warning('Firebase token verification failed: %s', exc)
            raise exceptions.AuthenticationFailed('Invalid or expired authentication token.')

        return self._upsert_account(decoded), decoded

    def authenticate_header(self, request):
        return 'Bearer realm="api"'

    def _upsert_account(self, decoded):
        User = get_user_model()
        uid = decoded['uid']
        fields = {
            'email': _coerce_email(uid, decoded.get('email')),
            'display_name': decoded.get('name') or '',
            'home_city': _coerce_home_city(decoded),
        }
        user, created = User.objects.update_or_create(
            firebase_uid=uid,
            defaults=fields,
            create_defaults={**fields, 'username': uid[:150]},
        )
        if created:
            user.set_unusable_password()
            user.save(update_fields=['password'])
        return user


class DemoUserAuthentication(BaseAuthentication):
    """
    Authenticate a throwaway demo identity from the ``X-Trip-Demo-User``
    header, e.g. ``{"name": "Ada", "email": "ada@example.com"}``.

    Only consulted when no bearer token was presented.
    """

    def authenticate(self, request):
        header = request.META.get(DEMO_HEADER)
        if not header:
            return None

        try:
            payload = json.loads(header)
        except ValueError:
            raise exceptions.AuthenticationFailed('Invalid demo user payload.')

        if not isinstance(payload, dict) or not all(
            isinstance(payload.get(key), (str, type(None)))
            for key in ('id', 'name', 'email')
        ):
            raise exceptions.AuthenticationFailed('Invalid demo user payload.')

        name = payload.get('name') or ''
        email = (payload.get('email') or '').strip()
        base_id = (payload.get('id') or '').strip() or slugify_identity(
            name or payload.get('email') or 'guest'
        )
        if not base_id:
            raise exceptions.AuthenticationFailed('Demo user identifier missing.')

        demo_id = base_id if base_id.startswith('demo-') else f'demo-{base_id}'
        demo_email = email or f'{demo_id}@demo.thetrip'

        User = get_user_model()
        fields = {'email': demo_email, 'display_name': name}
        user, created = User.objects.update_or_create(
            username=demo_id,
            defaults=fields,
        )
        if created:
            user.set_unusable_password()
            user.save(update_fields=['password'])
            logger.info('Provisioned demo account %s', demo_id)
        return user, None

    def authenticate_header(self, request):
        return 'Bearer realm="api"'

