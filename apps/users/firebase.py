"""
Firebase Admin SDK bootstrap.

Credentials come from ``FIREBASE_SERVICE_ACCOUNT`` (the service-account JSON
itself) or ``FIREBASE_CREDENTIALS_PATH`` (a path to that JSON file).
"""
import json
import logging

import firebase_admin
from django.conf import settings
from firebase_admin import auth as firebase_auth
from firebase_admin import credentials

logger = logging.getLogger(__name__)


def is_firebase_configured():
    return bool(settings.FIREBASE_SERVICE_ACCOUNT or settings.FIREBASE_CREDENTIALS_PATH)


def _load_credentials():
    if settings.FIREBASE_SERVICE_ACCOUNT:
        try:
            info = json.loads(settings.FIREBASE_SERVICE_ACCOUNT)
        except ValueError as exc:
            raise ValueError('FIREBASE_SERVICE_ACCOUNT is not valid JSON.') from exc
        return credentials.Certificate(info)
    return credentials.Certificate(settings.FIREBASE_CREDENTIALS_PATH)


def get_firebase_app():
    """
    Return the default Firebase app, initialising it on first use.
    """
    if not is_firebase_configured():
        raise ValueError('Firebase credentials are not configured.')

    if not firebase_admin._apps:
        firebase_admin.initialize_app(_load_credentials())
        logger.info('Initialised Firebase Admin SDK')
    return firebase_admin.get_app()


def get_firebase_auth():
    """Return the ``firebase_admin.auth`` module bound to the default app."""
    get_firebase_app()
    return firebase_auth
