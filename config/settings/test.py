"""
Settings used by the pytest suite.
"""
from config.settings.base import *  # noqa: F401, F403

DEBUG = False

ALLOWED_HOSTS = ['*']

SECRET_KEY = 'test-secret-key'

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'the-trip-test-cache',
    }
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

# Vendor integrations are patched per test
FIREBASE_SERVICE_ACCOUNT = ''
FIREBASE_CREDENTIALS_PATH = ''
ANTHROPIC_API_KEY = ''
GOOGLE_MAPS_API_KEY = ''
RAPIDAPI_HOTELS_HOST = ''
RAPIDAPI_HOTELS_KEY = ''
STARTING_CREDITS = 50
DEFAULT_HOME_CITY = 'Paris'
MAX_TRIP_DAYS = 60

REST_FRAMEWORK = {
    **REST_FRAMEWORK,  # noqa: F405
    'DEFAULT_THROTTLE_CLASSES': [],
}

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'handlers': {
        'null': {
            'class': 'logging.NullHandler',
        },
    },
    'root': {
        'handlers': ['null'],
        'level': 'WARNING',
    },
}
