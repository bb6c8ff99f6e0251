"""
The Trip - Root URL Configuration
"""
import logging
import time

from django.conf import settings
from django.contrib import admin
from django.db import DatabaseError, connection
from django.urls import include, path
from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

logger = logging.getLogger(__name__)


@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def health_check(request):
    started = time.monotonic()
    try:
        with connection.cursor() as cursor:
            cursor.execute('SELECT 1')
            cursor.fetchone()
    except DatabaseError as exc:
        logger.error('Health check failed: %s', exc)
        return Response(
            {'status': 'error', 'message': 'Database connectivity failed'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return Response({
        'status': 'ok',
        'database': 'connected',
        'latencyMs': round((time.monotonic() - started) * 1000),
        'aiConfigured': bool(settings.ANTHROPIC_API_KEY),
        'mapsConfigured': bool(settings.GOOGLE_MAPS_API_KEY),
        'timestamp': timezone.now().isoformat(),
    })


urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/health/', health_check, name='health-check'),
    path('api/', include('apps.users.urls')),
    path('api/trips/', include('apps.trips.urls')),
    path('api/ai/', include('apps.ai_services.urls')),
    path('api/maps/', include('apps.maps.urls')),
    path('api/hotels/', include('apps.hotels.urls')),
]

# API documentation
if settings.DEBUG:
    from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView
    urlpatterns += [
        path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
        path('api/docs/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),
    ]
