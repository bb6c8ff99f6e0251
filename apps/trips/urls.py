"""
URL configuration for the Trips app.
"""
from django.urls import include, path
from rest_framework.routers import SimpleRouter

from apps.trips.views import ActivityViewSet, TripDayViewSet, TripViewSet

app_name = 'trips'

router = SimpleRouter()
router.register(r'', TripViewSet, basename='trip')

# Nested routes for days and activities
day_list = TripDayViewSet.as_view({
    'post': 'create',
})
day_detail = TripDayViewSet.as_view({
    'patch': 'partial_update',
})
activity_list = ActivityViewSet.as_view({
    'post': 'create',
})
activity_detail = ActivityViewSet.as_view({
    'patch': 'partial_update',
    'delete': 'destroy',
})

urlpatterns = [
    path(
        '<uuid:trip_pk>/days/',
        day_list,
        name='trip-day-list',
    ),
    path(
        '<uuid:trip_pk>/days/<uuid:pk>/',
        day_detail,
        name='trip-day-detail',
    ),
    path(
        '<uuid:trip_pk>/days/<uuid:day_pk>/activities/',
        activity_list,
        name='trip-activity-list',
    ),
    path(
        '<uuid:trip_pk>/days/<uuid:day_pk>/activities/<uuid:pk>/',
        activity_detail,
        name='trip-activity-detail',
    ),
    path('', include(router.urls)),
]
