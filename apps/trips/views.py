"""
Views for the Trips app.
"""
import logging
from datetime import timedelta

from django.db import IntegrityError
from django.db.models import Prefetch, Q
from django_filters import rest_framework as filters
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.trips.models import Activity, Trip, TripCollaborator, TripDay
from apps.trips.serializers import (
    ActivityCreateSerializer,
    ActivitySerializer,
    ActivityUpdateSerializer,
    CollaboratorCreateSerializer,
    CollaboratorSerializer,
    TripCreateSerializer,
    TripDayCreateSerializer,
    TripDaySerializer,
    TripDayUpdateSerializer,
    TripSerializer,
    TripUpdateSerializer,
)
from apps.trips.services.travel import fetch_travel_metadata
from apps.trips.utils import combine_date_with_time
from apps.users.authentication import DemoUserAuthentication, FirebaseAuthentication

logger = logging.getLogger(__name__)

TRIP_LIST_LIMIT = 25

TRIP_AUTHENTICATION = [FirebaseAuthentication, DemoUserAuthentication]


def accessible_trips(user):
    """Trips the user owns or has been added to as a collaborator."""
    return Trip.objects.filter(
        Q(user=user) | Q(collaborators__email=(user.email or '').lower())
    ).distinct()


def _with_itinerary(queryset):
    return queryset.select_related('user').prefetch_related(
        Prefetch('days', queryset=TripDay.objects.order_by('date')),
        'days__activities',
        'days__travel_segments',
        'days__hotels',
    )


def get_owned_trip(user, trip_id):
    trip = Trip.objects.filter(id=trip_id, user=user).first()
    if trip is None:
        raise NotFound('Trip not found')
    return trip


def _apply_travel_metadata(activity, metadata):
    metadata = metadata or {}
    activity.travel_distance_meters = metadata.get('distanceMeters')
    activity.travel_duration_seconds = metadata.get('durationSeconds')
    activity.travel_summary = metadata.get('summary')
    activity.travel_polyline = metadata.get('polyline')


class TripFilter(filters.FilterSet):
    title = filters.CharFilter(field_name='title', lookup_expr='icontains')
    startsAfter = filters.DateFilter(field_name='start_date', lookup_expr='gte')
    startsBefore = filters.DateFilter(field_name='start_date', lookup_expr='lte')

    class Meta:
        model = Trip
        fields = ['title', 'startsAfter', 'startsBefore']


class TripViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Trip CRUD operations.

    list:          GET    /api/trips/?title=<text>&startsAfter=<date>
    create:        POST   /api/trips/
    read:          GET    /api/trips/{id}/
    update:        PATCH  /api/trips/{id}/
    delete:        DELETE /api/trips/{id}/
    collaborators: GET|POST /api/trips/{id}/collaborators/

    Collaborators can read a shared trip; every change is owner-only.
    """
    authentication_classes = TRIP_AUTHENTICATION
    permission_classes = [IsAuthenticated]
    filterset_class = TripFilter
    http_method_names = ['get', 'post', 'patch', 'delete', 'head', 'options']
    lookup_value_regex = '[0-9a-f-]{36}'

    def get_queryset(self):
        if self.action in ('list', 'retrieve'):
            queryset = accessible_trips(self.request.user)
        else:
            queryset = Trip.objects.filter(user=self.request.user)
        return _with_itinerary(queryset).order_by('-created_at')

    def get_object(self):
        trip = self.get_queryset().filter(pk=self.kwargs['pk']).first()
        if trip is None:
            raise NotFound('Trip not found')
        return trip

    def get_serializer_class(self):
        if self.action == 'create':
            return TripCreateSerializer
        if self.action == 'partial_update':
            return TripUpdateSerializer
        return TripSerializer

    def list(self, request, *args, **kwargs):
        queryset = self.filter_queryset(self.get_queryset())[:TRIP_LIST_LIMIT]
        user = request.user
        return Response({
            'success': True,
            'trips': TripSerializer(queryset, many=True, context={'request': request}).data,
            'user': {
                'id': str(user.id),
                'credits': user.credits,
                'displayName': user.display_name,
                'email': user.email,
            },
        })

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        trip = serializer.save()
        logger.info('Trip %s created by %s with %d days', trip.id, request.user.id, trip.days.count())

        trip = _with_itinerary(Trip.objects.filter(pk=trip.pk)).get()
        return Response(
            {
                'success': True,
                'trip': TripSerializer(trip, context={'request': request}).data,
            },
            status=status.HTTP_201_CREATED,
        )

    def retrieve(self, request, *args, **kwargs):
        instance = self.get_object()
        serializer = TripSerializer(instance, context={'request': request})
        return Response({'success': True, 'trip': serializer.data})

    def partial_update(self, request, *args, **kwargs):
        instance = self.get_object()
        serializer = TripUpdateSerializer(instance, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()

        trip = _with_itinerary(Trip.objects.filter(pk=instance.pk)).get()
        return Response({
            'success': True,
            'trip': TripSerializer(trip, context={'request': request}).data,
        })

    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()
        trip_id = instance.id
        instance.delete()
        logger.info('Trip %s deleted by %s', trip_id, request.user.id)
        return Response({'success': True})

    @action(detail=True, methods=['get', 'post'])
    def collaborators(self, request, pk=None):
        """
        Share a trip by email, or list who it is shared with.

        POST /api/trips/{id}/collaborators/
        Body: {"email": "friend@example.com"}
        """
        trip = Trip.objects.filter(id=pk, user=request.user).first()
        if trip is None:
            raise NotFound('Trip not found or not owned')

        if request.method == 'GET':
            return Response({
                'success': True,
                'collaborators': CollaboratorSerializer(trip.collaborators.all(), many=True).data,
            })

        serializer = CollaboratorCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        email = serializer.validated_data['email']

        try:
            TripCollaborator.objects.get_or_create(trip=trip, email=email)
        except IntegrityError:
            # Concurrent add of the same address.
            pass
        logger.info('Trip %s shared with %s', trip.id, email)
        return Response({'success': True, 'added': True})


class TripDayViewSet(viewsets.GenericViewSet):
    """
    Days of a trip the caller owns.

    create: POST  /api/trips/{trip_id}/days/
    update: PATCH /api/trips/{trip_id}/days/{id}/
    """
    authentication_classes = TRIP_AUTHENTICATION
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        return TripDay.objects.filter(
            trip_id=self.kwargs['trip_pk'],
            trip__user=self.request.user,
        )

    def create(self, request, trip_pk=None):
        trip = get_owned_trip(request.user, trip_pk)
        serializer = TripDayCreateSerializer(data=request.data, context={'trip': trip})
        serializer.is_valid(raise_exception=True)
        day = serializer.save()
        return Response(
            {'success': True, 'day': TripDaySerializer(day).data},
            status=status.HTTP_201_CREATED,
        )

    def partial_update(self, request, trip_pk=None, pk=None):
        day = self.get_queryset().filter(pk=pk).first()
        if day is None:
            raise NotFound('Day not found')

        serializer = TripDayUpdateSerializer(day, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        day = serializer.save()
        return Response({
            'success': True,
            'day': {
                'id': str(day.id),
                'date': day.date.isoformat(),
                'city': day.city,
                'notes': day.notes,
            },
        })


class ActivityViewSet(viewsets.GenericViewSet):
    """
    Activities scheduled on a trip day.

    create: POST   /api/trips/{trip_id}/days/{day_id}/activities/
    update: PATCH  /api/trips/{trip_id}/days/{day_id}/activities/{id}/
    delete: DELETE /api/trips/{trip_id}/days/{day_id}/activities/{id}/

    Times are ``HH:MM`` on the day's date. When both ``startLocation`` and
    ``location`` are known the driving estimate between them is stored.
    """
    authentication_classes = TRIP_AUTHENTICATION
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        return Activity.objects.filter(
            trip_day_id=self.kwargs['day_pk'],
            trip_day__trip_id=self.kwargs['trip_pk'],
            trip_day__trip__user=self.request.user,
        ).select_related('trip_day')

    def get_activity(self):
        activity = self.get_queryset().filter(pk=self.kwargs['pk']).first()
        if activity is None:
            raise NotFound('Activity not found')
        return activity

    def create(self, request, trip_pk=None, day_pk=None):
        trip = get_owned_trip(request.user, trip_pk)
        day = trip.days.filter(pk=day_pk).first()
        if day is None:
            raise NotFound('Day not found')

        serializer = ActivityCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        start_time = combine_date_with_time(day.date, data['time'])
        if start_time is None:
            raise ValidationError({'time': ['Invalid time']})
        end_time = None
        if data.get('endTime'):
            end_time = combine_date_with_time(day.date, data['endTime'])
            if end_time is None:
                raise ValidationError({'endTime': ['Invalid end time']})
            if end_time < start_time:
                end_time = start_time + timedelta(hours=1)

        activity = Activity(
            trip_day=day,
            title=data['title'],
            description=data.get('notes') or None,
            type=data.get('type') or None,
            source=data.get('source', Activity.Source.MANUAL),
            start_time=start_time,
            end_time=end_time,
            location=data.get('location') or None,
            start_location=data.get('startLocation') or None,
            metadata=data.get('metadata'),
        )
        if activity.start_location and activity.location:
            _apply_travel_metadata(
                activity, fetch_travel_metadata(activity.start_location, activity.location),
            )
        activity.save()

        return Response(
            {'success': True, 'activity': ActivitySerializer(activity).data},
            status=status.HTTP_201_CREATED,
        )

    def partial_update(self, request, trip_pk=None, day_pk=None, pk=None):
        activity = self.get_activity()
        serializer = ActivityUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        day_date = activity.trip_day.date

        if 'title' in data:
            activity.title = data['title']
        if 'notes' in data:
            activity.description = data['notes']

        start_time = end_time = None
        if 'startTime' in data:
            start_time = combine_date_with_time(day_date, data['startTime'])
            if start_time is None:
                raise ValidationError({'startTime': ['Invalid start time']})
            activity.start_time = start_time
        if 'endTime' in data:
            end_time = combine_date_with_time(day_date, data['endTime'])
            if end_time is None:
                raise ValidationError({'endTime': ['Invalid end time']})
            activity.end_time = end_time
        if start_time and end_time and end_time < start_time:
            activity.end_time = start_time + timedelta(hours=1)

        if 'location' in data:
            activity.location = data['location'] or None
        if 'startLocation' in data:
            activity.start_location = data['startLocation'] or None
        if 'type' in data:
            activity.type = data['type'] or None
        if 'metadata' in data:
            activity.metadata = data['metadata']

        if 'location' in data or 'startLocation' in data:
            metadata = None
            if activity.start_location and activity.location:
                metadata = fetch_travel_metadata(activity.start_location, activity.location)
            _apply_travel_metadata(activity, metadata)

        activity.save()
        return Response({'success': True, 'activity': ActivitySerializer(activity).data})

    def destroy(self, request, trip_pk=None, day_pk=None, pk=None):
        activity = self.get_activity()
        activity.delete()
        return Response({'success': True})
