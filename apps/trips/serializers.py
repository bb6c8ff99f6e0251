"""
Serializers for the Trips app.
All output uses camelCase to match the web client.
"""
from django.conf import settings
from rest_framework import serializers

from apps.trips.models import Activity, Hotel, TravelSegment, Trip, TripCollaborator, TripDay
from apps.trips.utils import TIME_RE, build_day_dates, day_span, parse_trip_date


class ActivitySerializer(serializers.ModelSerializer):
    tripDayId = serializers.CharField(source='trip_day_id', read_only=True)
    startTime = serializers.DateTimeField(source='start_time', read_only=True)
    endTime = serializers.DateTimeField(source='end_time', read_only=True)
    startLocation = serializers.CharField(source='start_location', read_only=True)
    travelDistanceMeters = serializers.IntegerField(source='travel_distance_meters', read_only=True)
    travelDurationSeconds = serializers.IntegerField(source='travel_duration_seconds', read_only=True)
    travelSummary = serializers.CharField(source='travel_summary', read_only=True)
    travelPolyline = serializers.CharField(source='travel_polyline', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Activity
        fields = [
            'id', 'tripDayId', 'title', 'type', 'description', 'source',
            'startTime', 'endTime', 'location', 'startLocation',
            'travelDistanceMeters', 'travelDurationSeconds',
            'travelSummary', 'travelPolyline', 'metadata',
            'createdAt', 'updatedAt',
        ]
        read_only_fields = fields


class TravelSegmentSerializer(serializers.ModelSerializer):
    tripDayId = serializers.CharField(source='trip_day_id', read_only=True)
    fromCity = serializers.CharField(source='from_city', read_only=True)
    toCity = serializers.CharField(source='to_city', read_only=True)
    distanceKm = serializers.FloatField(source='distance_km', read_only=True)
    durationMinutes = serializers.IntegerField(source='duration_minutes', read_only=True)
    cachedAt = serializers.DateTimeField(source='cached_at', read_only=True)

    class Meta:
        model = TravelSegment
        fields = [
            'id', 'tripDayId', 'fromCity', 'toCity', 'mode',
            'distanceKm', 'durationMinutes', 'warnings', 'cachedAt',
        ]
        read_only_fields = fields


class HotelSerializer(serializers.ModelSerializer):
    tripDayId = serializers.CharField(source='trip_day_id', read_only=True)
    providerId = serializers.CharField(source='provider_id', read_only=True)
    pricePerNight = serializers.DecimalField(
        source='price_per_night', max_digits=10, decimal_places=2, read_only=True, coerce_to_string=False,
    )

    class Meta:
        model = Hotel
        fields = [
            'id', 'tripDayId', 'name', 'providerId', 'pricePerNight', 'currency',
            'rating', 'address', 'latitude', 'longitude', 'metadata',
        ]
        read_only_fields = fields


class TripDaySerializer(serializers.ModelSerializer):
    tripId = serializers.CharField(source='trip_id', read_only=True)
    cityPlaceId = serializers.CharField(source='city_place_id', read_only=True)
    cityLatitude = serializers.FloatField(source='city_latitude', read_only=True)
    cityLongitude = serializers.FloatField(source='city_longitude', read_only=True)

    class Meta:
        model = TripDay
        fields = [
            'id', 'tripId', 'date', 'city', 'notes',
            'cityPlaceId', 'cityLatitude', 'cityLongitude',
        ]
        read_only_fields = fields


class TripDayDetailSerializer(TripDaySerializer):
    activities = ActivitySerializer(many=True, read_only=True)
    travelSegments = TravelSegmentSerializer(source='travel_segments', many=True, read_only=True)
    hotels = HotelSerializer(many=True, read_only=True)

    class Meta(TripDaySerializer.Meta):
        fields = TripDaySerializer.Meta.fields + ['activities', 'travelSegments', 'hotels']
        read_only_fields = fields


class TripSerializer(serializers.ModelSerializer):
    userId = serializers.CharField(source='user_id', read_only=True)
    homeCity = serializers.CharField(source='home_city', read_only=True)
    startDate = serializers.DateField(source='start_date', read_only=True)
    endDate = serializers.DateField(source='end_date', read_only=True)
    profileId = serializers.CharField(source='profile_id', read_only=True)
    isOwner = serializers.SerializerMethodField()
    days = TripDayDetailSerializer(many=True, read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Trip
        fields = [
            'id', 'userId', 'title', 'description', 'homeCity',
            'startDate', 'endDate', 'profileId', 'profile', 'isOwner',
            'days', 'createdAt', 'updatedAt',
        ]
        read_only_fields = fields

    def get_isOwner(self, obj):
        request = self.context.get('request')
        if request is None:
            return True
        return obj.user_id == request.user.id


class CollaboratorSerializer(serializers.ModelSerializer):
    tripId = serializers.CharField(source='trip_id', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = TripCollaborator
        fields = ['id', 'tripId', 'email', 'createdAt']
        read_only_fields = fields


def _validate_optional_date(value, field_name):
    if value in (None, ''):
        return None
    parsed = parse_trip_date(value)
    if parsed is None:
        raise serializers.ValidationError({field_name: 'Enter a valid date.'})
    return parsed


class TripCreateSerializer(serializers.Serializer):
    """
    Creates a trip and one day per date in its range, each placed in
    ``homeCity`` (or the default home city).
    """
    title = serializers.CharField(min_length=1, max_length=200)
    startDate = serializers.CharField(required=False, allow_blank=True)
    endDate = serializers.CharField(required=False, allow_blank=True)
    homeCity = serializers.CharField(max_length=255, required=False, allow_blank=True)
    description = serializers.CharField(required=False, allow_blank=True)

    def validate(self, attrs):
        start_date = _validate_optional_date(attrs.get('startDate'), 'startDate')
        end_date = _validate_optional_date(attrs.get('endDate'), 'endDate')
        if start_date and end_date and start_date > end_date:
            raise serializers.ValidationError({'endDate': 'End date must be after start date.'})

        if day_span(start_date, end_date) > settings.MAX_TRIP_DAYS:
            raise serializers.ValidationError(
                {'endDate': f'Trips can span at most {settings.MAX_TRIP_DAYS} days.'}
            )

        attrs['startDate'] = start_date
        attrs['endDate'] = end_date
        attrs['dayDates'] = build_day_dates(start_date, end_date)
        return attrs

    def create(self, validated_data):
        home_city = validated_data.get('homeCity') or None
        trip = Trip.objects.create(
            user=self.context['request'].user,
            title=validated_data['title'],
            description=validated_data.get('description'),
            home_city=home_city,
            start_date=validated_data['startDate'],
            end_date=validated_data['endDate'],
        )
        city = home_city or settings.DEFAULT_HOME_CITY
        TripDay.objects.bulk_create([
            TripDay(trip=trip, date=day, city=city)
            for day in validated_data['dayDates']
        ])
        return trip


class TripUpdateSerializer(serializers.Serializer):
    """Partial trip update. An empty date string clears that date."""
    title = serializers.CharField(min_length=1, max_length=200, required=False)
    description = serializers.CharField(required=False, allow_blank=True)
    homeCity = serializers.CharField(max_length=255, required=False, allow_blank=True)
    startDate = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    endDate = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    profileId = serializers.CharField(max_length=64, required=False)
    profile = serializers.DictField(required=False)

    field_map = {
        'title': 'title',
        'description': 'description',
        'homeCity': 'home_city',
        'startDate': 'start_date',
        'endDate': 'end_date',
        'profileId': 'profile_id',
        'profile': 'profile',
    }

    def validate_startDate(self, value):
        return _validate_optional_date(value, 'startDate')

    def validate_endDate(self, value):
        return _validate_optional_date(value, 'endDate')

    def validate(self, attrs):
        start_date = attrs.get('startDate', self.instance.start_date)
        end_date = attrs.get('endDate', self.instance.end_date)
        if start_date and end_date and start_date > end_date:
            raise serializers.ValidationError({'endDate': 'End date must be after start date.'})
        return attrs

    def update(self, instance, validated_data):
        for key, attr in self.field_map.items():
            if key in validated_data:
                setattr(instance, attr, validated_data[key])
        instance.save()
        return instance


class CollaboratorCreateSerializer(serializers.Serializer):
    email = serializers.EmailField()

    def validate_email(self, value):
        return value.lower()


class TripDayCreateSerializer(serializers.Serializer):
    date = serializers.CharField(min_length=1)
    city = serializers.CharField(min_length=1, max_length=255)
    notes = serializers.CharField(required=False, allow_blank=True)
    cityPlaceId = serializers.CharField(required=False, allow_null=True, max_length=255)
    cityLatitude = serializers.FloatField(required=False, allow_null=True)
    cityLongitude = serializers.FloatField(required=False, allow_null=True)

    def validate_date(self, value):
        parsed = parse_trip_date(value)
        if parsed is None:
            raise serializers.ValidationError('Invalid date')
        return parsed

    def create(self, validated_data):
        return TripDay.objects.create(
            trip=self.context['trip'],
            date=validated_data['date'],
            city=validated_data['city'],
            notes=validated_data.get('notes') or None,
            city_place_id=validated_data.get('cityPlaceId'),
            city_latitude=validated_data.get('cityLatitude'),
            city_longitude=validated_data.get('cityLongitude'),
        )


class TripDayUpdateSerializer(serializers.Serializer):
    city = serializers.CharField(required=False, max_length=255)
    notes = serializers.CharField(required=False, allow_blank=True)

    def update(self, instance, validated_data):
        if 'city' in validated_data:
            instance.city = validated_data['city']
        if 'notes' in validated_data:
            instance.notes = validated_data['notes']
        instance.save()
        return instance


class ClockTimeField(serializers.CharField):
    """A 24-hour ``HH:MM`` string."""
    default_error_messages = {
        'invalid_clock': 'Use 24-hour HH:MM format.',
    }

    def to_internal_value(self, data):
        value = super().to_internal_value(data)
        if not TIME_RE.match(value):
            self.fail('invalid_clock')
        return value


class ActivityCreateSerializer(serializers.Serializer):
    title = serializers.CharField(min_length=1, max_length=255)
    time = ClockTimeField()
    notes = serializers.CharField(required=False, allow_blank=True)
    endTime = ClockTimeField(required=False)
    location = serializers.CharField(required=False, allow_blank=True, max_length=255)
    startLocation = serializers.CharField(required=False, allow_blank=True, max_length=255)
    type = serializers.CharField(required=False, allow_blank=True, max_length=50)
    source = serializers.ChoiceField(choices=Activity.Source.choices, required=False)
    metadata = serializers.DictField(required=False)


class ActivityUpdateSerializer(serializers.Serializer):
    title = serializers.CharField(min_length=1, max_length=255, required=False)
    notes = serializers.CharField(required=False, allow_blank=True)
    startTime = ClockTimeField(required=False)
    endTime = ClockTimeField(required=False)
    location = serializers.CharField(required=False, allow_blank=True, max_length=255)
    startLocation = serializers.CharField(required=False, allow_blank=True, max_length=255)
    type = serializers.CharField(required=False, allow_blank=True, max_length=50)
    metadata = serializers.DictField(required=False)
