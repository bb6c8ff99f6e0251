"""
Models for the Trips app.
"""
from django.conf import settings
from django.db import models

from common.models import TimestampedModel


class Trip(TimestampedModel):
    """
    A trip owned by a single traveler, split into dated days.
    """
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='trips',
    )
    title = models.CharField(max_length=200)
    description = models.TextField(blank=True, null=True)
    home_city = models.CharField(max_length=255, blank=True, null=True)
    start_date = models.DateField(null=True, blank=True)
    end_date = models.DateField(null=True, blank=True)
    profile = models.JSONField(null=True, blank=True)
    profile_id = models.CharField(max_length=64, blank=True, null=True)

    class Meta:
        db_table = 'trips'
        ordering = ['-created_at']

    def __str__(self):
        return self.title

    def clean(self):
        from django.core.exceptions import ValidationError
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValidationError('End date must be after start date.')


class TripDay(TimestampedModel):
    trip = models.ForeignKey(
        Trip,
        on_delete=models.CASCADE,
        related_name='days',
    )
    date = models.DateField()
    city = models.CharField(max_length=255)
    notes = models.TextField(blank=True, null=True)
    city_place_id = models.CharField(max_length=255, blank=True, null=True)
    city_latitude = models.FloatField(null=True, blank=True)
    city_longitude = models.FloatField(null=True, blank=True)

    class Meta:
        db_table = 'trip_days'
        ordering = ['date']
        indexes = [
            models.Index(fields=['trip', 'date']),
        ]

    def __str__(self):
        return f'{self.date:%Y-%m-%d} in {self.city}'


class Activity(TimestampedModel):
    """
    Something scheduled on a trip day. When both ``start_location`` and
    ``location`` are known, the ``travel_*`` fields hold the driving
    estimate between them.
    """
    class Source(models.TextChoices):
        MANUAL = 'manual', 'Manual'
        AI = 'ai', 'AI'
        HOTEL = 'hotel', 'Hotel'
        IMPORT = 'import', 'Import'

    trip_day = models.ForeignKey(
        TripDay,
        on_delete=models.CASCADE,
        related_name='activities',
    )
    title = models.CharField(max_length=255)
    type = models.CharField(max_length=50, blank=True, null=True)
    description = models.TextField(blank=True, null=True)
    source = models.CharField(
        max_length=10,
        choices=Source.choices,
        default=Source.MANUAL,
    )
    start_time = models.DateTimeField(null=True, blank=True)
    end_time = models.DateTimeField(null=True, blank=True)
    location = models.CharField(max_length=255, blank=True, null=True)
    start_location = models.CharField(max_length=255, blank=True, null=True)
    travel_distance_meters = models.IntegerField(null=True, blank=True)
    travel_duration_seconds = models.IntegerField(null=True, blank=True)
    travel_summary = models.CharField(max_length=255, blank=True, null=True)
    travel_polyline = models.TextField(blank=True, null=True)
    metadata = models.JSONField(null=True, blank=True)

    class Meta:
        db_table = 'activities'
        ordering = ['start_time', 'created_at']
        verbose_name_plural = 'activities'
        indexes = [
            models.Index(fields=['trip_day', 'start_time']),
        ]

    def __str__(self):
        return self.title


class TravelSegment(TimestampedModel):
    class Mode(models.TextChoices):
        CAR = 'car', 'Car'
        TRAIN = 'train', 'Train'
        FLIGHT = 'flight', 'Flight'
        BOAT = 'boat', 'Boat'
        TRANSIT = 'transit', 'Transit'
        WALK = 'walk', 'Walk'

    trip_day = models.ForeignKey(
        TripDay,
        on_delete=models.CASCADE,
        related_name='travel_segments',
    )
    from_city = models.CharField(max_length=255)
    to_city = models.CharField(max_length=255)
    mode = models.CharField(max_length=10, choices=Mode.choices, default=Mode.CAR)
    distance_km = models.FloatField(null=True, blank=True)
    duration_minutes = models.IntegerField(null=True, blank=True)
    warnings = models.JSONField(null=True, blank=True)
    cached_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = 'travel_segments'
        ordering = ['created_at']

    def __str__(self):
        return f'{self.from_city} → {self.to_city} ({self.mode})'


class Hotel(TimestampedModel):
    trip_day = models.ForeignKey(
        TripDay,
        on_delete=models.CASCADE,
        related_name='hotels',
    )
    name = models.CharField(max_length=255)
    provider_id = models.CharField(max_length=255, blank=True, null=True)
    price_per_night = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    currency = models.CharField(max_length=3, default='USD', blank=True, null=True)
    rating = models.FloatField(null=True, blank=True)
    address = models.CharField(max_length=500, blank=True, null=True)
    latitude = models.FloatField(null=True, blank=True)
    longitude = models.FloatField(null=True, blank=True)
    metadata = models.JSONField(null=True, blank=True)

    class Meta:
        db_table = 'hotels'
        ordering = ['created_at']

    def __str__(self):
        return self.name


class TripCollaborator(TimestampedModel):
    """
    An email address the owner has shared the trip with.
    """
    trip = models.ForeignKey(
        Trip,
        on_delete=models.CASCADE,
        related_name='collaborators',
    )
    email = models.EmailField(db_index=True)

    class Meta:
        db_table = 'trip_collaborators'
        ordering = ['created_at']
        constraints = [
            models.UniqueConstraint(fields=['trip', 'email'], name='unique_trip_collaborator'),
        ]

    def __str__(self):
        return f'{self.email} on {self.trip}'

    def save(self, *args, **kwargs):
        self.email = self.email.lower()
        super().save(*args, **kwargs)

