"""
Management command to seed a demo traveler with a sample trip.

Creates the ``demo-explorer`` account (the same identity the dashboard's
demo header produces for ``{"id": "explorer"}``) and a three-day Lisbon
trip with activities, so the API returns meaningful data right away.

Usage:
    python manage.py seed_demo_trip
    python manage.py seed_demo_trip --reset  # wipe the demo trip first
"""
from datetime import timedelta

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from apps.trips.models import Activity, Trip, TripDay
from apps.trips.utils import build_day_dates, combine_date_with_time

User = get_user_model()

DEMO_USERNAME = 'demo-explorer'
DEMO_EMAIL = 'demo-explorer@demo.thetrip'
DEMO_TRIP_TITLE = 'Long weekend in Lisbon'

DEMO_DAYS = [
    {
        'city': 'Lisbon',
        'notes': 'Arrival day, keep it light.',
        'activities': [
            ('Check in at Baixa hotel', '15:00', '15:30', 'hotel', 'Rua Augusta, Lisbon'),
            ('Sunset at Miradouro da Senhora do Monte', '19:00', '20:00', 'sightseeing', 'Miradouro da Senhora do Monte'),
        ],
    },
    {
        'city': 'Sintra',
        'notes': 'Day trip by train from Rossio.',
        'activities': [
            ('Pena Palace', '10:00', '12:30', 'sightseeing', 'Pena Palace, Sintra'),
            ('Quinta da Regaleira', '14:00', '16:00', 'sightseeing', 'Quinta da Regaleira, Sintra'),
        ],
    },
    {
        'city': 'Lisbon',
        'notes': None,
        'activities': [
            ('Pastéis de Belém', '09:30', '10:00', 'food', 'Pastéis de Belém, Lisbon'),
            ('Jerónimos Monastery', '10:15', '12:00', 'museum', 'Jerónimos Monastery, Lisbon'),
            ('Dinner in Alfama', '20:00', '22:00', 'food', 'Alfama, Lisbon'),
        ],
    },
]


class Command(BaseCommand):
    help = 'Seed a demo traveler and a three-day sample trip'

    def add_arguments(self, parser):
        parser.add_argument(
            '--reset',
            action='store_true',
            help='Delete the existing demo trip before seeding',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        user = self._seed_user()

        if options['reset']:
            deleted, _ = Trip.objects.filter(user=user, title=DEMO_TRIP_TITLE).delete()
            self.stdout.write(f'Removed {deleted} existing demo rows.')

        if Trip.objects.filter(user=user, title=DEMO_TRIP_TITLE).exists():
            self.stdout.write(self.style.WARNING('Demo trip already exists; use --reset to recreate it.'))
            return

        trip = self._seed_trip(user)
        self.stdout.write(self.style.SUCCESS(f'Demo trip seeded: {trip.title} ({trip.id})'))
        self.stdout.write(f'Use header  X-Trip-Demo-User: {{"id": "explorer"}}  to sign in as {user.email}')

    # -----------------------------------------------------------------------

    def _seed_user(self):
        user, created = User.objects.get_or_create(
            username=DEMO_USERNAME,
            defaults={
                'email': DEMO_EMAIL,
                'display_name': 'Demo Explorer',
                'home_city': 'Lisbon',
            },
        )
        if created:
            user.set_unusable_password()
            user.save(update_fields=['password'])
        self.stdout.write(f"  {'created' if created else 'found'}: {user.email}")
        return user

    def _seed_trip(self, user):
        start = timezone.localdate() + timedelta(days=14)
        dates = build_day_dates(start, start + timedelta(days=len(DEMO_DAYS) - 1))

        trip = Trip.objects.create(
            user=user,
            title=DEMO_TRIP_TITLE,
            description='Tiles, trams and custard tarts.',
            home_city='Lisbon',
            start_date=dates[0],
            end_date=dates[-1],
        )

        for day_date, day_data in zip(dates, DEMO_DAYS):
            day = TripDay.objects.create(
                trip=trip,
                date=day_date,
                city=day_data['city'],
                notes=day_data['notes'],
            )
            for title, start_time, end_time, kind, location in day_data['activities']:
                Activity.objects.create(
                    trip_day=day,
                    title=title,
                    type=kind,
                    start_time=combine_date_with_time(day_date, start_time),
                    end_time=combine_date_with_time(day_date, end_time),
                    location=location,
                )
            self.stdout.write(f'  {day_date}: {day.city} ({len(day_data["activities"])} activities)')
        return trip
