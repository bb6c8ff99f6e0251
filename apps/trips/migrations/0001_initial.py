import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Trip',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('title', models.CharField(max_length=200)),
                ('description', models.TextField(blank=True, null=True)),
                ('home_city', models.CharField(blank=True, max_length=255, null=True)),
                ('start_date', models.DateField(blank=True, null=True)),
                ('end_date', models.DateField(blank=True, null=True)),
                ('profile', models.JSONField(blank=True, null=True)),
                ('profile_id', models.CharField(blank=True, max_length=64, null=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='trips', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'trips',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='TripDay',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('date', models.DateField()),
                ('city', models.CharField(max_length=255)),
                ('notes', models.TextField(blank=True, null=True)),
                ('city_place_id', models.CharField(blank=True, max_length=255, null=True)),
                ('city_latitude', models.FloatField(blank=True, null=True)),
                ('city_longitude', models.FloatField(blank=True, null=True)),
                ('trip', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='days', to='trips.trip')),
            ],
            options={
                'db_table': 'trip_days',
                'ordering': ['date'],
                'indexes': [models.Index(fields=['trip', 'date'], name='trip_days_trip_id_5d7c1e_idx')],
            },
        ),
        migrations.CreateModel(
            name='Activity',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('title', models.CharField(max_length=255)),
                ('type', models.CharField(blank=True, max_length=50, null=True)),
                ('description', models.TextField(blank=True, null=True)),
                ('source', models.CharField(choices=[('manual', 'Manual'), ('ai', 'AI'), ('hotel', 'Hotel'), ('import', 'Import')], default='manual', max_length=10)),
                ('start_time', models.DateTimeField(blank=True, null=True)),
                ('end_time', models.DateTimeField(blank=True, null=True)),
                ('location', models.CharField(blank=True, max_length=255, null=True)),
                ('start_location', models.CharField(blank=True, max_length=255, null=True)),
                ('travel_distance_meters', models.IntegerField(blank=True, null=True)),
                ('travel_duration_seconds', models.IntegerField(blank=True, null=True)),
                ('travel_summary', models.CharField(blank=True, max_length=255, null=True)),
                ('travel_polyline', models.TextField(blank=True, null=True)),
                ('metadata', models.JSONField(blank=True, null=True)),
                ('trip_day', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='activities', to='trips.tripday')),
            ],
            options={
                'verbose_name_plural': 'activities',
                'db_table': 'activities',
                'ordering': ['start_time', 'created_at'],
                'indexes': [models.Index(fields=['trip_day', 'start_time'], name='activities_trip_da_8a41f2_idx')],
            },
        ),
        migrations.CreateModel(
            name='TravelSegment',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('from_city', models.CharField(max_length=255)),
                ('to_city', models.CharField(max_length=255)),
                ('mode', models.CharField(choices=[('car', 'Car'), ('train', 'Train'), ('flight', 'Flight'), ('boat', 'Boat'), ('transit', 'Transit'), ('walk', 'Walk')], default='car', max_length=10)),
                ('distance_km', models.FloatField(blank=True, null=True)),
                ('duration_minutes', models.IntegerField(blank=True, null=True)),
                ('warnings', models.JSONField(blank=True, null=True)),
                ('cached_at', models.DateTimeField(blank=True, null=True)),
                ('trip_day', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='travel_segments', to='trips.tripday')),
            ],
            options={
                'db_table': 'travel_segments',
                'ordering': ['created_at'],
            },
        ),
        migrations.CreateModel(
            name='Hotel',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('name', models.CharField(max_length=255)),
                ('provider_id', models.CharField(blank=True, max_length=255, null=True)),
                ('price_per_night', models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ('currency', models.CharField(blank=True, default='USD', max_length=3, null=True)),
                ('rating', models.FloatField(blank=True, null=True)),
                ('address', models.CharField(blank=True, max_length=500, null=True)),
                ('latitude', models.FloatField(blank=True, null=True)),
                ('longitude', models.FloatField(blank=True, null=True)),
                ('metadata', models.JSONField(blank=True, null=True)),
                ('trip_day', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='hotels', to='trips.tripday')),
            ],
            options={
                'db_table': 'hotels',
                'ordering': ['created_at'],
            },
        ),
        migrations.CreateModel(
            name='TripCollaborator',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('email', models.EmailField(db_index=True, max_length=254)),
                ('trip', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='collaborators', to='trips.trip')),
            ],
            options={
                'db_table': 'trip_collaborators',
                'ordering': ['created_at'],
                'constraints': [models.UniqueConstraint(fields=('trip', 'email'), name='unique_trip_collaborator')],
            },
        ),
    ]
