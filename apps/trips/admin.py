"""
Admin configuration for the Trips app.
"""
from django.contrib import admin

from apps.trips.models import Activity, Hotel, TravelSegment, Trip, TripCollaborator, TripDay


class TripDayInline(admin.TabularInline):
    model = TripDay
    extra = 0
    ordering = ['date']
    fields = ['date', 'city', 'notes']


class TripCollaboratorInline(admin.TabularInline):
    model = TripCollaborator
    extra = 0


class ActivityInline(admin.TabularInline):
    model = Activity
    extra = 0
    fields = ['title', 'type', 'source', 'start_time', 'end_time', 'location']


@admin.register(Trip)
class TripAdmin(admin.ModelAdmin):
    list_display = ['title', 'user', 'home_city', 'start_date', 'end_date', 'created_at']
    list_filter = ['start_date', 'created_at']
    search_fields = ['title', 'description', 'home_city', 'user__email']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [TripDayInline, TripCollaboratorInline]


@admin.register(TripDay)
class TripDayAdmin(admin.ModelAdmin):
    list_display = ['date', 'city', 'trip']
    search_fields = ['city', 'trip__title']
    ordering = ['trip', 'date']
    inlines = [ActivityInline]


@admin.register(Activity)
class ActivityAdmin(admin.ModelAdmin):
    list_display = ['title', 'trip_day', 'source', 'start_time', 'end_time']
    list_filter = ['source', 'type']
    search_fields = ['title', 'description', 'location']


@admin.register(TravelSegment)
class TravelSegmentAdmin(admin.ModelAdmin):
    list_display = ['from_city', 'to_city', 'mode', 'distance_km', 'duration_minutes']
    list_filter = ['mode']


@admin.register(Hotel)
class HotelAdmin(admin.ModelAdmin):
    list_display = ['name', 'trip_day', 'price_per_night', 'currency', 'rating']
    search_fields = ['name', 'address']
