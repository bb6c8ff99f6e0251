"""
Admin configuration for the Users app.
"""
from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from apps.users.models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = [
        'email',
        'username',
        'display_name',
        'home_city',
        'credits',
        'is_active',
        'created_at',
    ]
    list_filter = [
        'is_active',
        'is_staff',
        'created_at',
    ]
    search_fields = ['email', 'username', 'display_name', 'firebase_uid']
    ordering = ['-created_at']

    fieldsets = BaseUserAdmin.fieldsets + (
        (
            'Traveler',
            {
                'fields': (
                    'display_name',
                    'firebase_uid',
                    'home_city',
                    'credits',
                    'saved_profiles',
                ),
            },
        ),
    )

    add_fieldsets = BaseUserAdmin.add_fieldsets + (
        (
            'Traveler',
            {
                'fields': (
                    'email',
                    'display_name',
                ),
            },
        ),
    )
