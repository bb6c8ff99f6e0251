"""
Custom User model for The Trip API.
"""
import uuid

from django.conf import settings
from django.contrib.auth.models import AbstractUser
from django.db import models


def default_credits():
    return settings.STARTING_CREDITS


class User(AbstractUser):
    """
    Traveler account.

    Accounts are provisioned on first request from a verified Firebase ID
    token (keyed by ``firebase_uid``) or from a demo identity header (keyed
    by ``username``). Email is the login identifier for the admin site.
    """
    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
    )
    email = models.EmailField(
        unique=True,
        db_index=True,
        error_messages={
            'unique': 'A user with that email already exists.',
        },
    )
    firebase_uid = models.CharField(
        max_length=128,
        unique=True,
        blank=True,
        null=True,
        db_index=True,
        help_text='Firebase Authentication UID.',
    )
    display_name = models.CharField(max_length=255, blank=True, default='')
    home_city = models.CharField(max_length=255, blank=True, null=True)
    credits = models.IntegerField(
        default=default_credits,
        help_text='Planning credits available to the traveler.',
    )
    saved_profiles = models.JSONField(
        default=list,
        blank=True,
        help_text='Reusable traveler profiles attached to trips.',
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['username']

    class Meta:
        db_table = 'users'
        verbose_name = 'User'
        verbose_name_plural = 'Users'
        ordering = ['-created_at']

    def __str__(self):
        if self.display_name:
            return f'{self.display_name} ({self.email})'
        return self.email

    @property
    def is_demo(self):
        return self.username.startswith('demo-')
