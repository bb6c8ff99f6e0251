"""
Models for the AI Services app.
"""
import uuid

from django.db import models


class AISuggestion(models.Model):
    """
    Activity suggestions generated for a city/day/interests combination,
    keyed by a SHA-256 of the request.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    trip = models.ForeignKey(
        'trips.Trip',
        on_delete=models.CASCADE,
        related_name='suggestions',
        null=True,
        blank=True,
    )
    city = models.CharField(max_length=255, blank=True, null=True)
    day = models.DateField(null=True, blank=True)
    hash = models.CharField(max_length=64, unique=True)
    payload = models.JSONField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'ai_suggestions'
        ordering = ['-created_at']

    def __str__(self):
        return f'Suggestions for {self.city}'
