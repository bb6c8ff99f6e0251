"""
Signals for the Users app.
"""
import logging

from django.db.models.signals import post_save
from django.dispatch import receiver

logger = logging.getLogger(__name__)


@receiver(post_save, sender='users.User')
def user_post_save(sender, instance, created, **kwargs):
    """
    Log account provisioning (Firebase sign-in, demo identity or admin).
    """
    if created:
        logger.info(
            'New account provisioned: %s (id=%s, credits=%s)',
            instance.email,
            instance.id,
            instance.credits,
        )
