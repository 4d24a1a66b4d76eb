"""
Real-time push provider (Pusher).

Credentials saved in core.SystemSettings win over the PUSHER_* environment
settings. When neither is configured there is no publisher and deliveries
stay in the outbox.
"""

import logging

import pusher
from django.conf import settings

from config.constants import PUSH_GLOBAL_CHANNEL
from core.models import SystemSettings
from core.security import decrypt_value

logger = logging.getLogger('apps.notifications')


def user_channel_name(user_id):
    return f"user-{user_id}"


def global_channel_name():
    return PUSH_GLOBAL_CHANNEL


def build_publisher():
    """Return a configured ``pusher.Pusher`` client, or None if push is not set up."""
    config = SystemSettings.load()
    timeout = config.push_timeout_seconds or settings.PUSHER_TIMEOUT_SECONDS

    if config.has_pusher_credentials:
        secret = decrypt_value(config.encrypted_pusher_secret)
        if secret:
            return pusher.Pusher(
                app_id=config.pusher_app_id,
                key=config.pusher_key,
                secret=secret,
                cluster=config.pusher_cluster or settings.PUSHER_CLUSTER,
                ssl=True,
                timeout=timeout,
            )
        logger.warning("Stored Pusher secret could not be decrypted; falling back to environment settings")

    if settings.PUSHER_APP_ID and settings.PUSHER_KEY and settings.PUSHER_SECRET:
        return pusher.Pusher(
            app_id=settings.PUSHER_APP_ID,
            key=settings.PUSHER_KEY,
            secret=settings.PUSHER_SECRET,
            cluster=settings.PUSHER_CLUSTER,
            ssl=True,
            timeout=timeout,
        )

    return None
