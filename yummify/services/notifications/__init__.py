"""
Notification Service Factory

Returns Mock or SendGrid notification service based on ENV_MODE.
"""

import logging
from functools import lru_cache

from yummify.core.config import get_settings
from yummify.services.notifications.base import (
    BaseNotificationService,
    NotificationResult,
)
from yummify.services.notifications.mock import MockNotificationService
from yummify.services.notifications.sendgrid import SendGridNotificationService

logger = logging.getLogger(__name__)


@lru_cache()
def get_notification_service() -> BaseNotificationService:
    """Get the configured notification service."""
    settings = get_settings()

    if settings.is_development:
        logger.info("Notification Service: Using MockNotificationService (development mode)")
        return MockNotificationService()
    else:
        logger.info(
            f"Notification Service: Using SendGridNotificationService ({settings.env_mode.value} mode)"
        )
        return SendGridNotificationService()


def reset_notification_service() -> None:
    """Clear the cached service instance."""
    get_notification_service.cache_clear()


__all__ = [
    "get_notification_service",
    "reset_notification_service",
    "BaseNotificationService",
    "NotificationResult",
    "MockNotificationService",
    "SendGridNotificationService",
]
