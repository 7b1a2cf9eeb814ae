"""
User Provisioning Service Factory

Provides a single entry point for obtaining the owner provisioning
service. The restaurant workflow stays agnostic about which identity
provider is used.

Environment Switching:
    - ENV_MODE=development → MockUserCreateService (in-memory accounts)
    - ENV_MODE=staging → KeycloakUserCreateService (test realm)
    - ENV_MODE=production → KeycloakUserCreateService
"""

import logging
from functools import lru_cache

from yummify.core.config import get_settings
from yummify.services.users.base import BaseUserCreateService
from yummify.services.users.mock import MockUserCreateService
from yummify.services.users.keycloak import KeycloakUserCreateService

logger = logging.getLogger(__name__)


@lru_cache()
def get_user_create_service() -> BaseUserCreateService:
    """
    Get the configured user provisioning service instance.

    The instance is cached so the mock keeps its accounts and the
    Keycloak adapter reuses its HTTP connection pool.

    Raises:
        ValueError: If Keycloak is required but not configured
    """
    settings = get_settings()

    if settings.is_development:
        logger.info("User Service: Using MockUserCreateService (development mode)")
        return MockUserCreateService(min_latency=0.05, max_latency=0.2)
    else:
        logger.info(
            f"User Service: Using KeycloakUserCreateService "
            f"({settings.env_mode.value} mode)"
        )
        return KeycloakUserCreateService()


def reset_user_create_service() -> None:
    """
    Clear the cached service instance.

    The next call to get_user_create_service() will create a new instance.
    """
    get_user_create_service.cache_clear()
    logger.debug("User service cache cleared")


__all__ = [
    "get_user_create_service",
    "reset_user_create_service",
    "BaseUserCreateService",
    "MockUserCreateService",
    "KeycloakUserCreateService",
]
