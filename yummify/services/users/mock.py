"""
Mock User Provisioning Service

Keeps accounts in memory instead of calling an identity provider.
Used in development mode (ENV_MODE=development) so restaurants can be
registered without a running Keycloak.
"""

import asyncio
import logging
import random
import uuid
from uuid import UUID

from yummify.exceptions import UserAlreadyExistsError
from yummify.schemas import UserRequest
from yummify.services.users.base import BaseUserCreateService

logger = logging.getLogger(__name__)


class MockUserCreateService(BaseUserCreateService):
    """
    In-memory implementation of owner provisioning.

    Attributes:
        accounts: Created accounts keyed by username
        min_latency: Minimum simulated response time in seconds
        max_latency: Maximum simulated response time in seconds
    """

    def __init__(self, min_latency: float = 0.0, max_latency: float = 0.0):
        self.accounts: dict[str, dict] = {}
        self.min_latency = min_latency
        self.max_latency = max_latency

        logger.info(
            f"MockUserCreateService initialized "
            f"(latency={min_latency}-{max_latency}s)"
        )

    @property
    def provider_name(self) -> str:
        """Return the provider name."""
        return "mock"

    async def _simulate_latency(self) -> None:
        if self.max_latency > 0:
            await asyncio.sleep(random.uniform(self.min_latency, self.max_latency))

    async def create_user_with_password(self, user: UserRequest) -> UUID:
        """Store the account and return a random id."""
        await self._simulate_latency()

        taken = any(
            account["username"] == user.username or account["email"] == user.email
            for account in self.accounts.values()
        )
        if taken:
            logger.debug(f"Mock: user {user.username} already exists")
            raise UserAlreadyExistsError(user.username)

        user_id = uuid.uuid4()
        self.accounts[user.username] = {
            "id": user_id,
            "username": user.username,
            "email": user.email,
            "first_name": user.first_name,
            "last_name": user.last_name,
            "attributes": {key: list(values) for key, values in user.attributes.items()},
            "temporary_password": self.generate_password(),
        }

        logger.info(f"Mock: created user {user.username} ({user_id})")
        return user_id

    async def health_check(self) -> bool:
        """Mock health check always returns True."""
        return True
