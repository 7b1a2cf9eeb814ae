"""
User Provisioning Service Abstract Base Class

Defines the contract for creating credentialed accounts for restaurant
owners. Both MockUserCreateService and KeycloakUserCreateService
implement it, so the restaurant workflow does not care which identity
provider is active.
"""

import secrets
from abc import ABC, abstractmethod
from uuid import UUID

from yummify.schemas import UserRequest


class BaseUserCreateService(ABC):
    """
    Abstract base class for owner account provisioning.

    Example:
        >>> service = get_user_create_service()
        >>> owner.attributes["restaurantId"] = [str(restaurant.id)]
        >>> owner_id = await service.create_user_with_password(owner)
    """

    TEMPORARY_PASSWORD_BYTES = 12

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the name of the identity provider (e.g. "mock", "keycloak")."""
        pass

    @abstractmethod
    async def create_user_with_password(self, user: UserRequest) -> UUID:
        """
        Create an enabled account with a generated temporary password.

        ``user.attributes`` is stored with the account as-is.

        Returns:
            UUID: Identifier of the created account

        Raises:
            UserAlreadyExistsError: If the username or e-mail is taken
            UserProvisioningError: If the provider fails otherwise
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """
        Verify connectivity to the identity provider.

        Returns:
            bool: True if the provider is reachable
        """
        pass

    def generate_password(self) -> str:
        """One-time password the owner must change on first login."""
        return secrets.token_urlsafe(self.TEMPORARY_PASSWORD_BYTES)
