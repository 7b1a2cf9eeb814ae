"""
Keycloak User Provisioning Service

Production implementation using the Keycloak Admin REST API.
Used when ENV_MODE=production or ENV_MODE=staging.

Requirements:
    - KEYCLOAK_URL, KEYCLOAK_CLIENT_ID and KEYCLOAK_CLIENT_SECRET must be set
    - The client's service account needs the realm-management
      ``manage-users`` role

Flow per owner:
    1. Obtain an admin token with the client credentials grant
    2. POST the user representation with a temporary password credential
    3. Read the new user id from the Location header
    4. Queue the credentials e-mail
"""

import asyncio
import logging
from typing import Any, Optional
from uuid import UUID

import httpx

from yummify.core.config import get_settings
from yummify.exceptions import UserAlreadyExistsError, UserProvisioningError
from yummify.schemas import UserRequest
from yummify.services.users.base import BaseUserCreateService
from yummify.tasks import send_owner_credentials

logger = logging.getLogger(__name__)


class KeycloakUserCreateService(BaseUserCreateService):
    """
    Creates owner accounts in a Keycloak realm.

    Example:
        >>> service = KeycloakUserCreateService()
        >>> owner_id = await service.create_user_with_password(owner)
    """

    def __init__(self, client: Optional[httpx.AsyncClient] = None):
        """
        Initialize the admin API client.

        Raises:
            ValueError: If Keycloak is not configured
        """
        settings = get_settings()

        if not (settings.keycloak_url and settings.keycloak_client_id and settings.keycloak_client_secret):
            raise ValueError(
                "KEYCLOAK_URL, KEYCLOAK_CLIENT_ID and KEYCLOAK_CLIENT_SECRET are required "
                "outside development mode. Set them in your .env file or environment variables."
            )

        self._base_url = settings.keycloak_url.rstrip("/")
        self._realm = settings.keycloak_realm
        self._client_id = settings.keycloak_client_id
        self._client_secret = settings.keycloak_client_secret
        self._login_url = f"{self._base_url}/realms/{self._realm}/account"
        self._client = client or httpx.AsyncClient(timeout=settings.keycloak_timeout_seconds)

        logger.info(f"KeycloakUserCreateService initialized (realm={self._realm})")

    @property
    def provider_name(self) -> str:
        """Return the provider name."""
        return "keycloak"

    @property
    def _realm_url(self) -> str:
        return f"{self._base_url}/realms/{self._realm}"

    @property
    def _users_url(self) -> str:
        return f"{self._base_url}/admin/realms/{self._realm}/users"

    async def _get_admin_token(self) -> str:
        try:
            response = await self._client.post(
                f"{self._realm_url}/protocol/openid-connect/token",
                data={
                    "grant_type": "client_credentials",
                    "client_id": self._client_id,
                    "client_secret": self._client_secret,
                },
            )
        except httpx.HTTPError as e:
            logger.error(f"Keycloak: token request failed - {e}")
            raise UserProvisioningError(f"Identity provider unreachable: {e}") from e

        if response.status_code != 200:
            logger.error(f"Keycloak: token request rejected ({response.status_code})")
            raise UserProvisioningError(
                f"Identity provider rejected service credentials ({response.status_code})"
            )
        try:
            return response.json()["access_token"]
        except (ValueError, KeyError, TypeError) as e:
            logger.error(f"Keycloak: token response without access token - {e}")
            raise UserProvisioningError("Identity provider returned no access token") from e

    def _build_representation(self, user: UserRequest, password: str) -> dict[str, Any]:
        return {
            "username": user.username,
            "email": user.email,
            "firstName": user.first_name,
            "lastName": user.last_name,
            "enabled": True,
            "emailVerified": False,
            "attributes": user.attributes,
            "credentials": [
                {"type": "password", "value": password, "temporary": True},
            ],
        }

    async def create_user_with_password(self, user: UserRequest) -> UUID:
        """Create the account in Keycloak and queue the credentials e-mail."""
        token = await self._get_admin_token()
        password = self.generate_password()

        logger.debug(f"Keycloak: creating user {user.username}")
        try:
            response = await self._client.post(
                self._users_url,
                json=self._build_representation(user, password),
                headers={"Authorization": f"Bearer {token}"},
            )
        except httpx.HTTPError as e:
            logger.error(f"Keycloak: user creation failed - {e}")
            raise UserProvisioningError(f"Identity provider unreachable: {e}") from e

        if response.status_code == 409:
            raise UserAlreadyExistsError(user.username)
        if response.status_code != 201:
            logger.error(
                f"Keycloak: user creation rejected ({response.status_code}) - {response.text}"
            )
            raise UserProvisioningError(
                f"Identity provider rejected user creation ({response.status_code})"
            )

        user_id = self._parse_user_id(response)
        logger.info(f"Keycloak: created user {user.username} ({user_id})")

        await self._queue_credentials_email({
            "email": user.email,
            "first_name": user.first_name,
            "username": user.username,
            "temporary_password": password,
            "login_url": self._login_url,
        })
        return user_id

    async def _queue_credentials_email(self, owner_data: dict) -> None:
        """
        Hand the credentials e-mail to the worker.

        The account already exists at this point, so a broker outage is
        logged and does not fail provisioning. Publishing runs in a thread
        without publish retries to keep the event loop free.
        """
        try:
            await asyncio.to_thread(
                send_owner_credentials.apply_async,
                args=[owner_data],
                retry=False,
            )
        except Exception as e:
            logger.error(
                f"Keycloak: user {owner_data['username']} created but credentials "
                f"e-mail could not be queued - {e}"
            )

    @staticmethod
    def _parse_user_id(response: httpx.Response) -> UUID:
        location = response.headers.get("Location", "")
        try:
            return UUID(location.rstrip("/").rsplit("/", 1)[-1])
        except ValueError:
            raise UserProvisioningError(
                f"Identity provider returned no user id (Location: {location!r})"
            )

    async def health_check(self) -> bool:
        """Check that the realm endpoint answers."""
        try:
            response = await self._client.get(self._realm_url)
        except httpx.HTTPError as e:
            logger.error(f"Keycloak health check failed: {e}")
            return False
        return response.status_code == 200

    async def close(self) -> None:
        await self._client.aclose()
