"""
Access Token Service

Resolves who is calling and on behalf of which restaurant from a bearer
token. The token is always passed in explicitly; nothing is read from
request-global state.

Tokens are issued by the identity provider. The restaurant id travels as
a user attribute mapped into a claim (``restaurantId`` by default), which
Keycloak emits either as a string or as a single-element list.
"""

import logging
from functools import lru_cache
from typing import Any, Optional
from uuid import UUID

import jwt

from yummify.core.config import get_settings
from yummify.exceptions import AuthenticationError

logger = logging.getLogger(__name__)


class TokenService:
    """
    Verifies access tokens and extracts tenant information.

    Example:
        >>> service = TokenService(key="secret", algorithm="HS256")
        >>> service.get_restaurant_id(token)
        UUID('6f0c...')
    """

    def __init__(
        self,
        key: str,
        algorithm: str = "HS256",
        audience: Optional[str] = None,
        issuer: Optional[str] = None,
        restaurant_id_claim: str = "restaurantId",
        leeway: int = 30,
    ):
        self.key = key
        self.algorithm = algorithm
        self.audience = audience
        self.issuer = issuer
        self.restaurant_id_claim = restaurant_id_claim
        self.leeway = leeway

    def decode(self, token: str) -> dict[str, Any]:
        """
        Verify signature, expiry and (when configured) audience and issuer.

        Raises:
            AuthenticationError: If the token cannot be trusted
        """
        if not token:
            raise AuthenticationError("Missing access token")

        options = {"verify_aud": self.audience is not None}
        try:
            return jwt.decode(
                token,
                self.key,
                algorithms=[self.algorithm],
                audience=self.audience,
                issuer=self.issuer,
                leeway=self.leeway,
                options=options,
            )
        except jwt.ExpiredSignatureError:
            raise AuthenticationError("Access token expired")
        except jwt.InvalidTokenError as e:
            logger.debug(f"Rejected access token: {e}")
            raise AuthenticationError("Invalid access token")
        except jwt.PyJWTError as e:
            # unusable verification key, e.g. RS256 without JWT_PUBLIC_KEY
            logger.error(f"Access token verification is misconfigured ({self.algorithm}): {e}")
            raise AuthenticationError("Invalid access token")

    def get_restaurant_id(self, token: str) -> UUID:
        """Restaurant the caller administers."""
        claims = self.decode(token)
        value = claims.get(self.restaurant_id_claim)

        if isinstance(value, list):
            value = value[0] if len(value) == 1 else None
        if not value:
            raise AuthenticationError(
                f"Access token has no '{self.restaurant_id_claim}' claim"
            )
        return self._to_uuid(value, self.restaurant_id_claim)

    def get_user_id(self, token: str) -> UUID:
        """Account id of the caller (``sub`` claim)."""
        claims = self.decode(token)
        subject = claims.get("sub")
        if not subject:
            raise AuthenticationError("Access token has no subject")
        return self._to_uuid(subject, "sub")

    @staticmethod
    def _to_uuid(value: Any, claim: str) -> UUID:
        try:
            return UUID(str(value))
        except ValueError:
            raise AuthenticationError(f"Claim '{claim}' is not a valid identifier")


@lru_cache()
def get_token_service() -> TokenService:
    """Token service configured from application settings."""
    settings = get_settings()
    return TokenService(
        key=settings.jwt_verification_key,
        algorithm=settings.jwt_algorithm,
        audience=settings.jwt_audience,
        issuer=settings.jwt_issuer,
        restaurant_id_claim=settings.restaurant_id_claim,
    )
