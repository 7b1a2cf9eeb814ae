"""
Domain exceptions.

Services raise these and let them propagate; the API layer maps each
family to an HTTP status code.
"""

from typing import Any


class YummifyError(Exception):
    """Base class for all application errors."""
    pass


# =============================================================================
# NOT FOUND (404)
# =============================================================================

class NotFoundError(YummifyError):
    """A requested entity does not exist for the caller."""

    entity = "Entity"

    def __init__(self, identifier: Any = None):
        self.identifier = identifier
        if identifier is None:
            message = f"{self.entity} not found"
        else:
            message = f"{self.entity} {identifier} not found"
        super().__init__(message)


class RestaurantNotFoundError(NotFoundError):
    entity = "Restaurant"


class DishNotFoundError(NotFoundError):
    entity = "Dish"


class IngredientNotFoundError(NotFoundError):
    entity = "Ingredient"


# =============================================================================
# CONFLICT (409)
# =============================================================================

class ConflictError(YummifyError):
    """The request collides with existing state."""
    pass


class DishAlreadyExistsError(ConflictError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Dish '{name}' already exists")


class UserAlreadyExistsError(ConflictError):
    def __init__(self, username: str):
        self.username = username
        super().__init__(f"User '{username}' already exists")


# =============================================================================
# AUTHENTICATION (401) / UPSTREAM (502)
# =============================================================================

class AuthenticationError(YummifyError):
    """Missing, invalid or expired access token."""
    pass


class UserProvisioningError(YummifyError):
    """The identity provider rejected or failed an account operation."""
    pass
