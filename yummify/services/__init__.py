"""
                        Services Module

Business logic services. External collaborators follow the hybrid
pattern: a Mock implementation for development and a real one for
staging/production, chosen by a cached factory.

Services:
    - restaurant_service: restaurant registration and tenant-scoped edits
    - dish_service / ingredient_service: menu management
    - token_service: access token verification and tenant resolution
    - users: owner account provisioning (Mock / Keycloak)
    - notifications: owner e-mails (Mock / SendGrid)
"""

from yummify.services.dish_service import DishService
from yummify.services.ingredient_service import IngredientService
from yummify.services.restaurant_service import RestaurantService
from yummify.services.token_service import TokenService, get_token_service

__all__ = [
    "DishService",
    "IngredientService",
    "RestaurantService",
    "TokenService",
    "get_token_service",
]
