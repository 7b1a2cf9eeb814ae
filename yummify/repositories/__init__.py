"""
Repositories

Thin async data-access classes over a SQLAlchemy session, one per
aggregate. Services depend on these instead of issuing queries.
"""

from yummify.repositories.base import AsyncRepository
from yummify.repositories.dish import DishRepository
from yummify.repositories.ingredient import IngredientRepository
from yummify.repositories.restaurant import RestaurantRepository

__all__ = [
    "AsyncRepository",
    "DishRepository",
    "IngredientRepository",
    "RestaurantRepository",
]
