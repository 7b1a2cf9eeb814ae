"""
Ingredient Service

Ingredients belong to the caller's restaurant and are referenced by its
dishes.
"""

import logging

from yummify.mappers import IngredientMapper
from yummify.repositories import IngredientRepository
from yummify.schemas import IngredientCreate, IngredientView
from yummify.services.token_service import TokenService

logger = logging.getLogger(__name__)


class IngredientService:
    """Ingredients of the caller's restaurant."""

    def __init__(
        self,
        repository: IngredientRepository,
        mapper: IngredientMapper,
        token_service: TokenService,
    ):
        self.repository = repository
        self.mapper = mapper
        self.token_service = token_service

    async def create(self, token: str, request: IngredientCreate) -> IngredientView:
        restaurant_id = self.token_service.get_restaurant_id(token)

        ingredient = self.mapper.to_entity(request)
        ingredient.restaurant_id = restaurant_id
        saved = await self.repository.save(ingredient)

        logger.info(f"Ingredient {saved.id} '{saved.name}' created for restaurant {restaurant_id}")
        return self.mapper.to_view(saved)

    async def get_all(self, token: str) -> list[IngredientView]:
        restaurant_id = self.token_service.get_restaurant_id(token)
        ingredients = await self.repository.find_all_by_restaurant_id(restaurant_id)
        return [self.mapper.to_view(ingredient) for ingredient in ingredients]
