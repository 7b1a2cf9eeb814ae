"""
Dish Service

Menu management for the caller's restaurant. Dish names are unique per
restaurant and dishes may only use ingredients of the same restaurant.
"""

import logging
from typing import Iterable, Sequence
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from yummify.exceptions import DishAlreadyExistsError, DishNotFoundError, IngredientNotFoundError
from yummify.mappers import DishMapper
from yummify.models import Dish, Ingredient
from yummify.repositories import DishRepository, IngredientRepository
from yummify.schemas import DishCreate, DishView
from yummify.services.token_service import TokenService

logger = logging.getLogger(__name__)


class DishService:
    """Dishes of the caller's restaurant, unique by name within it."""

    def __init__(
        self,
        repository: DishRepository,
        ingredient_repository: IngredientRepository,
        mapper: DishMapper,
        token_service: TokenService,
    ):
        self.repository = repository
        self.ingredient_repository = ingredient_repository
        self.mapper = mapper
        self.token_service = token_service

    async def create(self, token: str, request: DishCreate) -> DishView:
        restaurant_id = self.token_service.get_restaurant_id(token)

        if await self.repository.exists_by_name_and_restaurant_id(request.name, restaurant_id):
            raise DishAlreadyExistsError(request.name)

        ingredients = await self._get_ingredients(request.ingredient_ids, restaurant_id)
        dish = self.mapper.to_entity(request, ingredients)
        dish.restaurant_id = restaurant_id
        saved = await self._save(dish, request.name)

        logger.info(f"Dish {saved.id} '{saved.name}' created for restaurant {restaurant_id}")
        return self.mapper.to_view(saved)

    async def get_all(self, token: str) -> list[DishView]:
        restaurant_id = self.token_service.get_restaurant_id(token)
        dishes = await self.repository.find_all_by_restaurant_id(restaurant_id)
        return [self.mapper.to_view(dish) for dish in dishes]

    async def get(self, token: str, dish_id: UUID) -> DishView:
        restaurant_id = self.token_service.get_restaurant_id(token)
        dish = await self._get_owned(dish_id, restaurant_id)
        return self.mapper.to_view(dish)

    async def update(self, token: str, dish_id: UUID, request: DishCreate) -> DishView:
        """Replace name, description and ingredients of a dish."""
        restaurant_id = self.token_service.get_restaurant_id(token)
        dish = await self._get_owned(dish_id, restaurant_id)

        renamed = request.name != dish.name
        if renamed and await self.repository.exists_by_name_and_restaurant_id(request.name, restaurant_id):
            raise DishAlreadyExistsError(request.name)

        ingredients = await self._get_ingredients(request.ingredient_ids, restaurant_id)
        to_save = self.mapper.to_update_entity(request, dish, ingredients)
        saved = await self._save(to_save, request.name)

        logger.info(f"Dish {saved.id} updated")
        return self.mapper.to_view(saved)

    async def delete(self, token: str, dish_id: UUID) -> None:
        restaurant_id = self.token_service.get_restaurant_id(token)
        dish = await self._get_owned(dish_id, restaurant_id)
        await self.repository.delete(dish)
        logger.info(f"Dish {dish_id} deleted")

    async def _get_owned(self, dish_id: UUID, restaurant_id: UUID) -> Dish:
        dish = await self.repository.find_by_id_and_restaurant_id(dish_id, restaurant_id)
        if dish is None:
            raise DishNotFoundError(dish_id)
        return dish

    async def _get_ingredients(
        self,
        ingredient_ids: Iterable[UUID],
        restaurant_id: UUID,
    ) -> Sequence[Ingredient]:
        wanted = set(ingredient_ids)
        if not wanted:
            return []

        found = await self.ingredient_repository.find_all_by_ids_and_restaurant_id(wanted, restaurant_id)
        missing = wanted - {ingredient.id for ingredient in found}
        if missing:
            raise IngredientNotFoundError(sorted(str(i) for i in missing)[0])
        return found

    async def _save(self, dish: Dish, name: str) -> Dish:
        # the unique constraint catches a concurrent insert the pre-check missed
        try:
            return await self.repository.save(dish)
        except IntegrityError as e:
            logger.info(f"Dish '{name}' rejected by unique constraint")
            raise DishAlreadyExistsError(name) from e
