from typing import Iterable, Sequence
from uuid import UUID

from sqlalchemy import select

from yummify.models import Ingredient
from yummify.repositories.base import AsyncRepository


class IngredientRepository(AsyncRepository[Ingredient]):
    model = Ingredient

    async def find_all_by_restaurant_id(self, restaurant_id: UUID) -> Sequence[Ingredient]:
        result = await self.session.execute(
            select(Ingredient)
            .where(Ingredient.restaurant_id == restaurant_id)
            .order_by(Ingredient.name)
        )
        return result.scalars().all()

    async def find_all_by_ids_and_restaurant_id(
        self,
        ingredient_ids: Iterable[UUID],
        restaurant_id: UUID,
    ) -> Sequence[Ingredient]:
        """Ingredients among ``ingredient_ids`` owned by the restaurant; others are skipped."""
        ids = list(ingredient_ids)
        if not ids:
            return []
        result = await self.session.execute(
            select(Ingredient)
            .where(Ingredient.id.in_(ids), Ingredient.restaurant_id == restaurant_id)
            .order_by(Ingredient.name)
        )
        return result.scalars().all()
