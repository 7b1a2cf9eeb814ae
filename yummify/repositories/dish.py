from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy import exists, select

from yummify.models import Dish
from yummify.repositories.base import AsyncRepository


class DishRepository(AsyncRepository[Dish]):
    model = Dish

    async def exists_by_name_and_restaurant_id(self, name: str, restaurant_id: UUID) -> bool:
        result = await self.session.execute(
            select(exists().where(Dish.name == name, Dish.restaurant_id == restaurant_id))
        )
        return bool(result.scalar())

    async def find_all_by_restaurant_id(self, restaurant_id: UUID) -> Sequence[Dish]:
        result = await self.session.execute(
            select(Dish).where(Dish.restaurant_id == restaurant_id).order_by(Dish.name)
        )
        return result.scalars().all()

    async def find_by_id_and_restaurant_id(
        self,
        dish_id: UUID,
        restaurant_id: UUID,
    ) -> Optional[Dish]:
        result = await self.session.execute(
            select(Dish).where(Dish.id == dish_id, Dish.restaurant_id == restaurant_id)
        )
        return result.scalar_one_or_none()
