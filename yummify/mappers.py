"""
DTO <-> entity mappers.

Pure transformations: no session access, no I/O. Merges mutate and
return the existing entity so it stays attached to its session.
"""

from typing import Iterable, Optional

from yummify.models import Dish, Ingredient, Restaurant
from yummify.schemas import (
    DishCreate,
    DishView,
    IngredientCreate,
    IngredientView,
    RestaurantCreate,
    RestaurantView,
)


class RestaurantMapper:

    def to_entity(self, request: RestaurantCreate) -> Restaurant:
        """Transient restaurant without id and owner."""
        return Restaurant(name=request.name, description=request.description)

    def to_update_entity(self, view: RestaurantView, existing: Restaurant) -> Restaurant:
        """Copy name and description onto ``existing``; id and owner are kept."""
        existing.name = view.name
        existing.description = view.description
        return existing

    def to_view(self, restaurant: Restaurant) -> RestaurantView:
        return RestaurantView(
            id=restaurant.id,
            name=restaurant.name,
            description=restaurant.description,
        )


class IngredientMapper:

    def to_entity(self, request: IngredientCreate) -> Ingredient:
        return Ingredient(name=request.name)

    def to_view(self, ingredient: Ingredient) -> IngredientView:
        return IngredientView(id=ingredient.id, name=ingredient.name)


class DishMapper:

    def __init__(self, ingredient_mapper: Optional[IngredientMapper] = None):
        self.ingredient_mapper = ingredient_mapper or IngredientMapper()

    def to_entity(self, request: DishCreate, ingredients: Iterable[Ingredient] = ()) -> Dish:
        return Dish(
            name=request.name,
            description=request.description,
            ingredients=list(ingredients),
        )

    def to_update_entity(
        self,
        request: DishCreate,
        existing: Dish,
        ingredients: Iterable[Ingredient] = (),
    ) -> Dish:
        existing.name = request.name
        existing.description = request.description
        existing.ingredients = list(ingredients)
        return existing

    def to_view(self, dish: Dish) -> DishView:
        return DishView(
            id=dish.id,
            name=dish.name,
            description=dish.description,
            ingredients=[self.ingredient_mapper.to_view(i) for i in dish.ingredients],
        )
