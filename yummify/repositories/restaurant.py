from yummify.models import Restaurant
from yummify.repositories.base import AsyncRepository


class RestaurantRepository(AsyncRepository[Restaurant]):
    model = Restaurant
