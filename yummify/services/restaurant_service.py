"""
Restaurant Service

Registers restaurants together with their owner account and lets the
owner read and edit their own restaurant. The caller's restaurant is
always taken from the access token passed to each call.
"""

import logging

from yummify.exceptions import RestaurantNotFoundError
from yummify.mappers import RestaurantMapper
from yummify.models import Restaurant
from yummify.repositories import RestaurantRepository
from yummify.schemas import RestaurantCreate, RestaurantView
from yummify.services.token_service import TokenService
from yummify.services.users import BaseUserCreateService

logger = logging.getLogger(__name__)

# User attribute linking an owner account to its restaurant
RESTAURANT_ID_ATTRIBUTE = "restaurantId"


class RestaurantService:
    """
    Restaurant registration and tenant-scoped reads and edits.

    Example:
        >>> view = await service.create(request)
        >>> await service.update(token, RestaurantView(name="Pizza world"))
    """

    def __init__(
        self,
        repository: RestaurantRepository,
        mapper: RestaurantMapper,
        token_service: TokenService,
        user_create_service: BaseUserCreateService,
    ):
        self.repository = repository
        self.mapper = mapper
        self.token_service = token_service
        self.user_create_service = user_create_service

    async def create(self, request: RestaurantCreate) -> RestaurantView:
        """
        Register a restaurant and provision its owner.

        The restaurant is saved first so its id can be written into the
        owner's ``restaurantId`` attribute before the account is created.
        If provisioning fails the saved restaurant is deleted again and
        the error is re-raised.
        """
        restaurant = self.mapper.to_entity(request)
        saved = await self.repository.save(restaurant)

        # only server-assigned attributes reach the identity provider
        request.owner.attributes.clear()
        request.owner.attributes[RESTAURANT_ID_ATTRIBUTE] = [str(saved.id)]
        try:
            owner_id = await self.user_create_service.create_user_with_password(request.owner)
        except Exception as e:
            logger.warning(f"Owner provisioning failed for restaurant {saved.id}, removing it: {e}")
            await self.repository.delete(saved)
            raise

        saved.owner_id = owner_id
        saved = await self.repository.save(saved)

        logger.info(f"Restaurant {saved.id} created with owner {owner_id}")
        return self.mapper.to_view(saved)

    async def get(self, token: str) -> RestaurantView:
        """Restaurant of the caller."""
        restaurant = await self._get_current(token)
        return self.mapper.to_view(restaurant)

    async def update(self, token: str, view: RestaurantView) -> RestaurantView:
        """Replace name and description of the caller's restaurant."""
        restaurant = await self._get_current(token)

        to_save = self.mapper.to_update_entity(view, restaurant)
        saved = await self.repository.save(to_save)

        logger.info(f"Restaurant {saved.id} updated")
        return self.mapper.to_view(saved)

    async def _get_current(self, token: str) -> Restaurant:
        restaurant_id = self.token_service.get_restaurant_id(token)
        restaurant = await self.repository.find_by_id(restaurant_id)
        if restaurant is None:
            logger.info(f"Restaurant {restaurant_id} not found")
            raise RestaurantNotFoundError(restaurant_id)
        return restaurant
