"""
API Dependencies

Provides dependency injection for services, database sessions and the
caller's access token. Routes receive fully wired services; the token is
handed to each service call explicitly.
"""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from yummify.database import get_db
from yummify.exceptions import AuthenticationError
from yummify.mappers import DishMapper, IngredientMapper, RestaurantMapper
from yummify.repositories import DishRepository, IngredientRepository, RestaurantRepository
from yummify.services import (
    DishService,
    IngredientService,
    RestaurantService,
    TokenService,
    get_token_service,
)
from yummify.services.users import BaseUserCreateService, get_user_create_service

bearer_scheme = HTTPBearer(auto_error=False)


def get_access_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> str:
    """
    Raw bearer token of the request.

    Raises:
        AuthenticationError: If the Authorization header is missing
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Missing access token")
    return credentials.credentials


def get_restaurant_service(
    db: AsyncSession = Depends(get_db),
    token_service: TokenService = Depends(get_token_service),
    user_create_service: BaseUserCreateService = Depends(get_user_create_service),
) -> RestaurantService:
    return RestaurantService(
        repository=RestaurantRepository(db),
        mapper=RestaurantMapper(),
        token_service=token_service,
        user_create_service=user_create_service,
    )


def get_dish_service(
    db: AsyncSession = Depends(get_db),
    token_service: TokenService = Depends(get_token_service),
) -> DishService:
    return DishService(
        repository=DishRepository(db),
        ingredient_repository=IngredientRepository(db),
        mapper=DishMapper(),
        token_service=token_service,
    )


def get_ingredient_service(
    db: AsyncSession = Depends(get_db),
    token_service: TokenService = Depends(get_token_service),
) -> IngredientService:
    return IngredientService(
        repository=IngredientRepository(db),
        mapper=IngredientMapper(),
        token_service=token_service,
    )
