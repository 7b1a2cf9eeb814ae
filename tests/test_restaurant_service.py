"""Tests for the RestaurantService workflow."""

from unittest.mock import MagicMock, call
from uuid import uuid4

import pytest

from yummify.exceptions import (
    AuthenticationError,
    RestaurantNotFoundError,
    UserProvisioningError,
)
from yummify.mappers import RestaurantMapper
from yummify.models import Restaurant
from yummify.repositories import RestaurantRepository
from yummify.schemas import RestaurantCreate, RestaurantView, UserRequest
from yummify.services.restaurant_service import RestaurantService
from yummify.services.token_service import TokenService
from yummify.services.users import BaseUserCreateService


def build_user_request() -> UserRequest:
    return UserRequest(
        email="owner@example.com",
        username="restaurantOwner",
        first_name="Jane",
        last_name="Doe",
    )


def build_restaurant_create() -> RestaurantCreate:
    return RestaurantCreate(
        name="Pasta palace",
        description="This is pasta palace",
        owner=build_user_request(),
    )


def build_restaurant(id=None, owner_id=None, name="Pasta palace", description="This is pasta palace") -> Restaurant:
    return Restaurant(id=id, owner_id=owner_id, name=name, description=description)


def build_view(restaurant: Restaurant) -> RestaurantView:
    return RestaurantView(id=restaurant.id, name=restaurant.name, description=restaurant.description)


class TestRestaurantService:
    """Tests for RestaurantService with mocked collaborators."""

    @pytest.fixture
    def token_service(self):
        return MagicMock(spec=TokenService)

    @pytest.fixture
    def user_create_service(self):
        return MagicMock(spec=BaseUserCreateService)

    @pytest.fixture
    def repository(self):
        return MagicMock(spec=RestaurantRepository)

    @pytest.fixture
    def mapper(self):
        return MagicMock(spec=RestaurantMapper)

    @pytest.fixture
    def service(self, repository, mapper, token_service, user_create_service):
        return RestaurantService(
            repository=repository,
            mapper=mapper,
            token_service=token_service,
            user_create_service=user_create_service,
        )

    @pytest.mark.asyncio
    async def test_create_restaurant(self, service, repository, mapper, user_create_service):
        """Test that create saves, provisions the owner and returns the view."""
        request = build_restaurant_create()
        restaurant = build_restaurant()
        saved = build_restaurant(id=uuid4())
        expected = build_view(saved)
        owner_id = uuid4()

        attributes_at_provisioning = {}

        async def provision(owner):
            attributes_at_provisioning.update(owner.attributes)
            return owner_id

        mapper.to_entity.return_value = restaurant
        repository.save.side_effect = [saved, saved]
        user_create_service.create_user_with_password.side_effect = provision
        mapper.to_view.return_value = expected

        result = await service.create(request)

        assert result == expected
        assert attributes_at_provisioning == {"restaurantId": [str(saved.id)]}
        assert request.owner.attributes["restaurantId"] == [str(saved.id)]
        assert saved.owner_id == owner_id

        mapper.to_entity.assert_called_once_with(request)
        user_create_service.create_user_with_password.assert_awaited_once_with(request.owner)
        assert repository.save.await_args_list == [call(restaurant), call(saved)]
        mapper.to_view.assert_called_once_with(saved)

    @pytest.mark.asyncio
    async def test_create_returns_request_name_and_description(
        self, repository, token_service, user_create_service
    ):
        """Test the view of a created restaurant with the real mapper."""
        service = RestaurantService(repository, RestaurantMapper(), token_service, user_create_service)
        restaurant_id = uuid4()

        async def assign_id(entity):
            if entity.id is None:
                entity.id = restaurant_id
            return entity

        repository.save.side_effect = assign_id
        user_create_service.create_user_with_password.return_value = uuid4()

        request = build_restaurant_create()
        result = await service.create(request)

        assert result.id == restaurant_id
        assert result.name == request.name
        assert result.description == request.description
        assert "owner_id" not in result.model_dump()

    @pytest.mark.asyncio
    async def test_create_drops_client_supplied_attributes(
        self, service, repository, mapper, user_create_service
    ):
        """Test that the owner account only carries the restaurant id attribute."""
        request = build_restaurant_create()
        request.owner.attributes.update({"role": ["admin"], "restaurantId": ["someone-else"]})
        saved = build_restaurant(id=uuid4())

        attributes_at_provisioning = {}

        async def provision(owner):
            attributes_at_provisioning.update(owner.attributes)
            return uuid4()

        mapper.to_entity.return_value = build_restaurant()
        repository.save.return_value = saved
        user_create_service.create_user_with_password.side_effect = provision

        await service.create(request)

        assert attributes_at_provisioning == {"restaurantId": [str(saved.id)]}

    @pytest.mark.asyncio
    async def test_create_removes_restaurant_when_provisioning_fails(
        self, service, repository, mapper, user_create_service
    ):
        """Test that a failed owner provisioning deletes the saved restaurant."""
        request = build_restaurant_create()
        saved = build_restaurant(id=uuid4())

        mapper.to_entity.return_value = build_restaurant()
        repository.save.return_value = saved
        user_create_service.create_user_with_password.side_effect = UserProvisioningError("down")

        with pytest.raises(UserProvisioningError):
            await service.create(request)

        repository.delete.assert_awaited_once_with(saved)
        repository.save.assert_awaited_once()
        mapper.to_view.assert_not_called()
        assert saved.owner_id is None

    @pytest.mark.asyncio
    async def test_get_restaurant(self, service, token_service, repository, mapper):
        """Test that get returns the caller's restaurant."""
        restaurant = build_restaurant(id=uuid4(), owner_id=uuid4())
        expected = build_view(restaurant)

        token_service.get_restaurant_id.return_value = restaurant.id
        repository.find_by_id.return_value = restaurant
        mapper.to_view.return_value = expected

        result = await service.get("token")

        assert result == expected
        token_service.get_restaurant_id.assert_called_once_with("token")
        repository.find_by_id.assert_awaited_once_with(restaurant.id)

    @pytest.mark.asyncio
    async def test_get_restaurant_not_found(self, service, token_service, repository, mapper):
        """Test that get raises when the caller's restaurant does not exist."""
        restaurant_id = uuid4()
        token_service.get_restaurant_id.return_value = restaurant_id
        repository.find_by_id.return_value = None

        with pytest.raises(RestaurantNotFoundError) as exc_info:
            await service.get("token")

        assert exc_info.value.identifier == restaurant_id
        mapper.to_view.assert_not_called()

    @pytest.mark.asyncio
    async def test_get_restaurant_twice_yields_same_view(self, repository, token_service, user_create_service):
        """Test that reading without an update in between is stable."""
        service = RestaurantService(repository, RestaurantMapper(), token_service, user_create_service)
        restaurant = build_restaurant(id=uuid4(), owner_id=uuid4())
        token_service.get_restaurant_id.return_value = restaurant.id
        repository.find_by_id.return_value = restaurant

        first = await service.get("token")
        second = await service.get("token")

        assert first == second
        repository.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_get_restaurant_propagates_invalid_token(self, service, token_service, repository):
        """Test that token errors are not swallowed."""
        token_service.get_restaurant_id.side_effect = AuthenticationError("Invalid access token")

        with pytest.raises(AuthenticationError):
            await service.get("garbage")

        repository.find_by_id.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_restaurant(self, service, token_service, repository, mapper):
        """Test that update merges the payload and saves the result."""
        to_update = build_restaurant(id=uuid4(), owner_id=uuid4())
        view = RestaurantView(id=None, name="Pizza world", description="This is pizza world")
        to_save = build_restaurant(name=view.name, description=view.description)
        after_update = build_restaurant(to_update.id, to_update.owner_id, view.name, view.description)
        expected = build_view(after_update)

        token_service.get_restaurant_id.return_value = to_update.id
        repository.find_by_id.return_value = to_update
        mapper.to_update_entity.return_value = to_save
        repository.save.return_value = after_update
        mapper.to_view.return_value = expected

        result = await service.update("token", view)

        assert result == expected
        mapper.to_update_entity.assert_called_once_with(view, to_update)
        repository.save.assert_awaited_once_with(to_save)
        mapper.to_view.assert_called_once_with(after_update)

    @pytest.mark.asyncio
    async def test_update_keeps_id_and_owner(self, repository, token_service, user_create_service):
        """Test that the real mapper keeps id and owner of the stored restaurant."""
        service = RestaurantService(repository, RestaurantMapper(), token_service, user_create_service)
        restaurant_id, owner_id = uuid4(), uuid4()
        existing = build_restaurant(id=restaurant_id, owner_id=owner_id)

        token_service.get_restaurant_id.return_value = restaurant_id
        repository.find_by_id.return_value = existing

        async def echo(entity):
            return entity

        repository.save.side_effect = echo

        view = RestaurantView(id=uuid4(), name="Pizza world", description="This is pizza world")
        result = await service.update("token", view)

        saved = repository.save.await_args.args[0]
        assert saved.id == restaurant_id
        assert saved.owner_id == owner_id
        assert saved.name == "Pizza world"
        assert result == RestaurantView(id=restaurant_id, name="Pizza world", description="This is pizza world")

    @pytest.mark.asyncio
    async def test_update_restaurant_not_found(self, service, token_service, repository, mapper):
        """Test that update neither merges nor saves a missing restaurant."""
        token_service.get_restaurant_id.return_value = uuid4()
        repository.find_by_id.return_value = None
        view = RestaurantView(id=None, name="Pizza world", description="This is pizza world")

        with pytest.raises(RestaurantNotFoundError):
            await service.update("token", view)

        repository.save.assert_not_awaited()
        mapper.to_update_entity.assert_not_called()
        mapper.to_view.assert_not_called()
