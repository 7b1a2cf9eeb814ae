"""
FastAPI Application Entry Point

Yummify - restaurant and menu management backend.
Supports both Mock services (development) and Keycloak/SendGrid (production).

Endpoints:
    - POST /api/restaurants: Register a restaurant and its owner
    - GET /api/restaurants/me: Caller's restaurant
    - PUT /api/restaurants/me: Edit caller's restaurant
    - GET, POST /api/ingredients: Caller's ingredients
    - GET, POST /api/dishes: Caller's dishes
    - GET, PUT, DELETE /api/dishes/{dish_id}: Single dish
    - GET /health: System health check
"""

import logging
from datetime import datetime
from uuid import UUID
from contextlib import asynccontextmanager

from fastapi import FastAPI, Depends, Request, status
from fastapi.responses import JSONResponse, Response
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func

from yummify.core.config import get_settings, setup_logging
from yummify.database import get_db, init_db, engine
from yummify.dependencies import (
    get_access_token,
    get_dish_service,
    get_ingredient_service,
    get_restaurant_service,
)
from yummify.exceptions import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    UserProvisioningError,
)
from yummify.schemas import (
    DishCreate,
    DishView,
    ErrorResponse,
    HealthResponse,
    IngredientCreate,
    IngredientView,
    RestaurantCreate,
    RestaurantView,
)
from yummify.services import DishService, IngredientService, RestaurantService
from yummify.services.users import (
    BaseUserCreateService,
    KeycloakUserCreateService,
    get_user_create_service,
)

settings = get_settings()
setup_logging()
logger = logging.getLogger(__name__)


# =============================================================================
# APPLICATION LIFECYCLE
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application startup and shutdown events.
    """
    logger.info("=" * 60)
    logger.info(f"Starting {settings.app_name}")
    logger.info(f"   Version: {settings.app_version}")
    logger.info(f"   Environment: {settings.env_mode.value}")
    logger.info(f"   Debug: {settings.debug}")
    logger.info("=" * 60)

    await init_db()

    user_service = get_user_create_service()
    logger.info(f"User Service: {user_service.provider_name}")

    if settings.use_real_services:
        missing = settings.validate_production_config()
        if missing:
            logger.warning(f"Missing production config: {missing}")

    logger.info("Application ready")

    yield

    logger.info("Shutting down...")
    if isinstance(user_service, KeycloakUserCreateService):
        await user_service.close()
    await engine.dispose()
    logger.info("Cleanup complete")


# =============================================================================
# APPLICATION INSTANCE
# =============================================================================

app = FastAPI(
    title=settings.app_name,
    description="Restaurant, dish and ingredient management with owner account provisioning.",
    version=settings.app_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

ERROR_RESPONSES = {
    401: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
}


# =============================================================================
# ROOT & HEALTH ENDPOINTS
# =============================================================================

@app.get("/", tags=["Root"])
async def root() -> dict[str, str]:
    """API root with navigation links."""
    return {
        "message": f"Welcome to {settings.app_name}",
        "version": settings.app_version,
        "environment": settings.env_mode.value,
        "documentation": "/docs",
        "health": "/health",
    }


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["Health"],
    summary="System Health Check",
)
async def health_check(
    db: AsyncSession = Depends(get_db),
    user_service: BaseUserCreateService = Depends(get_user_create_service),
) -> HealthResponse:
    """Verify database and identity provider are reachable."""

    db_status = "healthy"
    try:
        await db.execute(select(func.now()))
    except Exception as e:
        db_status = f"unhealthy: {str(e)}"
        logger.error(f"Database health check failed: {e}")

    user_status = "healthy" if await user_service.health_check() else "unhealthy"

    overall = "operational" if db_status == user_status == "healthy" else "degraded"

    return HealthResponse(
        status=overall,
        database=db_status,
        user_service=user_status,
        timestamp=datetime.now(),
    )


# =============================================================================
# RESTAURANT ENDPOINTS
# =============================================================================

@app.post(
    "/api/restaurants",
    response_model=RestaurantView,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
    tags=["Restaurants"],
    summary="Register Restaurant",
)
async def create_restaurant(
    request: RestaurantCreate,
    service: RestaurantService = Depends(get_restaurant_service),
) -> RestaurantView:
    """Register a restaurant and create its owner account."""
    logger.info(f"Registering restaurant '{request.name}' for {request.owner.username}")
    return await service.create(request)


@app.get(
    "/api/restaurants/me",
    response_model=RestaurantView,
    responses=ERROR_RESPONSES,
    tags=["Restaurants"],
)
async def get_restaurant(
    token: str = Depends(get_access_token),
    service: RestaurantService = Depends(get_restaurant_service),
) -> RestaurantView:
    """Restaurant administered by the caller."""
    return await service.get(token)


@app.put(
    "/api/restaurants/me",
    response_model=RestaurantView,
    responses=ERROR_RESPONSES,
    tags=["Restaurants"],
)
async def update_restaurant(
    view: RestaurantView,
    token: str = Depends(get_access_token),
    service: RestaurantService = Depends(get_restaurant_service),
) -> RestaurantView:
    """Edit name and description of the caller's restaurant."""
    return await service.update(token, view)


# =============================================================================
# INGREDIENT ENDPOINTS
# =============================================================================

@app.get(
    "/api/ingredients",
    response_model=list[IngredientView],
    responses=ERROR_RESPONSES,
    tags=["Ingredients"],
)
async def list_ingredients(
    token: str = Depends(get_access_token),
    service: IngredientService = Depends(get_ingredient_service),
) -> list[IngredientView]:
    return await service.get_all(token)


@app.post(
    "/api/ingredients",
    response_model=IngredientView,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
    tags=["Ingredients"],
)
async def create_ingredient(
    request: IngredientCreate,
    token: str = Depends(get_access_token),
    service: IngredientService = Depends(get_ingredient_service),
) -> IngredientView:
    return await service.create(token, request)


# =============================================================================
# DISH ENDPOINTS
# =============================================================================

@app.get(
    "/api/dishes",
    response_model=list[DishView],
    responses=ERROR_RESPONSES,
    tags=["Dishes"],
)
async def list_dishes(
    token: str = Depends(get_access_token),
    service: DishService = Depends(get_dish_service),
) -> list[DishView]:
    return await service.get_all(token)


@app.post(
    "/api/dishes",
    response_model=DishView,
    status_code=status.HTTP_201_CREATED,
    responses={**ERROR_RESPONSES, 409: {"model": ErrorResponse}},
    tags=["Dishes"],
)
async def create_dish(
    request: DishCreate,
    token: str = Depends(get_access_token),
    service: DishService = Depends(get_dish_service),
) -> DishView:
    return await service.create(token, request)


@app.get(
    "/api/dishes/{dish_id}",
    response_model=DishView,
    responses=ERROR_RESPONSES,
    tags=["Dishes"],
)
async def get_dish(
    dish_id: UUID,
    token: str = Depends(get_access_token),
    service: DishService = Depends(get_dish_service),
) -> DishView:
    return await service.get(token, dish_id)


@app.put(
    "/api/dishes/{dish_id}",
    response_model=DishView,
    responses={**ERROR_RESPONSES, 409: {"model": ErrorResponse}},
    tags=["Dishes"],
)
async def update_dish(
    dish_id: UUID,
    request: DishCreate,
    token: str = Depends(get_access_token),
    service: DishService = Depends(get_dish_service),
) -> DishView:
    return await service.update(token, dish_id, request)


@app.delete(
    "/api/dishes/{dish_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=ERROR_RESPONSES,
    tags=["Dishes"],
)
async def delete_dish(
    dish_id: UUID,
    token: str = Depends(get_access_token),
    service: DishService = Depends(get_dish_service),
) -> Response:
    await service.delete(token, dish_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# =============================================================================
# ERROR HANDLERS
# =============================================================================

def _error_response(status_code: int, error: str, exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=error, detail=str(exc)).model_dump(),
    )


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return _error_response(404, "Not Found", exc)


@app.exception_handler(ConflictError)
async def conflict_handler(request: Request, exc: ConflictError) -> JSONResponse:
    return _error_response(409, "Conflict", exc)


@app.exception_handler(AuthenticationError)
async def authentication_handler(request: Request, exc: AuthenticationError) -> JSONResponse:
    response = _error_response(401, "Unauthorized", exc)
    response.headers["WWW-Authenticate"] = "Bearer"
    return response


@app.exception_handler(UserProvisioningError)
async def provisioning_handler(request: Request, exc: UserProvisioningError) -> JSONResponse:
    logger.error(f"Owner provisioning failed: {exc}")
    return _error_response(502, "Bad Gateway", exc)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all exception handler."""
    logger.exception(f"Unhandled exception: {exc}")

    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "Internal Server Error",
            "detail": str(exc) if settings.debug else "An unexpected error occurred",
        },
    )
