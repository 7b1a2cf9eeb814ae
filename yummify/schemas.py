"""
Pydantic Schemas for Request/Response Validation

Create requests are the only way entities enter the system; views are
the only way they leave it. Owner identifiers are never exposed.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, List, Dict
from datetime import datetime
from uuid import UUID
import re


# =============================================================================
# OWNER ACCOUNT
# =============================================================================

class UserRequest(BaseModel):
    """
    Account to provision for a restaurant owner.

    ``attributes`` is forwarded to the identity provider as user
    attributes; callers may add entries before provisioning.
    """
    email: str = Field(..., max_length=255, examples=["owner@example.com"])
    username: str = Field(..., min_length=3, max_length=50, examples=["restaurantOwner"])
    first_name: str = Field(..., min_length=1, max_length=100, examples=["Jane"])
    last_name: str = Field(..., min_length=1, max_length=100, examples=["Doe"])
    attributes: Dict[str, List[str]] = Field(default_factory=dict)

    @field_validator('email')
    @classmethod
    def validate_email(cls, v: str) -> str:
        if not re.match(r'^[\w\.+-]+@[\w\.-]+\.\w+$', v):
            raise ValueError('Invalid email format')
        return v

    @field_validator('username')
    @classmethod
    def validate_username(cls, v: str) -> str:
        if not re.match(r'^[A-Za-z0-9_.-]+$', v):
            raise ValueError('Username may only contain letters, digits, "_", "." and "-"')
        return v


# =============================================================================
# RESTAURANT
# =============================================================================

class RestaurantCreate(BaseModel):
    """Request schema for registering a restaurant together with its owner."""
    name: str = Field(..., min_length=1, max_length=100, examples=["Pasta palace"])
    description: Optional[str] = Field(None, max_length=2000, examples=["This is pasta palace"])
    owner: UserRequest


class RestaurantView(BaseModel):
    """
    Restaurant as seen by clients.

    Used for updates as well; ``id`` is ignored on input.
    """
    model_config = ConfigDict(from_attributes=True)

    id: Optional[UUID] = None
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=2000)


# =============================================================================
# INGREDIENT
# =============================================================================

class IngredientCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, examples=["Tomato"])


class IngredientView(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str


# =============================================================================
# DISH
# =============================================================================

class DishCreate(BaseModel):
    """Request schema for creating or replacing a dish."""
    name: str = Field(..., min_length=1, max_length=100, examples=["Spaghetti carbonara"])
    description: Optional[str] = Field(None, max_length=2000)
    ingredient_ids: List[UUID] = Field(default_factory=list)


class DishView(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    description: Optional[str]
    ingredients: List[IngredientView] = Field(default_factory=list)


# =============================================================================
# GENERIC RESPONSES
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    success: bool = False
    error: str
    detail: Optional[str] = None


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    database: str
    user_service: str
    timestamp: datetime
