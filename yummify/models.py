"""
SQLAlchemy Database Models

Restaurants own their dishes and ingredients. A dish name is unique
within its restaurant; a dish may use any number of the restaurant's
ingredients.
"""

import uuid

from sqlalchemy import Column, DateTime, ForeignKey, String, Table, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from yummify.database import Base


dish_ingredients = Table(
    "dish_ingredients",
    Base.metadata,
    Column("dish_id", Uuid, ForeignKey("dishes.id", ondelete="CASCADE"), primary_key=True),
    Column("ingredient_id", Uuid, ForeignKey("ingredients.id", ondelete="CASCADE"), primary_key=True),
)


class Restaurant(Base):
    """
    A tenant of the system.

    ``id`` is assigned on first flush; ``owner_id`` stays empty until the
    owner account has been provisioned.
    """
    __tablename__ = "restaurants"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    owner_id = Column(Uuid, nullable=True, index=True)

    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    def __repr__(self):
        return f"<Restaurant {self.id} - {self.name}>"


class Ingredient(Base):
    """Ingredient available to a single restaurant's dishes."""
    __tablename__ = "ingredients"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(100), nullable=False)
    restaurant_id = Column(
        Uuid,
        ForeignKey("restaurants.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    def __repr__(self):
        return f"<Ingredient {self.id} - {self.name}>"


class Dish(Base):
    """Menu position of a restaurant."""
    __tablename__ = "dishes"
    __table_args__ = (
        UniqueConstraint("name", "restaurant_id", name="uq_dishes_name_restaurant_id"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    restaurant_id = Column(
        Uuid,
        ForeignKey("restaurants.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # selectin: relationships cannot be lazy loaded on an AsyncSession
    ingredients = relationship(
        Ingredient,
        secondary=dish_ingredients,
        lazy="selectin",
        order_by=Ingredient.name,
    )

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    def __repr__(self):
        return f"<Dish {self.id} - {self.name}>"
