"""SQLAlchemy ORM models for the food inventory."""

from __future__ import annotations

import datetime

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from savebite.db.base import Base

# Largest primary key the database accepts (signed 64-bit)
MAX_ID = 2**63 - 1


class Food(Base):
    """Represents a row in the ``foods`` table.

    A perishable item tracked by the user. The expiry date is kept as the
    text the client sent; it is not parsed or validated as a date.
    """

    __tablename__ = "foods"

    # ------------------------------------------------------------------ #
    # Columns                                                             #
    # ------------------------------------------------------------------ #
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Name of the food item (e.g., 'Milk', 'Spinach')"
    )
    expiry_date: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        comment="Expiry date as provided by the client"
    )

    def __repr__(self) -> str:
        return f"Food(id={self.id!r}, name={self.name!r}, expiry_date={self.expiry_date!r})"


class FoodRecipe(Base):
    """Represents a row in the ``food_recipes`` table.

    Stores the text returned by the recipe provider. ``food_id`` points at
    ``foods.id`` when the recipe could be linked to a stored item; it is not a
    database constraint, so deleting a food keeps its recipes.
    """

    __tablename__ = "food_recipes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    food_id: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)
    recipe: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime,
        nullable=False,
        default=lambda: datetime.datetime.now(datetime.timezone.utc)
    )

    def __repr__(self) -> str:
        return f"FoodRecipe(id={self.id!r}, food_id={self.food_id!r})"
