"""CRUD operations for the food inventory."""

from __future__ import annotations

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from savebite.models.food import MAX_ID, Food, FoodRecipe
from savebite.schemas.food import FoodCreate, FoodRead
from savebite.schemas.recipe import FoodRecipeRead


# ================================================================== #
# Helper Functions for Schema Conversion                            #
# ================================================================== #

def build_food_read(food_orm: Food) -> FoodRead:
    """Convert Food ORM to Read schema."""
    return FoodRead.model_validate(food_orm, from_attributes=True)


# ================================================================== #
# Food CRUD Operations                                               #
# ================================================================== #

def create_food(db: Session, food_data: FoodCreate) -> FoodRead:
    """Insert a new food item - returns schema.

    Args:
        db: Database session
        food_data: Food creation data

    Returns:
        Created food schema with the store-assigned id
    """
    db_food = Food(name=food_data.name, expiry_date=food_data.expiry_date)

    db.add(db_food)
    db.commit()
    db.refresh(db_food)

    return build_food_read(db_food)


def get_all_foods(db: Session) -> list[FoodRead]:
    """Return every food item ordered by id."""
    foods = db.scalars(select(Food).order_by(Food.id)).all()
    return [build_food_read(food) for food in foods]


def get_food_id_by_name(db: Session, name: str) -> int | None:
    """Return the id of the oldest food whose name matches case-insensitively."""
    return db.scalar(
        select(Food.id)
        .where(func.lower(Food.name) == name.strip().lower())
        .order_by(Food.id)
        .limit(1)
    )


def delete_food(db: Session, food_id: int) -> bool:
    """Delete a food item by id.

    Deleting an id that does not exist is not an error.

    Returns:
        True if a row was removed, False otherwise
    """
    if not 0 < food_id <= MAX_ID:
        return False

    result = db.execute(delete(Food).where(Food.id == food_id))
    db.commit()
    return bool(result.rowcount)


# ================================================================== #
# FoodRecipe Operations                                              #
# ================================================================== #

def create_food_recipe(db: Session, food_id: int | None, recipe: str) -> FoodRecipeRead:
    """Store generated recipe text, optionally linked to a food item."""
    db_recipe = FoodRecipe(food_id=food_id, recipe=recipe)

    db.add(db_recipe)
    db.commit()
    db.refresh(db_recipe)

    return FoodRecipeRead.model_validate(db_recipe, from_attributes=True)
