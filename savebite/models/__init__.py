"""SQLAlchemy models package."""

from savebite.models.food import Food, FoodRecipe

__all__ = ["Food", "FoodRecipe"]
