"""Pydantic schemas for recipe generation."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from savebite.models.food import MAX_ID


class RecipeRequest(BaseModel):
    """Request a recipe for a food."""

    food_name: str = Field(..., min_length=1, max_length=255, description="Food to cook with")
    food_id: int | None = Field(
        None,
        gt=0,
        le=MAX_ID,
        description="Stored food to link the recipe to; matched by name when omitted"
    )

    model_config = ConfigDict(str_strip_whitespace=True)


class RecipeResponse(BaseModel):
    """Generated recipe text."""

    recipe: str


class FoodRecipeRead(BaseModel):
    """Stored recipe record."""

    id: int
    food_id: int | None
    recipe: str

    model_config = ConfigDict(from_attributes=True)
