"""Pydantic schemas for the food inventory."""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FoodCreate(BaseModel):
    """Schema for adding a food item."""

    name: Annotated[str, Field(
        min_length=1,
        max_length=255,
        description="Name of the food item (e.g., 'Milk')"
    )]
    expiry_date: Annotated[str, Field(
        min_length=1,
        max_length=50,
        description="Expiry date, e.g. '2024-12-31'"
    )]

    model_config = ConfigDict(str_strip_whitespace=True)

    @field_validator("name", "expiry_date")
    def validate_not_blank(cls, v: str) -> str:
        """Reject values that are empty after stripping."""
        if not v:
            raise ValueError("Value cannot be empty or whitespace")
        return v


class FoodRead(BaseModel):
    """Schema for a stored food item."""

    id: int
    name: str
    expiry_date: str

    model_config = ConfigDict(from_attributes=True)


class FoodCreated(BaseModel):
    """Response after a food item was stored."""

    message: str
    id: int


class MessageResponse(BaseModel):
    """Plain confirmation message."""

    message: str
