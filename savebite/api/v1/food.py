"""API endpoints for the food inventory."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from savebite.core.dependencies import get_current_username, get_db
from savebite.core.routing import AuthenticatedRoute
from savebite.crud import food as crud_food
from savebite.schemas.food import FoodCreate, FoodCreated, FoodRead, MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/foods",
    tags=["Foods"],
    route_class=AuthenticatedRoute,
    dependencies=[Depends(get_current_username)],
)


@router.post("", response_model=FoodCreated)
def create_food(
        *,
        db: Annotated[Session, Depends(get_db)],
        username: Annotated[str, Depends(get_current_username)],
        food_data: FoodCreate
) -> FoodCreated:
    """Store a new food item.

    Raises:
        HTTPException: 500 if the item could not be stored
    """
    try:
        food = crud_food.create_food(db=db, food_data=food_data)
    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Failed to store food {food_data.name!r} for {username!r}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save food"
        )

    logger.info(f"User {username!r} added food {food.id}")
    return FoodCreated(message="Food saved successfully", id=food.id)


@router.get("", response_model=list[FoodRead])
def get_foods(
        *,
        db: Annotated[Session, Depends(get_db)],
) -> list[FoodRead]:
    """List all food items ordered by id.

    Raises:
        HTTPException: 500 if the store cannot be read
    """
    try:
        return crud_food.get_all_foods(db=db)
    except SQLAlchemyError:
        logger.exception("Failed to list foods")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch foods"
        )


@router.delete("/{food_id}", response_model=MessageResponse)
def delete_food(
        *,
        db: Annotated[Session, Depends(get_db)],
        username: Annotated[str, Depends(get_current_username)],
        food_id: int
) -> MessageResponse:
    """Delete a food item; unknown ids are ignored.

    Raises:
        HTTPException: 500 if the delete fails
    """
    try:
        removed = crud_food.delete_food(db=db, food_id=food_id)
    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Failed to delete food {food_id}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete food"
        )

    if removed:
        logger.info(f"User {username!r} deleted food {food_id}")
    return MessageResponse(message="Food deleted successfully")
