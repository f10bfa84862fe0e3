"""AI recipe generation endpoint."""

from __future__ import annotations

import asyncio
import logging
from typing import Annotated, Any, Awaitable, TypeVar

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from savebite.core.config import Settings
from savebite.core.dependencies import (
    get_current_username,
    get_db,
    get_recipe_provider,
    get_settings,
)
from savebite.core.routing import AuthenticatedRoute
from savebite.crud import food as crud_food
from savebite.schemas.recipe import RecipeRequest, RecipeResponse
from savebite.services.ai import RecipeProvider, RecipeProviderError

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["AI Services"],
    route_class=AuthenticatedRoute,
    dependencies=[Depends(get_current_username)],
)

T = TypeVar("T")

# HTTP status used by nginx and others for "client closed request"
CLIENT_CLOSED_REQUEST = 499

# Seconds between client-disconnect checks while the provider runs
DISCONNECT_POLL_INTERVAL = 0.5


class ClientDisconnectedError(Exception):
    """The client went away before the upstream call finished."""


async def await_unless_disconnected(
        request: Any,
        awaitable: Awaitable[T],
        *,
        timeout: float,
        poll_interval: float | None = None,
) -> T:
    """Await ``awaitable`` while watching ``request`` for a client disconnect.

    The underlying task is cancelled when the timeout elapses, the client
    disconnects, or the caller itself is cancelled.

    Raises:
        RecipeProviderError: the timeout elapsed.
        ClientDisconnectedError: the client disconnected first.
    """
    if poll_interval is None:
        poll_interval = DISCONNECT_POLL_INTERVAL
    task = asyncio.ensure_future(awaitable)
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    try:
        while True:
            remaining = deadline - loop.time()
            if remaining <= 0:
                raise RecipeProviderError(f"Recipe provider timed out after {timeout}s")
            done, _ = await asyncio.wait({task}, timeout=min(poll_interval, remaining))
            if done:
                return task.result()
            if await request.is_disconnected():
                raise ClientDisconnectedError()
    finally:
        if not task.done():
            task.cancel()
            await asyncio.wait({task})


@router.post("/recipe", response_model=RecipeResponse)
async def generate_recipe(
        *,
        request: Request,
        username: Annotated[str, Depends(get_current_username)],
        db: Annotated[Session, Depends(get_db)],
        settings: Annotated[Settings, Depends(get_settings)],
        provider: Annotated[RecipeProvider, Depends(get_recipe_provider)],
        data: RecipeRequest,
) -> RecipeResponse:
    """Ask the recipe provider for a recipe and store the result."""
    try:
        recipe = await await_unless_disconnected(
            request,
            provider.generate_recipe(data.food_name),
            timeout=settings.RECIPE_PROVIDER_TIMEOUT_SECONDS,
        )
    except ClientDisconnectedError:
        logger.info(f"Client disconnected while generating recipe for {data.food_name!r}")
        raise HTTPException(status_code=CLIENT_CLOSED_REQUEST, detail="Client closed request")
    except RecipeProviderError as exc:
        logger.error(f"Recipe generation failed for {data.food_name!r}: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to get recipe from AI"
        )

    if not recipe or not recipe.strip():
        logger.error(f"Recipe provider returned no content for {data.food_name!r}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="AI did not return a valid result"
        )

    try:
        food_id = data.food_id or await run_in_threadpool(
            crud_food.get_food_id_by_name, db, data.food_name
        )
        await run_in_threadpool(crud_food.create_food_recipe, db, food_id=food_id, recipe=recipe)
    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Failed to store recipe for {data.food_name!r}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save recipe to database"
        )

    logger.info(f"Generated recipe for {username!r} (food {food_id})")
    return RecipeResponse(recipe=recipe)
