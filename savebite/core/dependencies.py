"""Shared FastAPI dependencies."""
from __future__ import annotations

import logging
from typing import Annotated, Generator

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from savebite.core.config import Settings
from savebite.security import (
    MalformedHeaderError,
    MissingCredentialsError,
    TokenError,
    TokenService,
    bearer_scheme,
    parse_bearer_credentials,
)
from savebite.services.ai import AIServiceFactory, RecipeProvider, RecipeProviderConfigError

logger = logging.getLogger(__name__)

_BEARER_CHALLENGE = {"WWW-Authenticate": "Bearer"}


def get_settings(request: Request) -> Settings:
    """Return the settings the application was created with."""
    return request.app.state.settings


def get_token_service(request: Request) -> TokenService:
    """Return the application's token service."""
    return request.app.state.token_service


def get_db(request: Request) -> Generator[Session, None, None]:
    """Yield a database session for the request lifecycle.

    This dependency provides a database session that will be automatically
    closed after the request is completed, ensuring proper cleanup.

    Yields:
        Session: SQLAlchemy database session.
    """
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def authenticate_request(
        request: Request,
        credentials: HTTPAuthorizationCredentials | None,
        token_service: TokenService,
) -> str:
    """Resolve the username behind the request's bearer token.

    The resolved username is also stored on ``request.state.username``.

    Raises:
        HTTPException: 401 if the header is missing or malformed, or the token
            is invalid or expired.

    Returns:
        str: Username carried by the token.
    """
    try:
        token = parse_bearer_credentials(credentials, request.headers.get("Authorization"))
    except MissingCredentialsError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token not found",
            headers=_BEARER_CHALLENGE,
        )
    except MalformedHeaderError as exc:
        logger.info(f"Rejected malformed authorization header: {exc}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Malformed authorization header",
            headers=_BEARER_CHALLENGE,
        )

    try:
        username = token_service.validate(token)
    except TokenError as exc:
        logger.info(f"Rejected token ({type(exc).__name__}): {exc}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers=_BEARER_CHALLENGE,
        )

    request.state.username = username
    return username


def get_current_username(
        request: Request,
        token_service: Annotated[TokenService, Depends(get_token_service)],
        credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> str:
    """Return the authenticated username for a protected endpoint.

    Routes built with ``AuthenticatedRoute`` have already checked the token
    before the body was read; the username is reused from the request state.
    """
    username = getattr(request.state, "username", None)
    if username:
        return username
    return authenticate_request(request, credentials, token_service)


def get_recipe_provider(
        settings: Annotated[Settings, Depends(get_settings)],
) -> RecipeProvider:
    """Build the configured recipe provider for this request.

    Raises:
        HTTPException: 500 if the provider is not configured.
    """
    try:
        return AIServiceFactory.create_recipe_provider(settings)
    except RecipeProviderConfigError as exc:
        logger.error(f"Recipe provider unavailable: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Recipe service is not configured",
        )
