from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from jose import JWTError

from savebite.core.config import Settings
from savebite.core.dependencies import get_settings, get_token_service
from savebite.schemas.auth import LoginRequest, TokenResponse
from savebite.security import TokenService, check_credentials

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Auth"])


@router.post("/login", response_model=TokenResponse, summary="Authenticate and issue a token")
def login(
        payload: LoginRequest,
        settings: Annotated[Settings, Depends(get_settings)],
        token_service: Annotated[TokenService, Depends(get_token_service)],
) -> TokenResponse:
    """Check the configured account and return a bearer token."""
    if not check_credentials(
            payload.username,
            payload.password,
            expected_username=settings.AUTH_USERNAME,
            expected_password=settings.AUTH_PASSWORD,
    ):
        logger.info(f"Failed login for username {payload.username!r}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials"
        )

    try:
        token = token_service.issue(payload.username)
    except JWTError:
        logger.exception("Failed to sign token")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to generate token",
        )

    return TokenResponse(token=token)
