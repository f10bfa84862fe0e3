"""Public security API exports."""
from __future__ import annotations

from .bearer import (
    MalformedHeaderError,
    MissingCredentialsError,
    bearer_scheme,
    parse_bearer_credentials,
)
from .passwords import check_credentials
from .tokens import (
    InvalidSignatureError,
    MalformedTokenError,
    TokenError,
    TokenExpiredError,
    TokenService,
)

__all__ = [
    "InvalidSignatureError",
    "MalformedHeaderError",
    "MalformedTokenError",
    "MissingCredentialsError",
    "TokenError",
    "TokenExpiredError",
    "TokenService",
    "bearer_scheme",
    "check_credentials",
    "parse_bearer_credentials",
]
