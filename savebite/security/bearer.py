"""Bearer credentials extracted from the ``Authorization`` request header."""

from __future__ import annotations

from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

# Registers the bearer scheme in OpenAPI; failures are reported by the caller.
bearer_scheme = HTTPBearer(auto_error=False, description="Token returned by POST /login")


class MissingCredentialsError(Exception):
    """No Authorization header was sent."""


class MalformedHeaderError(Exception):
    """Authorization header is not of the form ``Bearer <token>``."""


def parse_bearer_credentials(
        credentials: HTTPAuthorizationCredentials | None,
        raw_header: str | None,
) -> str:
    """Return the token from credentials resolved by ``bearer_scheme``.

    ``HTTPBearer`` yields ``None`` both for a missing header and for one it
    cannot parse; the raw header value tells the two apart.

    Raises:
        MissingCredentialsError: header absent or blank.
        MalformedHeaderError: wrong scheme or no token.
    """
    if credentials is not None:
        token = credentials.credentials.strip()
        if token:
            return token
        raise MalformedHeaderError("Expected 'Bearer <token>'")

    if raw_header is None or not raw_header.strip():
        raise MissingCredentialsError("Authorization header is missing")
    raise MalformedHeaderError("Expected 'Bearer <token>'")
