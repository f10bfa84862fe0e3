from __future__ import annotations

import datetime
import logging
from typing import Any

from jose import jwt
from jose.exceptions import ExpiredSignatureError, JWTClaimsError, JWTError

from savebite.core.config import Settings

logger = logging.getLogger(__name__)


class TokenError(Exception):
    """Base class for token validation failures."""


class InvalidSignatureError(TokenError):
    """Token uses an unexpected algorithm or its signature does not verify."""


class TokenExpiredError(TokenError):
    """Token expiration time has passed."""


class MalformedTokenError(TokenError):
    """Token cannot be parsed or carries unusable claims."""


def _now_utc() -> datetime.datetime:
    """Return the current UTC time as an aware datetime."""
    return datetime.datetime.now(datetime.timezone.utc)


class TokenService:
    """Issue and validate signed bearer tokens carrying a username claim."""

    def __init__(
            self,
            secret_key: str,
            *,
            algorithm: str = "HS256",
            issuer: str = "savebite",
            expire_hours: int = 24,
    ):
        if not secret_key:
            raise ValueError("A non-empty secret key is required")
        self._secret_key = secret_key
        self.algorithm = algorithm
        self.issuer = issuer
        self.expires_delta = datetime.timedelta(hours=expire_hours)

    @classmethod
    def from_settings(cls, settings: Settings, secret_key: str) -> "TokenService":
        """Build a service from application settings and a resolved secret."""
        return cls(
            secret_key,
            algorithm=settings.ALGORITHM,
            issuer=settings.TOKEN_ISSUER,
            expire_hours=settings.ACCESS_TOKEN_EXPIRE_HOURS,
        )

    def issue(
            self,
            username: str,
            *,
            expires_delta: datetime.timedelta | None = None,
    ) -> str:
        """Create a signed token for ``username``.

        Args:
            username: Authenticated username to embed.
            expires_delta: Override of the configured lifetime.

        Returns:
            The encoded JWT as a string.
        """
        now = _now_utc()
        payload: dict[str, Any] = {
            "username": username,
            "iss": self.issuer,
            "iat": int(now.timestamp()),
            "exp": int((now + (expires_delta or self.expires_delta)).timestamp()),
        }
        return jwt.encode(payload, self._secret_key, algorithm=self.algorithm)

    def validate(self, token: str) -> str:
        """Validate ``token`` and return the embedded username.

        Raises:
            InvalidSignatureError: wrong algorithm or signature mismatch.
            TokenExpiredError: the token has expired.
            MalformedTokenError: unparsable token, wrong issuer or bad claims.
        """
        try:
            header = jwt.get_unverified_header(token)
        except JWTError as exc:
            raise MalformedTokenError("Token header cannot be parsed") from exc

        if header.get("alg") != self.algorithm:
            raise InvalidSignatureError(f"Unexpected signing algorithm: {header.get('alg')!r}")

        try:
            jwt.get_unverified_claims(token)
        except JWTError as exc:
            raise MalformedTokenError("Token payload is not a JSON object") from exc

        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.algorithm],
                issuer=self.issuer,
            )
        except ExpiredSignatureError as exc:
            raise TokenExpiredError("Token has expired") from exc
        except JWTClaimsError as exc:
            raise MalformedTokenError(f"Invalid claims: {exc}") from exc
        except JWTError as exc:
            raise InvalidSignatureError("Signature verification failed") from exc

        username = payload.get("username")
        if not isinstance(username, str) or not username:
            raise MalformedTokenError("Token has no username claim")
        return username
