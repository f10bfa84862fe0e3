from __future__ import annotations

import hmac

import click
from passlib.context import CryptContext


_pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(plain_password: str) -> str:
    """Return a bcrypt hash for a given plain password.

    Args:
        plain_password: Raw user password.

    Returns:
        str: Bcrypt hash.
    """
    return _pwd_context.hash(plain_password)


def is_password_hashed(value: str | None) -> bool:
    """Heuristically check if a given value looks like a bcrypt hash.

    Args:
        value: String to test.

    Returns:
        bool: True if value seems to be an already hashed password.
    """
    if not value:
        return False
    return value.startswith("$2a$") or value.startswith("$2b$") or value.startswith("$2y$")


def verify_password(plain_password: str, stored_password: str) -> bool:
    """Verify a plain password against the configured one.

    The configured value may be a bcrypt hash or plain text; plain text is
    compared in constant time.

    Args:
        plain_password: Password sent by the client.
        stored_password: Configured password or bcrypt hash.

    Returns:
        bool: True if the password matches, otherwise False.
    """
    if is_password_hashed(stored_password):
        return _pwd_context.verify(plain_password, stored_password)
    return hmac.compare_digest(plain_password.encode("utf-8"), stored_password.encode("utf-8"))


def check_credentials(
        username: str,
        password: str,
        *,
        expected_username: str | None,
        expected_password: str | None,
) -> bool:
    """Return True if ``username``/``password`` match the configured account.

    An unconfigured account never matches.
    """
    if not expected_username or not expected_password:
        return False
    username_ok = hmac.compare_digest(username.encode("utf-8"), expected_username.encode("utf-8"))
    password_ok = verify_password(password, expected_password)
    return username_ok and password_ok


@click.command(help="Print a bcrypt hash to use as AUTH_PASSWORD.")
@click.password_option("--password", help="Password to hash; prompted when omitted.")
def hash_password_cli(password: str) -> None:
    """CLI wrapper."""
    click.echo(hash_password(password))


if __name__ == "__main__":  # pragma: no cover
    hash_password_cli()
