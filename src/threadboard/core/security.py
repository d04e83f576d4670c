"""Bearer token helpers for resolving the calling principal."""
from __future__ import annotations

from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from threadboard.core.settings import settings


class InvalidTokenError(ValueError):
    """Raised when a bearer token cannot be decoded into a principal."""


def create_access_token(principal_id: str, extra_claims: dict[str, str] | None = None) -> str:
    """Create a signed JWT whose subject is the principal id."""
    to_encode: dict[str, object] = {"sub": principal_id}
    if extra_claims:
        to_encode.update(extra_claims)
    expire = datetime.now(UTC) + timedelta(minutes=settings.access_token_expire_minutes)
    to_encode["exp"] = expire
    encoded_jwt: str = jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt


def decode_principal(token: str) -> str:
    """Return the principal id carried in the `sub` claim of a token.

    Raises:
        InvalidTokenError: If the token signature, expiry or subject is invalid.
    """
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError as err:
        raise InvalidTokenError("Could not validate credentials") from err

    subject = payload.get("sub")
    if not isinstance(subject, str) or not subject.strip():
        raise InvalidTokenError("Could not validate credentials")
    return subject
