"""Password hashing and JWT helpers."""
from __future__ import annotations

from datetime import timedelta

from jose import JWTError, jwt
from werkzeug.security import check_password_hash, generate_password_hash

from agora.core.settings import settings
from agora.db.time import utcnow


def hash_password(password: str) -> str:
    """Return a salted one-way hash of ``password``."""
    return generate_password_hash(password)


def verify_password(password_hash: str, password: str) -> bool:
    """Check ``password`` against a hash produced by :func:`hash_password`."""
    return check_password_hash(password_hash, password)


def create_access_token(
    user_id: int,
    *,
    secret_key: str | None = None,
    algorithm: str | None = None,
    expires_minutes: int | None = None,
) -> str:
    """Create a signed JWT access token embedding ``user_id``.

    Args:
        user_id: Identifier of the authenticated user.
        secret_key: Signing key; defaults to ``settings.secret_key``.
        algorithm: JWT algorithm; defaults to ``settings.jwt_algorithm``.
        expires_minutes: Lifetime; defaults to ``settings.access_token_expire_minutes``.

    Returns:
        The encoded token.
    """
    if expires_minutes is None:
        expires_minutes = settings.access_token_expire_minutes
    to_encode: dict[str, object] = {
        "sub": str(user_id),
        "userId": user_id,
        "exp": utcnow() + timedelta(minutes=expires_minutes),
    }
    encoded_jwt: str = jwt.encode(
        to_encode,
        secret_key or settings.secret_key,
        algorithm=algorithm or settings.jwt_algorithm,
    )
    return encoded_jwt


def decode_access_token(
    token: str,
    *,
    secret_key: str | None = None,
    algorithm: str | None = None,
) -> int:
    """Decode a token and return the embedded user id.

    Raises:
        JWTError: If the token is malformed, expired, badly signed or carries
            no usable user id claim.
    """
    payload = jwt.decode(
        token,
        secret_key or settings.secret_key,
        algorithms=[algorithm or settings.jwt_algorithm],
    )
    subject = payload.get("userId", payload.get("sub"))
    if subject is None:
        raise JWTError("Token has no subject")
    try:
        return int(subject)
    except (TypeError, ValueError) as err:
        raise JWTError("Token subject is not a user id") from err
