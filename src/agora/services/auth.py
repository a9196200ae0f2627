"""Registration, login and bearer token verification."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from jose import JWTError

from agora.core import security
from agora.core.errors import Conflict, Unauthenticated, ValidationError
from agora.repositories import UserRecord, UserRepository

logger = logging.getLogger(__name__)

# Shared by both failure branches of login so callers cannot tell them apart.
INVALID_CREDENTIALS = "Invalid username or password"


@dataclass(frozen=True)
class LoginResult:
    """Token plus the public identity of the user who logged in."""

    token: str
    user_id: int
    username: str


class AuthService:
    """Registers identities, checks credentials and validates session tokens."""

    def __init__(
        self,
        users: UserRepository,
        *,
        secret_key: str | None = None,
        algorithm: str | None = None,
        expires_minutes: int | None = None,
    ) -> None:
        self.users = users
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expires_minutes = expires_minutes

    def register(self, username: str | None, password: str | None) -> UserRecord:
        """Create a new user.

        Raises:
            ValidationError: If the username or password is missing or empty.
            Conflict: If the username is already taken (exact match).
        """
        if not username or not password:
            raise ValidationError("Missing required fields: username, password")
        if self.users.get_by_username(username) is not None:
            raise Conflict("Username is already taken")

        user = self.users.add(username, security.hash_password(password))
        logger.info("Registered user %s (id=%d)", user.username, user.id)
        return user

    def login(self, username: str | None, password: str | None) -> LoginResult:
        """Verify credentials and issue a signed access token.

        Raises:
            Unauthenticated: With the same message whether the username is
                unknown or the password is wrong.
        """
        user = self.users.get_by_username(username) if username else None
        if user is None or not password or not security.verify_password(user.password_hash, password):
            logger.info("Rejected login attempt")
            raise Unauthenticated(INVALID_CREDENTIALS)

        token = security.create_access_token(
            user.id,
            secret_key=self.secret_key,
            algorithm=self.algorithm,
            expires_minutes=self.expires_minutes,
        )
        return LoginResult(token=token, user_id=user.id, username=user.username)

    def verify(self, token: str) -> int:
        """Return the user id embedded in ``token``.

        Raises:
            Unauthenticated: If the token is malformed, expired or badly signed.
        """
        try:
            return security.decode_access_token(
                token,
                secret_key=self.secret_key,
                algorithm=self.algorithm,
            )
        except JWTError as err:
            raise Unauthenticated("Invalid or expired token") from err

    def authenticate_header(self, authorization: str | None) -> int:
        """Validate an ``Authorization: Bearer <token>`` header value."""
        if not authorization:
            raise Unauthenticated("Missing Authorization header")
        parts = authorization.split(" ")
        if parts[0].lower() != "bearer":
            raise Unauthenticated("Malformed Authorization header")
        if len(parts) < 2 or not parts[1]:
            raise Unauthenticated("Missing bearer token")
        return self.verify(parts[1])

    def optional_viewer(self, authorization: str | None) -> int | None:
        """Resolve the viewer for public endpoints; any failure means anonymous."""
        if not authorization:
            return None
        try:
            return self.authenticate_header(authorization)
        except Unauthenticated:
            return None
