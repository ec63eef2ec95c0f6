"""User registration, login and lookup against the users table."""

import logging
from datetime import UTC, datetime
from typing import Any

from app.core.errors import AuthError, ConflictError, ValidationError
from app.core.security import TokenService
from app.core.store import JsonRecordStore
from app.schemas.auth import LoginResponse, UserPublic, UserRecord

logger = logging.getLogger(__name__)

# Same message for unknown email and wrong password.
INVALID_CREDENTIALS = "Invalid email or password"


def _timestamp() -> str:
    """Current UTC time as ISO-8601 with milliseconds, e.g. 2024-05-01T12:00:00.000Z."""
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class AccountService:
    """
    Registers and authenticates users stored in a JSON table.

    Passwords are stored and compared as plain text.
    """

    def __init__(
        self,
        store: JsonRecordStore,
        tokens: TokenService,
        table: str = "users",
    ) -> None:
        self.store = store
        self.tokens = tokens
        self.table = table

    def register(
        self,
        username: str | None,
        email: str | None,
        password: str | None,
    ) -> UserPublic:
        """Create a user with id = number of existing users + 1."""
        for field, value in (("username", username), ("email", email), ("password", password)):
            if not value:
                raise ValidationError(
                    "Username, email, and password are required", field=field
                )

        with self.store.lock:
            users = self.store.load(self.table)
            if any(u.get("username") == username for u in users):
                raise ConflictError("Username already exists", field="username")
            if any(u.get("email") == email for u in users):
                raise ConflictError("Email already exists", field="email")

            user = UserRecord(
                id=len(users) + 1,
                username=username,
                email=email,
                password=password,
                registered_at=_timestamp(),
            )
            users.append(user.model_dump(by_alias=True))
            self.store.save(self.table, users)

        logger.info("User registered", extra={"user_id": user.id})
        return user.to_public()

    def login(self, email: str | None, password: str | None) -> LoginResponse:
        """Check credentials and issue a bearer token for the user's id."""
        if not email or not password:
            raise ValidationError(
                "Email and password are required",
                field="email" if not email else "password",
            )

        users = self.store.load(self.table)
        found = next((u for u in users if u.get("email") == email), None)
        if found is None or found.get("password") != password:
            raise AuthError(INVALID_CREDENTIALS)

        user = UserRecord.model_validate(found)
        token = self.tokens.issue(user.id)
        logger.info("User logged in", extra={"user_id": user.id})
        return LoginResponse(
            user=user.to_public(),
            token=token,
            expires_in=self.tokens.expires_in_label,
        )

    def resolve_user(self, user_id: Any) -> UserRecord | None:
        """Find a user by exact id match; None if absent."""
        for u in self.store.load(self.table):
            if u.get("id") == user_id:
                return UserRecord.model_validate(u)
        return None
