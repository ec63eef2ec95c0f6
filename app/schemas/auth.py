"""Request/response schemas for registration, login and stored users."""

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    """Registration body. Presence is checked by the account service."""

    username: str | None = Field(default=None, description="Unique username")
    email: str | None = Field(default=None, description="Unique email address")
    password: str | None = Field(default=None, description="Password (stored as given)")


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: str | None = Field(default=None, description="Registered email")
    password: str | None = Field(default=None, description="Password")


class UserPublic(BaseModel):
    """User as returned to clients (no password)."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    username: str
    email: str
    registered_at: str = Field(..., alias="registeredAt", description="ISO-8601 timestamp")


class UserRecord(UserPublic):
    """User as persisted in the users table."""

    password: str

    def to_public(self) -> UserPublic:
        return UserPublic.model_validate(self.model_dump(exclude={"password"}))


class LoginResponse(BaseModel):
    """Authenticated user, bearer token and its lifetime label."""

    model_config = ConfigDict(populate_by_name=True)

    user: UserPublic
    token: str = Field(..., description="Bearer token for the Authorization header")
    expires_in: str = Field(..., alias="expiresIn", description="e.g. '1 hour'")
