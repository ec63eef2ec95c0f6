"""Pydantic request/response schemas."""

from app.schemas.auth import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    UserPublic,
    UserRecord,
)
from app.schemas.catalog import (
    AuthorBook,
    BookDetails,
    BookSummary,
    TitleBook,
    WorkInfo,
)
from app.schemas.health import HealthResponse
from app.schemas.review import (
    BookReviewsResponse,
    Review,
    ReviewDeleteResponse,
    ReviewRequest,
)

__all__ = [
    "AuthorBook",
    "BookDetails",
    "BookReviewsResponse",
    "BookSummary",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "RegisterRequest",
    "Review",
    "ReviewDeleteResponse",
    "ReviewRequest",
    "TitleBook",
    "UserPublic",
    "UserRecord",
    "WorkInfo",
]
