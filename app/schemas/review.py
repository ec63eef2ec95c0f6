"""Pydantic schemas for book reviews."""

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.catalog import WorkInfo


class ReviewRequest(BaseModel):
    """Body for creating or replacing the caller's review of a book."""

    model_config = ConfigDict(populate_by_name=True)

    rating: float | str | None = Field(
        default=None, description="Number (or numeric string) from 1 to 5"
    )
    comment: str | None = Field(default=None, description="Optional review text")
    book_title: str | None = Field(
        default=None, alias="bookTitle", description="Title shown with the review"
    )


class Review(BaseModel):
    """One stored review; at most one per (bookId, userId)."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    book_id: str = Field(..., alias="bookId")
    user_id: int = Field(..., alias="userId")
    username: str
    rating: int | float
    comment: str = ""
    book_title: str = Field(..., alias="bookTitle")
    created_at: str = Field(..., alias="createdAt")
    updated_at: str = Field(..., alias="updatedAt")


class ReviewDeleteResponse(BaseModel):
    """Response for both review delete endpoints."""

    message: str = "Review deleted successfully"
    review: Review


class BookReviewsResponse(BaseModel):
    """Catalog work details together with its stored reviews."""

    book: WorkInfo
    reviews: list[Review] = Field(default_factory=list)
