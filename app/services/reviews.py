"""Per-(book, user) reviews: upsert, owner-checked delete, and listing."""

import logging
import math
import time
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

from app.core.errors import AuthError, ForbiddenError, NotFoundError, ValidationError
from app.core.security import TokenService
from app.core.store import JsonRecordStore, Record
from app.schemas.review import Review
from app.services.accounts import AccountService

logger = logging.getLogger(__name__)

RATING_MIN = 1
RATING_MAX = 5
DEFAULT_BOOK_TITLE = "Unknown Book Title"


def _timestamp() -> str:
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _now_millis() -> int:
    return int(time.time() * 1000)


def parse_rating(value: Any) -> int | float:
    """
    Parse a rating from a number or numeric string and check it is in [1, 5].

    Whole numbers come back as int so they are stored as e.g. 3, not 3.0.
    """
    if value is None or value == "" or isinstance(value, bool):
        raise ValidationError("Book ID and rating are required", field="rating")
    try:
        rating = float(value)
    except (TypeError, ValueError):
        rating = math.nan
    if math.isnan(rating) or rating < RATING_MIN or rating > RATING_MAX:
        raise ValidationError(
            f"Rating must be a number between {RATING_MIN} and {RATING_MAX}",
            field="rating",
        )
    return int(rating) if rating.is_integer() else rating


class ReviewService:
    """Reviews stored in a JSON table; mutations require a bearer token."""

    def __init__(
        self,
        store: JsonRecordStore,
        tokens: TokenService,
        accounts: AccountService,
        table: str = "reviews",
    ) -> None:
        self.store = store
        self.tokens = tokens
        self.accounts = accounts
        self.table = table

    def _subject(self, token: str | None) -> Any:
        user_id = self.tokens.verify(token)
        if user_id is None:
            raise AuthError("Unauthorized: Invalid token")
        return user_id

    def _new_review_id(self, reviews: list[Record]) -> int:
        review_id = _now_millis()
        taken = {r.get("id") for r in reviews}
        while review_id in taken:
            review_id += 1
        return review_id

    def upsert(
        self,
        book_id: str | None,
        token: str | None,
        rating: Any,
        comment: str | None = None,
        book_title: str | None = None,
    ) -> Review:
        """Create the caller's review of `book_id`, or replace it if one exists."""
        user_id = self._subject(token)
        user = self.accounts.resolve_user(user_id)
        if user is None:
            raise NotFoundError("User not found")
        if not book_id:
            raise ValidationError("Book ID and rating are required", field="bookId")
        value = parse_rating(rating)

        with self.store.lock:
            reviews = self.store.load(self.table)
            index = next(
                (
                    i
                    for i, r in enumerate(reviews)
                    if r.get("bookId") == book_id and r.get("userId") == user_id
                ),
                None,
            )
            now = _timestamp()
            existing = reviews[index] if index is not None else None
            review = Review(
                id=existing["id"] if existing else self._new_review_id(reviews),
                book_id=book_id,
                user_id=user.id,
                username=user.username,
                rating=value,
                comment=comment or "",
                book_title=book_title or DEFAULT_BOOK_TITLE,
                created_at=existing["createdAt"] if existing else now,
                updated_at=now,
            )
            record = review.model_dump(by_alias=True)
            if index is not None:
                reviews[index] = record
            else:
                reviews.append(record)
            self.store.save(self.table, reviews)

        logger.info(
            "Review updated" if existing else "Review added",
            extra={"review_id": review.id, "book_id": book_id, "user_id": user.id},
        )
        return review

    def _delete_where(
        self, book_id: str, match: Callable[[Record], bool], user_id: Any
    ) -> Review:
        with self.store.lock:
            reviews = self.store.load(self.table)
            index = next((i for i, r in enumerate(reviews) if match(r)), None)
            if index is None:
                raise NotFoundError("Review not found")
            if reviews[index].get("userId") != user_id:
                raise ForbiddenError(
                    "Unauthorized: You can only delete your own reviews"
                )
            deleted = reviews.pop(index)
            self.store.save(self.table, reviews)

        logger.info(
            "Review deleted",
            extra={"review_id": deleted.get("id"), "book_id": book_id, "user_id": user_id},
        )
        return Review.model_validate(deleted)

    def delete_by_id(self, book_id: str, review_id: Any, token: str | None) -> Review:
        """Delete review `review_id` of `book_id`; only its author may do so."""
        user_id = self._subject(token)
        return self._delete_where(
            book_id,
            lambda r: str(r.get("id")) == str(review_id) and r.get("bookId") == book_id,
            user_id,
        )

    def delete_by_owner(self, book_id: str, token: str | None) -> Review:
        """Delete the caller's own review of `book_id`."""
        user_id = self._subject(token)
        return self._delete_where(
            book_id,
            lambda r: r.get("bookId") == book_id and r.get("userId") == user_id,
            user_id,
        )

    def list_for_book(self, book_id: str) -> list[Review]:
        """All reviews of `book_id` in stored (append) order."""
        return [
            Review.model_validate(r)
            for r in self.store.load(self.table)
            if r.get("bookId") == book_id
        ]
