"""Catalog passthrough and per-book review endpoints."""

from typing import Annotated

import httpx
from fastapi import APIRouter, Depends, Query
from fastapi.concurrency import run_in_threadpool

from app.api.v1.auth import get_account_service, get_bearer_token
from app.core.config import Settings, get_settings, settings
from app.core.security import TokenService, get_token_service
from app.core.store import JsonRecordStore, get_record_store
from app.schemas.catalog import AuthorBook, BookDetails, BookSummary, TitleBook
from app.schemas.review import (
    BookReviewsResponse,
    Review,
    ReviewDeleteResponse,
    ReviewRequest,
)
from app.services import catalog
from app.services.accounts import AccountService
from app.services.reviews import ReviewService

router = APIRouter()


def get_catalog_transport() -> httpx.AsyncBaseTransport | None:
    """Dependency: transport for catalog calls (None = real network)."""
    return None


def get_review_service(
    store: Annotated[JsonRecordStore, Depends(get_record_store)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
    accounts: Annotated[AccountService, Depends(get_account_service)],
) -> ReviewService:
    return ReviewService(store, tokens, accounts, table=settings.REVIEWS_TABLE)


CatalogTransport = Annotated[
    httpx.AsyncBaseTransport | None, Depends(get_catalog_transport)
]
AppSettings = Annotated[Settings, Depends(get_settings)]


@router.get("/search", response_model=list[BookSummary])
async def search_books(
    app_settings: AppSettings,
    transport: CatalogTransport,
    q: Annotated[str | None, Query(description="Free-text query")] = None,
) -> list[BookSummary]:
    """Search the catalog; without `q` the configured default query is used."""
    query = (q or "").strip() or app_settings.CATALOG_DEFAULT_QUERY
    return await catalog.search_books(query, app_settings, transport)


@router.get("/isbn/{isbn}", response_model=BookDetails)
async def get_book_by_isbn(
    isbn: str, app_settings: AppSettings, transport: CatalogTransport
) -> BookDetails:
    return await catalog.get_book_by_isbn(isbn, app_settings, transport)


@router.get("/author/{author}", response_model=list[AuthorBook])
async def search_by_author(
    author: str, app_settings: AppSettings, transport: CatalogTransport
) -> list[AuthorBook]:
    return await catalog.search_by_author(author, app_settings, transport)


@router.get("/title/{title}", response_model=list[TitleBook])
async def search_by_title(
    title: str, app_settings: AppSettings, transport: CatalogTransport
) -> list[TitleBook]:
    return await catalog.search_by_title(title, app_settings, transport)


@router.get("/{book_id}/reviews", response_model=BookReviewsResponse)
async def list_book_reviews(
    book_id: str,
    app_settings: AppSettings,
    transport: CatalogTransport,
    reviews: Annotated[ReviewService, Depends(get_review_service)],
) -> BookReviewsResponse:
    """Work details from the catalog plus the reviews stored for it."""
    book = await catalog.get_work(book_id, app_settings, transport)
    stored = await run_in_threadpool(reviews.list_for_book, book_id)
    return BookReviewsResponse(book=book, reviews=stored)


@router.put("/{book_id}/reviews", response_model=Review)
def upsert_review(
    book_id: str,
    body: ReviewRequest,
    token: Annotated[str | None, Depends(get_bearer_token)],
    reviews: Annotated[ReviewService, Depends(get_review_service)],
) -> Review:
    """Add the caller's review of this book, or replace the existing one."""
    return reviews.upsert(book_id, token, body.rating, body.comment, body.book_title)


@router.delete("/{book_id}/reviews", response_model=ReviewDeleteResponse)
def delete_own_review(
    book_id: str,
    token: Annotated[str | None, Depends(get_bearer_token)],
    reviews: Annotated[ReviewService, Depends(get_review_service)],
) -> ReviewDeleteResponse:
    """Delete the caller's review of this book."""
    return ReviewDeleteResponse(review=reviews.delete_by_owner(book_id, token))


@router.delete("/{book_id}/reviews/{review_id}", response_model=ReviewDeleteResponse)
def delete_review(
    book_id: str,
    review_id: str,
    token: Annotated[str | None, Depends(get_bearer_token)],
    reviews: Annotated[ReviewService, Depends(get_review_service)],
) -> ReviewDeleteResponse:
    """Delete a review by id; only its author may do so."""
    return ReviewDeleteResponse(review=reviews.delete_by_id(book_id, review_id, token))
