"""Open Library passthrough: search and lookup calls reshaped into small payloads."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx

from app.core.errors import CatalogError, NotFoundError
from app.schemas.catalog import AuthorBook, BookDetails, BookSummary, TitleBook, WorkInfo

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)

UNKNOWN = "Unknown"


def _first(values: Any, default: str = UNKNOWN) -> Any:
    if isinstance(values, list) and values:
        return values[0]
    return default


def _joined(values: Any) -> str:
    if isinstance(values, list) and values:
        return ", ".join(str(v) for v in values)
    return UNKNOWN


async def _get_json(
    path: str,
    params: dict[str, Any] | None,
    settings: Settings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> Any:
    """GET a catalog path and return its JSON body. No retries."""
    url = f"{settings.CATALOG_BASE_URL}/{path.lstrip('/')}"
    try:
        async with httpx.AsyncClient(
            transport=transport, timeout=settings.CATALOG_REQUEST_TIMEOUT_SEC
        ) as client:
            resp = await client.get(url, params=params)
    except httpx.TimeoutException as e:
        logger.error("Catalog request timed out", extra={"path": path})
        raise CatalogError("Catalog request timed out.") from e
    except httpx.RequestError as e:
        logger.error("Catalog unreachable: %s", e, extra={"path": path})
        raise CatalogError(f"Catalog is unreachable: {e}") from e

    if resp.status_code == 404:
        raise NotFoundError("Book not found in catalog")
    if resp.status_code >= 400:
        logger.error(
            "Catalog returned an error",
            extra={"path": path, "status_code": resp.status_code},
        )
        raise CatalogError(f"Catalog returned {resp.status_code}", resp.status_code)
    try:
        return resp.json()
    except ValueError as e:
        raise CatalogError("Catalog returned invalid JSON.", resp.status_code) from e


async def _search(
    params: dict[str, Any],
    settings: Settings,
    transport: httpx.AsyncBaseTransport | None,
) -> list[dict[str, Any]]:
    params = {**params, "limit": settings.CATALOG_SEARCH_LIMIT}
    data = await _get_json("search.json", params, settings, transport)
    docs = data.get("docs") if isinstance(data, dict) else None
    return docs if isinstance(docs, list) else []


def to_book_summary(doc: dict[str, Any]) -> BookSummary:
    return BookSummary(
        title=doc.get("title") or UNKNOWN,
        author=_joined(doc.get("author_name")),
        first_publish_year=doc.get("first_publish_year") or UNKNOWN,
        isbn=_first(doc.get("isbn")),
    )


def to_author_book(doc: dict[str, Any]) -> AuthorBook:
    subjects = doc.get("subject")
    return AuthorBook(
        title=doc.get("title") or UNKNOWN,
        first_publish_year=doc.get("first_publish_year") or UNKNOWN,
        isbn=_first(doc.get("isbn")),
        language=_first(doc.get("language")),
        subject=subjects[:3] if isinstance(subjects, list) else [],
    )


def to_title_book(doc: dict[str, Any]) -> TitleBook:
    return TitleBook(
        title=doc.get("title") or UNKNOWN,
        author=_joined(doc.get("author_name")),
        first_publish_year=doc.get("first_publish_year") or UNKNOWN,
        isbn=_first(doc.get("isbn")),
        publisher=_first(doc.get("publisher")),
    )


def to_book_details(data: dict[str, Any]) -> BookDetails:
    """Reshape an api/books `jscmd=data` entry."""
    authors = data.get("authors") or []
    publishers = data.get("publishers") or []
    cover = data.get("cover") or {}
    subjects = data.get("subjects") or []
    return BookDetails(
        title=data.get("title") or UNKNOWN,
        authors=", ".join(a.get("name", "") for a in authors) if authors else UNKNOWN,
        publisher=publishers[0].get("name", UNKNOWN) if publishers else UNKNOWN,
        publish_date=data.get("publish_date") or UNKNOWN,
        cover=cover.get("medium") or "No cover available",
        number_of_pages=data.get("number_of_pages") or UNKNOWN,
        subjects=[s.get("name", "") for s in subjects[:5]],
    )


def to_work_info(data: dict[str, Any]) -> WorkInfo:
    description = data.get("description")
    # Works store the description either as a string or as {"type", "value"}.
    if isinstance(description, dict):
        description = description.get("value")
    subjects = data.get("subjects")
    return WorkInfo(
        title=data.get("title") or UNKNOWN,
        subjects=subjects if isinstance(subjects, list) else [],
        description=description or "No description available",
    )


async def search_books(
    query: str,
    settings: Settings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[BookSummary]:
    """Free-text search."""
    docs = await _search({"q": query}, settings, transport)
    return [to_book_summary(d) for d in docs]


async def search_by_author(
    author: str,
    settings: Settings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[AuthorBook]:
    docs = await _search({"author": author}, settings, transport)
    if not docs:
        logger.info("No books found for author", extra={"author": author})
    return [to_author_book(d) for d in docs]


async def search_by_title(
    title: str,
    settings: Settings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[TitleBook]:
    docs = await _search({"title": title}, settings, transport)
    if not docs:
        logger.info("No books found with title", extra={"title": title})
    return [to_title_book(d) for d in docs]


async def get_book_by_isbn(
    isbn: str,
    settings: Settings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> BookDetails:
    """Look up one edition by ISBN. Raises NotFoundError if the catalog has none."""
    key = f"ISBN:{isbn}"
    data = await _get_json(
        "api/books",
        {"bibkeys": key, "format": "json", "jscmd": "data"},
        settings,
        transport,
    )
    book = data.get(key) if isinstance(data, dict) else None
    if not book:
        raise NotFoundError(f"No book found with ISBN: {isbn}", field="isbn")
    return to_book_details(book)


async def get_work(
    work_id: str,
    settings: Settings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> WorkInfo:
    """Fetch a work (e.g. OL27258W) by its Open Library id."""
    data = await _get_json(f"works/{work_id}.json", None, settings, transport)
    if not isinstance(data, dict):
        raise CatalogError("Catalog returned an unexpected work payload.")
    return to_work_info(data)
