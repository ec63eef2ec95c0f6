"""Pydantic schemas for reshaped Open Library catalog responses.

Missing upstream fields are filled with "Unknown" (or a similar placeholder),
so year and page counts may be either a number or that placeholder string.
"""

from pydantic import BaseModel, Field


class BookSummary(BaseModel):
    """Free-text search hit."""

    title: str
    author: str = "Unknown"
    first_publish_year: int | str = "Unknown"
    isbn: str = "Unknown"


class AuthorBook(BaseModel):
    """Search hit for an author query."""

    title: str
    first_publish_year: int | str = "Unknown"
    isbn: str = "Unknown"
    language: str = "Unknown"
    subject: list[str] = Field(default_factory=list, description="First three subjects.")


class TitleBook(BaseModel):
    """Search hit for a title query."""

    title: str
    author: str = "Unknown"
    first_publish_year: int | str = "Unknown"
    isbn: str = "Unknown"
    publisher: str = "Unknown"


class BookDetails(BaseModel):
    """Edition details looked up by ISBN."""

    title: str
    authors: str = "Unknown"
    publisher: str = "Unknown"
    publish_date: str = "Unknown"
    cover: str = "No cover available"
    number_of_pages: int | str = "Unknown"
    subjects: list[str] = Field(default_factory=list, description="First five subjects.")


class WorkInfo(BaseModel):
    """Basic information about a catalog work (the bookId used by reviews)."""

    title: str
    subjects: list[str] = Field(default_factory=list)
    description: str = "No description available"
