"""Shared request parsing and response shapes for use cases."""

from typing import Any, Generic, TypeVar
from uuid import UUID

from pydantic import BaseModel

from commentary.domain.error import ValidationError
from commentary.domain.model import Page

T = TypeVar("T")


class PageResponse(BaseModel, Generic[T]):
    """Paginated listing response."""

    items: list[T]
    total: int
    page: int
    limit: int
    total_pages: int
    has_next: bool
    has_prev: bool


def page_fields(page: Page) -> dict[str, Any]:
    """Pagination metadata of a domain page, without its items."""
    return page.model_dump(exclude={"items"})


def parse_id(value: str, name: str) -> UUID:
    """Parse a UUID string from a request.

    Raises:
        ValidationError: If the value is not a UUID
    """
    try:
        return UUID(value)
    except ValueError:
        raise ValidationError(f"Invalid {name} ID: {value}")
