"""Paging arithmetic shared by every list endpoint."""

from dataclasses import dataclass
from typing import Any

from sqlalchemy.orm import Query

from backend.services.validation import MAX_ID

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
# Keeps the row offset inside a signed 64-bit integer for any page size.
MAX_PAGE = MAX_ID // MAX_PAGE_SIZE


@dataclass(frozen=True)
class Paging:
    page: int
    page_size: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


@dataclass
class Page:
    items: list
    total: int
    page: int
    page_size: int


def _parse_int(raw_value: Any, default: int) -> int:
    if raw_value in (None, ''):
        return default
    try:
        return int(str(raw_value).strip())
    except ValueError:
        return default


def _clamp(value: int, lower: int, upper: int) -> int:
    return min(max(value, lower), upper)


def parse_paging(page: Any = None, page_size: Any = None) -> Paging:
    """Coerce raw query values: page is clamped to [1, MAX_PAGE], page size to [1, 100]."""
    return Paging(
        page=_clamp(_parse_int(page, DEFAULT_PAGE), 1, MAX_PAGE),
        page_size=_clamp(_parse_int(page_size, DEFAULT_PAGE_SIZE), 1, MAX_PAGE_SIZE),
    )


def paginate(query: Query, paging: Paging) -> Page:
    """Run ``query`` for one page; ``total`` counts every row the query matches."""
    total = query.order_by(None).count()
    items = query.offset(paging.offset).limit(paging.page_size).all()
    return Page(items=items, total=total, page=paging.page, page_size=paging.page_size)
