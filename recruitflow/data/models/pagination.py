"""
Pagination schema shared by every listing operation.

Pages are 1-indexed. ``total`` is always the filtered count before any
windowing, so it is the same whichever page is requested.
"""

import math
from typing import Generic, TypeVar

from pydantic import BaseModel, Field, computed_field

from recruitflow.utils.exceptions import ValidationError

T = TypeVar("T")


def validate_page_params(page: int, page_size: int, max_page_size: int) -> None:
    """Reject page windows that cannot be served."""
    if page < 1:
        raise ValidationError(f"page must be >= 1, got {page}", field="page")
    if page_size < 1:
        raise ValidationError(f"page_size must be >= 1, got {page_size}", field="page_size")
    if page_size > max_page_size:
        raise ValidationError(
            f"page_size must be <= {max_page_size}, got {page_size}", field="page_size"
        )


def page_offset(page: int, page_size: int) -> int:
    """Number of records that precede ``page``."""
    return (page - 1) * page_size


def count_pages(total: int, page_size: int) -> int:
    """``ceil(total / page_size)``; zero when there is nothing to show."""
    return math.ceil(total / page_size) if total > 0 else 0


class Page(BaseModel, Generic[T]):
    """One window of a filtered, ordered result set."""

    items: list[T] = Field(default_factory=list)
    total: int = 0
    page: int = 1
    page_size: int = 10
    total_pages: int = 0

    @computed_field
    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @computed_field
    @property
    def has_prev(self) -> bool:
        return self.page > 1

    @classmethod
    def build(cls, items: list[T], total: int, page: int, page_size: int) -> "Page[T]":
        return cls(
            items=items,
            total=total,
            page=page,
            page_size=page_size,
            total_pages=count_pages(total, page_size),
        )
