from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Generic, Sequence, TypeVar

from ..core.exceptions import ValidationError

T = TypeVar("T")


def total_pages(count: int, page_size: int) -> int:
    """Number of pages; never below 1 so an empty table still reads "page 1 of 1"."""
    if page_size <= 0:
        raise ValidationError("Page size must be positive")
    return max(1, math.ceil(count / page_size))


@dataclass(frozen=True)
class Page(Generic[T]):
    items: list[T]
    page_number: int
    page_size: int
    total_items: int
    total_pages: int

    @property
    def has_prev(self) -> bool:
        return self.page_number > 1

    @property
    def has_next(self) -> bool:
        return self.page_number < self.total_pages

    @property
    def info(self) -> str:
        return f"Page {self.page_number} of {self.total_pages}"


def paginate(records: Sequence[T], page_size: int, page_number: int) -> Page[T]:
    """1-based page slice; a page past the end is empty rather than an error."""
    if page_number < 1:
        raise ValidationError("Page number starts at 1")
    pages = total_pages(len(records), page_size)
    start = page_size * (page_number - 1)
    return Page(
        items=list(records[start : start + page_size]),
        page_number=page_number,
        page_size=page_size,
        total_items=len(records),
        total_pages=pages,
    )
