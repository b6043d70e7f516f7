"""Page/limit arithmetic shared by the listing services."""

import math
from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass
class Page(Generic[T]):
    """One page of results plus totals. ``pages`` is ceil(total / limit)."""

    items: list[T] = field(default_factory=list)
    page: int = 1
    pages: int = 0
    total: int = 0


def page_count(total: int, limit: int) -> int:
    return math.ceil(total / limit) if limit > 0 else 0


def offset_for(page: int, limit: int) -> int:
    return (max(page, 1) - 1) * limit


def make_page(items: list[T], total: int, page: int, limit: int) -> Page[T]:
    return Page(items=items, page=page, pages=page_count(total, limit), total=total)
