"""Paging over Protean queries: full scans and one-page listings.

Queries carry an implicit result limit, so reading "everything" means paging.
Full scans are ordered by ``id`` because offsets over a non-unique key can
skip or repeat rows when values tie.
"""

import math
from dataclasses import dataclass, field

PAGE_SIZE = 100
DEFAULT_LIMIT = 10
MAX_LIMIT = 100


@dataclass(frozen=True)
class Page:
    items: list = field(default_factory=list)
    page: int = 1
    limit: int = DEFAULT_LIMIT
    total: int = 0

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.total else 0


def clamp(page, limit) -> tuple[int, int]:
    """Page at least 1; limit between 1 and MAX_LIMIT."""
    page = max(int(page or 1), 1)
    limit = min(max(int(limit or DEFAULT_LIMIT), 1), MAX_LIMIT)
    return page, limit


def fetch_page(query, page, limit) -> tuple[list, int]:
    """Items of one already-clamped page and the total match count."""
    result = query.offset((page - 1) * limit).limit(limit).all()
    return result.items, result.total


def fetch_all(query, page_size: int = PAGE_SIZE) -> list:
    query = query.order_by("id")

    items = []
    while True:
        page = query.offset(len(items)).limit(page_size).all()
        items.extend(page.items)
        if not page.items or len(items) >= page.total:
            return items
