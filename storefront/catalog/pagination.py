"""
Pagination of product listings.

``paginate()`` is the stateless slice used by the API. ``Paginator``
keeps a current page for interactive callers: navigation requests that
fall outside ``[1, total_pages]`` are ignored rather than clamped.
"""

from __future__ import annotations

import math
from typing import List, Sequence

from .schemas import PageResult, Product

DEFAULT_PAGE_SIZE = 12


def total_pages_for(total_items: int, page_size: int) -> int:
    return math.ceil(total_items / page_size)


def paginate(items: Sequence[Product], page: int = 1, page_size: int = DEFAULT_PAGE_SIZE) -> PageResult:
    """Slice ``items`` to the requested 1-indexed page.

    Parameters
    ----------
    items : Sequence[Product]
        The ordered products to paginate.
    page : int
        1-indexed page number; must be at least 1. A page past the end
        yields no items.
    page_size : int
        Number of products per page; must be at least 1.

    Returns
    -------
    PageResult
        The page items and display metadata. ``start_index`` and
        ``end_index`` are 1-based and inclusive, both 0 when the page
        holds no items.
    """
    if page < 1:
        raise ValueError(f"page must be at least 1, got {page}")
    if page_size < 1:
        raise ValueError(f"page_size must be at least 1, got {page_size}")
    total = len(items)
    total_pages = total_pages_for(total, page_size)

    start = (page - 1) * page_size
    page_items: List[Product] = list(items[start:start + page_size])

    return PageResult(
        items=page_items,
        current_page=page,
        page_size=page_size,
        total_items=total,
        total_pages=total_pages,
        start_index=start + 1 if page_items else 0,
        end_index=start + len(page_items) if page_items else 0,
        can_go_next=page < total_pages,
        can_go_prev=page > 1,
    )


class Paginator:
    """Current-page state over an ordered product sequence."""

    def __init__(
        self,
        items: Sequence[Product],
        page_size: int = DEFAULT_PAGE_SIZE,
        initial_page: int = 1,
    ) -> None:
        if page_size < 1:
            raise ValueError(f"page_size must be at least 1, got {page_size}")
        if initial_page < 1:
            raise ValueError(f"initial_page must be at least 1, got {initial_page}")
        self._items = list(items)
        self.page_size = page_size
        self.current_page = initial_page

    @property
    def total_items(self) -> int:
        return len(self._items)

    @property
    def total_pages(self) -> int:
        return total_pages_for(self.total_items, self.page_size)

    @property
    def can_go_next(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def can_go_prev(self) -> bool:
        return self.current_page > 1

    @property
    def state(self) -> PageResult:
        return paginate(self._items, self.current_page, self.page_size)

    def set_items(self, items: Sequence[Product]) -> None:
        self._items = list(items)

    def go_to_page(self, page: int) -> None:
        if 1 <= page <= self.total_pages:
            self.current_page = page

    def next_page(self) -> None:
        if self.current_page < self.total_pages:
            self.current_page += 1

    def prev_page(self) -> None:
        if self.current_page > 1:
            self.current_page -= 1
