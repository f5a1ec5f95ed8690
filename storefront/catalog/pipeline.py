"""
Query pipeline for the shop page.

``derive()`` composes the catalogue stages in a fixed order:

    search -> filter -> sort -> paginate

and is recomputed in full for every request; catalogue sizes are small
enough that no incremental update is worth it.

``SearchSession`` holds the interactive state of one shopper (query text,
facet selection, sort choice, current page) and exposes the derived views
as read-only properties. The "searching" flag mimics the short delay the
shop page shows after each query. Each ``perform_search`` schedules its
own flag reset and never cancels an earlier one, so with rapid queries an
older timer can clear the flag while a newer query is still "settling".
The flag is cosmetic; results are always derived from the latest query.
"""

from __future__ import annotations

import asyncio
import logging
from typing import List, Optional, Sequence, Union

from .filters import filter_products
from .pagination import DEFAULT_PAGE_SIZE, Paginator, paginate
from .schemas import PageResult, Product, ProductFilter, SearchResult, SortKey
from .search import search, suggest
from .sorting import sort_products

logger = logging.getLogger(__name__)

SEARCH_DELAY_SECONDS = 0.3
SUGGESTION_LIMIT = 5


def select_products(
    catalog: Sequence[Product],
    query: Optional[str] = "",
    filters: Optional[ProductFilter] = None,
    sort_key: Union[str, SortKey] = SortKey.FEATURED,
) -> List[Product]:
    """Search, filter and sort ``catalog`` without paginating."""
    results = search(catalog, query)
    products = [r.product for r in results]
    filtered = filter_products(products, filters)
    return sort_products(filtered, sort_key)


def derive(
    catalog: Sequence[Product],
    query: Optional[str] = "",
    filters: Optional[ProductFilter] = None,
    sort_key: Union[str, SortKey] = SortKey.FEATURED,
    page: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> PageResult:
    """Compute the page of products to render.

    Parameters
    ----------
    catalog : Sequence[Product]
        Catalogue snapshot, usually from ``store.get_all_products()``.
    query : Optional[str]
        Search text; blank means no search.
    filters : Optional[ProductFilter]
        Facet selection; ``None`` applies the default filter.
    sort_key : Union[str, SortKey]
        One of the ``SortKey`` values. Unknown keys keep the searched
        order.
    page : int
        1-indexed page number.
    page_size : int
        Products per page.

    Returns
    -------
    PageResult
        The products of the requested page with pagination metadata.
        Identical arguments always produce an identical result.
    """
    ordered = select_products(catalog, query, filters, sort_key)
    return paginate(ordered, page, page_size)


class SearchSession:
    """Interactive search state for one shopper.

    Setters are synchronous. Derived properties are recomputed from the
    current state on every access. Changing the query, filters or sort
    sends the shopper back to the first page. The state itself is only
    changed through the action methods; the filters are copied on the
    way in so later edits to the caller's object have no effect.
    """

    def __init__(
        self,
        catalog: Sequence[Product],
        page_size: int = DEFAULT_PAGE_SIZE,
        search_delay: float = SEARCH_DELAY_SECONDS,
    ) -> None:
        self._catalog: List[Product] = list(catalog)
        self.search_delay = search_delay
        self._query = ""
        self._filters = ProductFilter()
        self._sort_key: Union[str, SortKey] = SortKey.FEATURED
        self.is_searching = False
        self._paginator = Paginator(self.filtered_products, page_size=page_size)

    # -- actions ---------------------------------------------------------

    def set_query(self, query: str) -> None:
        self._query = query
        self._refresh()

    def perform_search(self, query: str) -> None:
        """Record ``query`` and raise the searching flag for a short while.

        The reset is scheduled on the running asyncio loop. Without a
        running loop there is nothing to wait on and the flag is cleared
        straight away.
        """
        self.is_searching = True
        self.set_query(query)
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self._settle()
            return
        loop.call_later(self.search_delay, self._settle)

    def clear_search(self) -> None:
        self._query = ""
        self.is_searching = False
        self._refresh()

    def set_filters(self, filters: ProductFilter) -> None:
        self._filters = filters.model_copy(deep=True)
        self._refresh()

    def clear_filters(self) -> None:
        self.set_filters(ProductFilter())

    def set_sort(self, sort_key: Union[str, SortKey]) -> None:
        self._sort_key = sort_key
        self._refresh()

    def go_to_page(self, page: int) -> None:
        self._paginator.go_to_page(page)

    def next_page(self) -> None:
        self._paginator.next_page()

    def prev_page(self) -> None:
        self._paginator.prev_page()

    # -- state -----------------------------------------------------------

    @property
    def catalog(self) -> List[Product]:
        return list(self._catalog)

    @property
    def query(self) -> str:
        return self._query

    @property
    def filters(self) -> ProductFilter:
        return self._filters.model_copy(deep=True)

    @property
    def sort_key(self) -> Union[str, SortKey]:
        return self._sort_key

    @property
    def current_page(self) -> int:
        return self._paginator.current_page

    # -- derived views ---------------------------------------------------

    @property
    def suggestions(self) -> List[str]:
        return suggest(self._catalog, self._query, SUGGESTION_LIMIT)

    @property
    def search_results(self) -> List[SearchResult]:
        return search(self._catalog, self._query)

    @property
    def filtered_products(self) -> List[Product]:
        return select_products(self._catalog, self._query, self._filters, self._sort_key)

    @property
    def page_result(self) -> PageResult:
        return paginate(self.filtered_products, self.current_page, self._paginator.page_size)

    # -- internals -------------------------------------------------------

    def _settle(self) -> None:
        self.is_searching = False

    def _refresh(self) -> None:
        self._paginator.set_items(self.filtered_products)
        self._paginator.current_page = 1
