"""
Sort strategies for product listings.

Each ``SortKey`` maps to a key function and a direction. Python's sort
is stable in both directions, so products comparing equal keep the
order they had on input.
"""

from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Optional, Tuple, Union

from .schemas import Product, SortKey, SortOption

SortStrategy = Tuple[Callable[[Product], float], bool]


def _newness(p: Product) -> float:
    return 1.0 if p.is_new else 0.0


SORT_STRATEGIES: Dict[SortKey, SortStrategy] = {
    SortKey.FEATURED: (_newness, True),
    SortKey.PRICE_LOW: (lambda p: p.price, False),
    SortKey.PRICE_HIGH: (lambda p: p.price, True),
    SortKey.NEWEST: (_newness, True),
    SortKey.POPULAR: (lambda p: float(p.reviews or 0), True),
    SortKey.RATING: (lambda p: p.rating or 0.0, True),
}

SORT_LABELS: Dict[SortKey, str] = {
    SortKey.FEATURED: "Featured",
    SortKey.PRICE_LOW: "Price: Low to High",
    SortKey.PRICE_HIGH: "Price: High to Low",
    SortKey.NEWEST: "Newest",
    SortKey.POPULAR: "Most Popular",
    SortKey.RATING: "Highest Rated",
}

SORT_OPTIONS: List[SortOption] = [
    SortOption(value=key, label=SORT_LABELS[key]) for key in SortKey
]


def parse_sort_key(value: Union[str, SortKey]) -> Optional[SortKey]:
    if isinstance(value, SortKey):
        return value
    try:
        return SortKey(value)
    except ValueError:
        return None


def sort_products(products: Iterable[Product], key: Union[str, SortKey]) -> List[Product]:
    """Return a new list of ``products`` ordered by the strategy for ``key``.

    An unknown key leaves the order untouched.
    """
    items = list(products)
    sort_key = parse_sort_key(key)
    if sort_key is None:
        return items
    key_fn, descending = SORT_STRATEGIES[sort_key]
    items.sort(key=key_fn, reverse=descending)
    return items
