"""Facet filtering for the shop sidebar."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from .schemas import FilterOptions, Product, ProductFilter


def _any_in(values: Optional[Sequence[str]], allowed: Sequence[str]) -> bool:
    # A product without the list never matches a non-empty selection.
    return any(v in allowed for v in (values or []))


def matches_filter(product: Product, criteria: ProductFilter) -> bool:
    """Return True when ``product`` passes every facet of ``criteria``."""
    if criteria.categories and product.category not in criteria.categories:
        return False
    if criteria.subcategories and product.subcategory not in criteria.subcategories:
        return False
    if criteria.occasions and not _any_in(product.occasion, criteria.occasions):
        return False
    if criteria.fabrics and product.fabric not in criteria.fabrics:
        return False

    min_price, max_price = criteria.price_range
    if product.price < min_price or product.price > max_price:
        return False

    if criteria.sizes and not _any_in(product.sizes, criteria.sizes):
        return False
    if criteria.colors and not _any_in(product.colors, criteria.colors):
        return False

    # Tri-state flags: None means "don't care"; an absent product flag
    # never equals an explicit True/False.
    if criteria.in_stock is not None and product.in_stock != criteria.in_stock:
        return False
    if criteria.is_new is not None and product.is_new != criteria.is_new:
        return False
    if criteria.has_discount is not None:
        has_discount = product.discount is not None and product.discount > 0
        if has_discount != criteria.has_discount:
            return False
    return True


def filter_products(products: Iterable[Product], criteria: Optional[ProductFilter]) -> List[Product]:
    """Keep the products matching ``criteria``, preserving their order.

    ``None`` criteria behave like a default ``ProductFilter`` (only the
    default price range applies).
    """
    criteria = criteria if criteria is not None else ProductFilter()
    return [p for p in products if matches_filter(p, criteria)]


def get_filter_options(products: Iterable[Product]) -> FilterOptions:
    """Collect the distinct facet values present in ``products``, sorted."""
    categories = set()
    subcategories = set()
    occasions = set()
    fabrics = set()
    sizes = set()
    colors = set()
    for p in products:
        categories.add(p.category)
        subcategories.add(p.subcategory)
        occasions.update(p.occasion or [])
        if p.fabric:
            fabrics.add(p.fabric)
        sizes.update(p.sizes or [])
        colors.update(p.colors or [])
    return FilterOptions(
        categories=sorted(categories),
        subcategories=sorted(subcategories),
        occasions=sorted(occasions),
        fabrics=sorted(fabrics),
        sizes=sorted(sizes),
        colors=sorted(colors),
    )
