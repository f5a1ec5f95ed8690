"""
Catalogue source for the storefront.

The static collection is read from ``data/products.json`` at import
time and expanded with colour variations so that listing pages have
enough items to paginate. Products created from the admin screens are
read through an ``OverlayRepository`` on every call to
``get_all_products()`` and placed in front of the static collection.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional

from ..storage import (
    OverlayRepository,
    ProductDecodeError,
    decode_product,
    default_repository,
)
from .schemas import Product

logger = logging.getLogger(__name__)

DATA_FILE = Path(__file__).resolve().parents[1] / "data" / "products.json"

VARIATION_COLORS = [
    "Red", "Blue", "Green", "Pink", "Purple", "Gold", "Maroon", "Navy", "Coral", "Teal",
]
VARIATION_SIZES = ["XS", "S", "M", "L", "XL", "XXL", "Free Size"]


def _load_base_products() -> List[Product]:
    """Load the hand-written products from ``products.json``.

    Returns
    -------
    List[Product]
        The decoded products in file order. An unreadable file yields an
        empty list; individual bad records are skipped.
    """
    products: List[Product] = []
    try:
        with DATA_FILE.open("r", encoding="utf-8") as f:
            raw = json.load(f)
    except (OSError, ValueError) as exc:
        logger.error("Could not read static catalogue %s: %s", DATA_FILE, exc)
        return products
    for position, entry in enumerate(raw):
        try:
            products.append(decode_product(entry))
        except ProductDecodeError as exc:
            logger.warning("Skipping static product #%d: %s", position, exc)
    return products


def generate_variations(base: Product, count: int) -> List[Product]:
    """Derive ``count`` colour variations of a base product.

    Variation ``n`` (counting from 1) gets the id ``base.id * 100 + n``,
    a colour suffix on the name, a price raised by 500 per step and a
    rotated pair of colours. The first three variations are flagged as
    new and every fourth one carries a discount. All values are computed
    from the position alone, so the catalogue is identical on every run.
    """
    variations: List[Product] = []
    for i in range(count):
        color = VARIATION_COLORS[i % len(VARIATION_COLORS)]
        next_color = VARIATION_COLORS[(i + 1) % len(VARIATION_COLORS)]
        rating = (base.rating or 4.0) + ((i % 5) - 2) * 0.1
        variations.append(
            base.model_copy(
                deep=True,
                update={
                    "id": base.id * 100 + i + 1,
                    "name": f"{base.name} - {color}",
                    "price": base.price + i * 500,
                    "colors": [color, next_color],
                    "sizes": list(base.sizes or VARIATION_SIZES[: 3 + (i % 4)]),
                    "rating": round(max(3.5, min(5.0, rating)), 1),
                    "reviews": (base.reviews or 50) + (i * 37) % 100,
                    "is_new": i < 3,
                    "discount": 5 + (i * 7) % 20 if i % 4 == 0 else None,
                }
            )
        )
    return variations


def expand_catalog(base_products: List[Product]) -> List[Product]:
    """Each base product followed by its 4 to 6 variations."""
    expanded: List[Product] = []
    for index, product in enumerate(base_products):
        expanded.append(product)
        expanded.extend(generate_variations(product, 4 + (index % 3)))
    return expanded


# In-memory static collection, built once per process
BASE_PRODUCTS: List[Product] = _load_base_products()
STATIC_PRODUCTS: List[Product] = expand_catalog(BASE_PRODUCTS)


def get_all_products(repository: Optional[OverlayRepository] = None) -> List[Product]:
    """Return the current catalogue snapshot.

    Overlay products come first (most recently added first), followed by
    the static collection. Ids are not de-duplicated: an overlay product
    reusing a static id appears next to the static one, ahead of it.
    Failing to load the overlay never propagates; the snapshot then
    contains the static collection only.
    """
    repo = repository if repository is not None else default_repository()
    try:
        overlay = list(repo.load())
    except Exception as exc:
        logger.error("Error loading admin products: %s", exc)
        overlay = []
    return overlay + STATIC_PRODUCTS


def find_product(product_id: int, repository: Optional[OverlayRepository] = None) -> Optional[Product]:
    for product in get_all_products(repository):
        if product.id == product_id:
            return product
    return None
