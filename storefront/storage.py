# storefront/storage.py
"""
Persistence of the admin product overlay.

Products added from the admin screens are not part of the static
catalogue; they live in a separate list that is layered in front of it.
The list is stored whole: every write replaces the previous content.
Storage is hidden behind the small ``OverlayRepository`` interface so
the catalogue can be backed by a JSON file in production and by a plain
list in tests.
"""

import json
import logging
import os
import re
import threading
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence

from pydantic import ValidationError
from typing_extensions import Protocol

from .catalog.schemas import Product
from .models import CreateProductRequest

logger = logging.getLogger(__name__)

# Path to the overlay data file. Can be redirected with an environment
# variable so several instances do not share one file.
OVERLAY_FILE = Path(
    os.getenv("STOREFRONT_OVERLAY_FILE")
    or Path(__file__).resolve().parents[1] / "data" / "admin_products.json"
)

# Generated admin ids start above every id used by the static catalogue.
FIRST_ADMIN_ID = 10000

_SKU_PATTERN = re.compile(r"^[A-Z0-9\-]+$")

# Lock to synchronise access to the overlay file
_overlay_lock = threading.Lock()


class ProductDecodeError(ValueError):
    """Raised when a persisted record cannot be turned into a ``Product``."""


class ProductNotFoundError(LookupError):
    """Raised when an admin operation targets an id absent from the overlay."""


def decode_product(record: Any) -> Product:
    """Map one untyped persisted record onto a ``Product``.

    Parameters
    ----------
    record : Any
        A value parsed from JSON. Only mappings are accepted.

    Returns
    -------
    Product
        The validated product. Optional fields missing from the record
        stay ``None``.

    Raises
    ------
    ProductDecodeError
        If the record is not a mapping or fails validation (missing
        required field, negative price, rating above 5, ...).
    """
    if not isinstance(record, dict):
        raise ProductDecodeError(f"expected an object, got {type(record).__name__}")
    try:
        return Product.model_validate(record)
    except ValidationError as exc:
        raise ProductDecodeError(str(exc)) from exc


def decode_overlay(raw: Any) -> List[Product]:
    """Decode a whole overlay payload, skipping records that do not fit."""
    if not isinstance(raw, list):
        logger.warning("Overlay payload is a %s, expected a list; ignoring it", type(raw).__name__)
        return []
    products: List[Product] = []
    for position, record in enumerate(raw):
        try:
            products.append(decode_product(record))
        except ProductDecodeError as exc:
            logger.warning("Skipping overlay record #%d: %s", position, exc)
    return products


def encode_product(product: Product) -> Dict[str, Any]:
    return product.model_dump(mode="json", by_alias=True, exclude_none=True)


class OverlayRepository(Protocol):
    def load(self) -> List[Product]:
        ...

    def save(self, products: Sequence[Product]) -> None:
        ...


class InMemoryOverlayRepository:
    """Overlay kept in a Python list. Used by tests and embedded callers."""

    def __init__(self, products: Optional[Iterable[Product]] = None) -> None:
        self._products: List[Product] = list(products or [])

    def load(self) -> List[Product]:
        return list(self._products)

    def save(self, products: Sequence[Product]) -> None:
        self._products = list(products)


class JsonFileOverlayRepository:
    """Overlay stored as a JSON list of camelCase product records.

    A missing file is an empty overlay. Read and parse errors propagate
    to the caller; the catalogue source decides how to recover. Records
    skipped on load are counted, and the next save warns that it
    overwrites them.
    """

    def __init__(self, path: Path = OVERLAY_FILE) -> None:
        self.path = Path(path)
        self.undecodable_records = 0

    def load(self) -> List[Product]:
        with _overlay_lock:
            if not self.path.exists():
                self.undecodable_records = 0
                return []
            with self.path.open("r", encoding="utf-8") as f:
                raw = json.load(f)
        products = decode_overlay(raw)
        self.undecodable_records = len(raw) - len(products) if isinstance(raw, list) else 0
        return products

    def save(self, products: Sequence[Product]) -> None:
        payload = [encode_product(p) for p in products]
        if self.undecodable_records:
            logger.warning(
                "Rewriting %s drops %d undecodable overlay record(s)",
                self.path,
                self.undecodable_records,
            )
        # Ensure the parent directory exists
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with _overlay_lock:
            with self.path.open("w", encoding="utf-8") as f:
                json.dump(payload, f, ensure_ascii=False, indent=2)
        self.undecodable_records = 0


def default_repository() -> JsonFileOverlayRepository:
    return JsonFileOverlayRepository(OVERLAY_FILE)


def _next_product_id(overlay: Iterable[Product]) -> int:
    return max([FIRST_ADMIN_ID] + [p.id for p in overlay]) + 1


def _generate_sku(category: str, product_id: int) -> str:
    letters = "".join(ch for ch in category.upper() if ch.isalpha())[:3] or "GEN"
    return f"JB-{letters}-{product_id:03d}"


def _build_product(req: CreateProductRequest, product_id: int) -> Product:
    data = req.model_dump(exclude_none=True, exclude={"id"})
    data["id"] = product_id
    if not (data.get("sku") or "").strip():
        data["sku"] = _generate_sku(req.category, product_id)
    elif not _SKU_PATTERN.match(data["sku"]):
        logger.warning(
            "SKU %r should contain only uppercase letters, numbers and hyphens", data["sku"]
        )
    return Product.model_validate(data)


def list_overlay(repository: OverlayRepository) -> List[Product]:
    return repository.load()


def add_product(req: CreateProductRequest, repository: OverlayRepository) -> Product:
    """Create a product and place it at the front of the overlay.

    The overlay order is "most recently added first". An explicit id may
    reuse a static catalogue id (the overlay entry then shadows it) but
    must not already exist in the overlay itself.
    """
    overlay = repository.load()
    if req.id is not None and any(p.id == req.id for p in overlay):
        raise ValueError(f"A product with id {req.id} already exists in the overlay.")
    product_id = req.id if req.id is not None else _next_product_id(overlay)

    product = _build_product(req, product_id)
    repository.save([product] + overlay)
    logger.info("Added overlay product %s (%s)", product.id, product.name)
    return product


def update_product(
    product_id: int, req: CreateProductRequest, repository: OverlayRepository
) -> Product:
    """Replace an overlay product, keeping its id and its position."""
    overlay = repository.load()
    for position, existing in enumerate(overlay):
        if existing.id == product_id:
            break
    else:
        raise ProductNotFoundError(product_id)

    product = _build_product(req, product_id)
    overlay[position] = product
    repository.save(overlay)
    logger.info("Updated overlay product %s", product_id)
    return product


def remove_product(product_id: int, repository: OverlayRepository) -> None:
    overlay = repository.load()
    remaining = [p for p in overlay if p.id != product_id]
    if len(remaining) == len(overlay):
        raise ProductNotFoundError(product_id)
    repository.save(remaining)
    logger.info("Removed overlay product %s", product_id)
