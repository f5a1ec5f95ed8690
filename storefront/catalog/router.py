"""
Route definitions for the catalogue API.

Endpoints under /api/catalog:
- GET    /products                 : search + filter + sort + paginate
- GET    /products/{product_id}    : get one product
- GET    /search                   : ranked search results with highlights
- GET    /suggestions              : search box auto-complete
- GET    /popular-searches         : fixed list of popular queries
- GET    /filters                  : facet values present in the catalogue
- GET    /sort-options             : available sort keys and labels
- GET    /admin/products           : list the admin overlay
- POST   /admin/products           : add a product to the overlay
- PUT    /admin/products/{id}      : replace an overlay product
- DELETE /admin/products/{id}      : remove an overlay product
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from .. import storage
from ..models import CreateProductRequest
from ..storage import OverlayRepository
from .filters import get_filter_options
from .pagination import DEFAULT_PAGE_SIZE
from .pipeline import derive
from .schemas import (
    DEFAULT_PRICE_RANGE,
    FilterOptions,
    PageResult,
    Product,
    ProductFilter,
    SearchResult,
    SortKey,
    SortOption,
)
from .search import popular_searches, search, suggest
from .sorting import SORT_OPTIONS
from .store import find_product, get_all_products

router = APIRouter(prefix="/api/catalog", tags=["catalog"])


def get_repository() -> OverlayRepository:
    """Overlay repository used by the routes; overridden in tests."""
    return storage.default_repository()


@router.get("/products", response_model=PageResult)
def list_products(
    q: Optional[str] = Query(default=None, description="Search text"),
    category: List[str] = Query(default=[], description="Filter by category"),
    subcategory: List[str] = Query(default=[], description="Filter by subcategory"),
    occasion: List[str] = Query(default=[], description="Filter by occasion"),
    fabric: List[str] = Query(default=[], description="Filter by fabric"),
    size: List[str] = Query(default=[], description="Filter by size"),
    color: List[str] = Query(default=[], description="Filter by colour"),
    min_price: float = Query(default=DEFAULT_PRICE_RANGE[0], ge=0),
    max_price: float = Query(default=DEFAULT_PRICE_RANGE[1], ge=0),
    in_stock: Optional[bool] = Query(default=None),
    is_new: Optional[bool] = Query(default=None),
    has_discount: Optional[bool] = Query(default=None),
    sort: SortKey = Query(default=SortKey.FEATURED, description="Sort order"),
    page: int = Query(default=1, ge=1, description="Current page (1-indexed)"),
    page_size: int = Query(default=DEFAULT_PAGE_SIZE, ge=1, le=200, description="Page size"),
    repository: OverlayRepository = Depends(get_repository),
) -> PageResult:
    """
    Returns one page of the catalogue.

    The snapshot (admin overlay + static catalogue) is rebuilt for each
    request, then searched, filtered, sorted and paginated. A page past
    the end returns an empty item list with the real totals.
    """
    criteria = ProductFilter(
        categories=category,
        subcategories=subcategory,
        occasions=occasion,
        fabrics=fabric,
        sizes=size,
        colors=color,
        price_range=(min_price, max_price),
        in_stock=in_stock,
        is_new=is_new,
        has_discount=has_discount,
    )
    return derive(
        get_all_products(repository),
        query=q,
        filters=criteria,
        sort_key=sort,
        page=page,
        page_size=page_size,
    )


@router.get("/products/{product_id}", response_model=Product)
def get_product(product_id: int, repository: OverlayRepository = Depends(get_repository)) -> Product:
    product = find_product(product_id, repository)
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


@router.get("/search", response_model=List[SearchResult])
def search_products(
    q: str = Query(default="", description="Search text"),
    repository: OverlayRepository = Depends(get_repository),
) -> List[SearchResult]:
    return search(get_all_products(repository), q)


@router.get("/suggestions", response_model=List[str])
def list_suggestions(
    q: str = Query(default="", description="Partial search text"),
    limit: int = Query(default=5, ge=1, le=20),
    repository: OverlayRepository = Depends(get_repository),
) -> List[str]:
    return suggest(get_all_products(repository), q, limit)


@router.get("/popular-searches", response_model=List[str])
def list_popular_searches() -> List[str]:
    return popular_searches()


@router.get("/filters", response_model=FilterOptions)
def list_filter_options(repository: OverlayRepository = Depends(get_repository)) -> FilterOptions:
    return get_filter_options(get_all_products(repository))


@router.get("/sort-options", response_model=List[SortOption])
def list_sort_options() -> List[SortOption]:
    return SORT_OPTIONS


# ---------------------------------------------------------------------------
# Admin overlay
#
# Products created here are stored in the overlay repository and appear
# in front of the static catalogue on the next read. Every write
# replaces the whole overlay list.

@router.get("/admin/products", response_model=List[Product])
def list_admin_products(repository: OverlayRepository = Depends(get_repository)) -> List[Product]:
    return storage.list_overlay(repository)


@router.post("/admin/products", response_model=Product, status_code=201)
def create_admin_product(
    req: CreateProductRequest,
    repository: OverlayRepository = Depends(get_repository),
) -> Product:
    try:
        return storage.add_product(req, repository)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.put("/admin/products/{product_id}", response_model=Product)
def update_admin_product(
    product_id: int,
    req: CreateProductRequest,
    repository: OverlayRepository = Depends(get_repository),
) -> Product:
    try:
        return storage.update_product(product_id, req, repository)
    except storage.ProductNotFoundError:
        raise HTTPException(status_code=404, detail="Product not found in overlay")


@router.delete("/admin/products/{product_id}")
def delete_admin_product(product_id: int, repository: OverlayRepository = Depends(get_repository)):
    try:
        storage.remove_product(product_id, repository)
    except storage.ProductNotFoundError:
        raise HTTPException(status_code=404, detail="Product not found in overlay")
    return {"status": "ok"}
