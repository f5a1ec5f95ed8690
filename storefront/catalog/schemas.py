"""
Pydantic schema definitions for the catalog module.

The ``Product`` model mirrors the records of the storefront catalogue,
both the static collection shipped with the package and the products
added by an administrator. The persisted JSON form uses camelCase keys
(``isNew``, ``inStock``, ``careInstructions``) while Python code uses
snake_case attribute names; both spellings are accepted on input.

The remaining models describe the query side of the catalogue: the
facet filter submitted by the shop page, the ranked search results and
the paginated slice returned to the front-end.
"""

from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

# Price bounds used when the shop page has not narrowed the range.
DEFAULT_PRICE_RANGE: Tuple[float, float] = (0.0, 20000.0)


class Product(BaseModel):
    """A single catalogue entry.

    Only ``id``, ``name``, ``price``, ``category`` and ``subcategory``
    are required. Every other field is optional and stays ``None`` when
    the source record does not carry it, so that an absent list (for
    example ``colors``) can be told apart from an empty one. Products
    are frozen: a snapshot handed to the query engine is never modified
    in place.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    name: str
    price: float = Field(ge=0)
    category: str
    subcategory: str
    image: Optional[str] = None
    description: Optional[str] = None
    fabric: Optional[str] = None
    sku: Optional[str] = None
    is_new: Optional[bool] = Field(default=None, alias="isNew")
    in_stock: Optional[bool] = Field(default=None, alias="inStock")
    discount: Optional[float] = Field(default=None, ge=0, le=100)
    rating: Optional[float] = Field(default=None, ge=0, le=5)
    reviews: Optional[int] = Field(default=None, ge=0)
    colors: Optional[List[str]] = None
    sizes: Optional[List[str]] = None
    occasion: Optional[List[str]] = None
    images: Optional[List[str]] = None
    care_instructions: Optional[str] = Field(default=None, alias="careInstructions")
    origin: Optional[str] = None


class ProductFilter(BaseModel):
    """Facet selection coming from the filter sidebar.

    Empty lists and ``None`` flags mean "no constraint". ``price_range``
    is always applied and is inclusive at both ends.
    """

    model_config = ConfigDict(populate_by_name=True)

    categories: List[str] = Field(default_factory=list)
    subcategories: List[str] = Field(default_factory=list)
    occasions: List[str] = Field(default_factory=list)
    fabrics: List[str] = Field(default_factory=list)
    price_range: Tuple[float, float] = Field(default=DEFAULT_PRICE_RANGE, alias="priceRange")
    sizes: List[str] = Field(default_factory=list)
    colors: List[str] = Field(default_factory=list)
    in_stock: Optional[bool] = Field(default=None, alias="inStock")
    is_new: Optional[bool] = Field(default=None, alias="isNew")
    has_discount: Optional[bool] = Field(default=None, alias="hasDiscount")


class SortKey(str, Enum):
    """Sort choices offered by the shop page."""

    FEATURED = "featured"
    PRICE_LOW = "price-low"
    PRICE_HIGH = "price-high"
    NEWEST = "newest"
    POPULAR = "popular"
    RATING = "rating"


class SortOption(BaseModel):
    value: SortKey
    label: str


class HighlightSpan(BaseModel):
    """Location of one query occurrence inside a product field.

    ``start`` and ``end`` are character offsets into the original field
    value (``end`` is exclusive). For list fields such as ``colors``,
    ``index`` gives the position of the matching element.
    """

    field: str
    start: int
    end: int
    index: Optional[int] = None


class SearchResult(BaseModel):
    product: Product
    score: float
    matched_fields: List[str] = Field(default_factory=list)
    highlights: List[HighlightSpan] = Field(default_factory=list)


class PageResult(BaseModel):
    """One page of products together with its pagination metadata.

    ``start_index`` and ``end_index`` are 1-based, inclusive display
    bounds ("Showing 13-24 of 40"); both are 0 when there is nothing to
    show.
    """

    items: List[Product]
    current_page: int
    page_size: int
    total_items: int
    total_pages: int
    start_index: int
    end_index: int
    can_go_next: bool
    can_go_prev: bool


class FilterOptions(BaseModel):
    """Distinct facet values available in a product collection."""

    categories: List[str] = Field(default_factory=list)
    subcategories: List[str] = Field(default_factory=list)
    occasions: List[str] = Field(default_factory=list)
    fabrics: List[str] = Field(default_factory=list)
    sizes: List[str] = Field(default_factory=list)
    colors: List[str] = Field(default_factory=list)
