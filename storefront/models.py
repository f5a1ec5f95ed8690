# storefront/models.py
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CreateProductRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[int] = Field(
        default=None,
        description="Requested identifier. Generated when omitted.",
    )
    name: str = Field(min_length=3, max_length=200)
    price: float = Field(gt=0)
    category: str = Field(min_length=1)
    subcategory: str = Field(min_length=1)
    description: Optional[str] = None
    image: Optional[str] = None
    fabric: Optional[str] = None
    sku: Optional[str] = Field(
        default=None,
        description="Stock keeping unit. Derived from the category when omitted.",
    )
    is_new: Optional[bool] = Field(default=None, alias="isNew")
    in_stock: Optional[bool] = Field(default=True, alias="inStock")
    discount: Optional[float] = Field(default=None, ge=0, le=100)
    rating: Optional[float] = Field(default=None, ge=0, le=5)
    reviews: Optional[int] = Field(default=None, ge=0)
    colors: Optional[List[str]] = None
    sizes: Optional[List[str]] = None
    occasion: Optional[List[str]] = None
    images: Optional[List[str]] = None
    care_instructions: Optional[str] = Field(default=None, alias="careInstructions")
    origin: Optional[str] = None
