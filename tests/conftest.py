import sys
from pathlib import Path
from typing import List

import pytest

# Add project root to path
root = Path(__file__).resolve().parents[1]
project_root = str(root)
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from storefront.catalog.schemas import Product  # noqa: E402


def make_product(**overrides) -> Product:
    data = {
        "id": 100,
        "name": "Plain Product",
        "price": 1000,
        "category": "Sarees",
        "subcategory": "Ethnic Wear",
    }
    data.update(overrides)
    return Product(**data)


@pytest.fixture
def catalog() -> List[Product]:
    """Five products: two sarees, two lehengas and one kurti."""
    return [
        make_product(
            id=1,
            name="Silk Saree with Zari Work",
            price=4999,
            category="Sarees",
            subcategory="Ethnic Wear",
            description="Exquisite saree with zari work",
            fabric="Silk",
            colors=["Red", "Gold"],
            sizes=["Free Size"],
            occasion=["Wedding"],
            is_new=True,
            in_stock=True,
            rating=4.5,
            reviews=128,
            sku="JB-SAR-001",
        ),
        make_product(
            id=2,
            name="Banarasi Saree",
            price=6999,
            category="Sarees",
            subcategory="Ethnic Wear",
            description="Authentic Banarasi weave with traditional motifs",
            fabric="Silk",
            colors=["Green", "Pink"],
            sizes=["Free Size"],
            occasion=["Festival"],
            discount=15,
            in_stock=True,
            rating=4.8,
            reviews=95,
            sku="JB-SAR-002",
        ),
        make_product(
            id=3,
            name="Bridal Lehenga Choli",
            price=15999,
            category="Lehengas",
            subcategory="Bridal Wear",
            description="Heavy embroidery on pure silk",
            fabric="Velvet",
            colors=["Red", "Maroon"],
            sizes=["S", "M", "L"],
            occasion=["Wedding", "Formal"],
            is_new=True,
            in_stock=True,
            rating=4.9,
            reviews=67,
            sku="JB-LEH-001",
        ),
        make_product(
            id=4,
            name="Party Wear Lehenga",
            price=8999,
            category="Lehengas",
            subcategory="Ethnic Wear",
            description="Elegant party wear lehenga",
            fabric="Georgette",
            colors=["Blue", "Purple"],
            sizes=["M", "L"],
            occasion=["Party"],
            is_new=False,
            in_stock=True,
            rating=4.3,
            reviews=89,
            sku="JB-LEH-002",
        ),
        make_product(
            id=5,
            name="Cotton Kurti",
            price=1499,
            category="Kurtis & Kurtas",
            subcategory="Ethnic Wear",
            fabric="Cotton",
            sizes=["S", "M"],
            discount=20,
            in_stock=False,
            sku="JB-KUR-001",
        ),
    ]
