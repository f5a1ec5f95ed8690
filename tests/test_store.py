from conftest import make_product
from storefront.catalog import store
from storefront.catalog.store import (
    BASE_PRODUCTS,
    STATIC_PRODUCTS,
    expand_catalog,
    find_product,
    generate_variations,
    get_all_products,
)
from storefront.storage import InMemoryOverlayRepository, JsonFileOverlayRepository


class BrokenRepository:
    def load(self):
        raise OSError("disk unavailable")

    def save(self, products):
        raise OSError("disk unavailable")


def test_static_catalogue_is_loaded_and_expanded():
    assert len(BASE_PRODUCTS) == 18
    # 18 base products, each followed by 4, 5 or 6 variations
    assert len(STATIC_PRODUCTS) == 18 + 6 * (4 + 5 + 6)
    ids = [p.id for p in STATIC_PRODUCTS]
    assert len(ids) == len(set(ids))


def test_static_catalogue_is_deterministic():
    assert expand_catalog(BASE_PRODUCTS) == STATIC_PRODUCTS


def test_variations_follow_the_base_product():
    base = make_product(id=7, name="Anarkali Suit", price=3000, rating=4.4, reviews=10)

    variations = generate_variations(base, 5)

    assert [v.id for v in variations] == [701, 702, 703, 704, 705]
    assert variations[0].name == "Anarkali Suit - Red"
    assert [v.price for v in variations] == [3000, 3500, 4000, 4500, 5000]
    assert [v.is_new for v in variations] == [True, True, True, False, False]
    assert variations[0].discount == 5
    assert variations[1].discount is None
    assert variations[4].discount == 13
    assert variations[1].colors == ["Blue", "Green"]
    assert all(3.5 <= v.rating <= 5 for v in variations)
    assert all(v.category == base.category for v in variations)


def test_variations_do_not_share_lists_with_the_base():
    base = make_product(id=8, sizes=["S", "M"], occasion=["Wedding"], images=["a.jpg"])

    variation = generate_variations(base, 1)[0]
    variation.sizes.append("XL")
    variation.occasion.append("Party")
    variation.images.append("b.jpg")

    assert base.sizes == ["S", "M"]
    assert base.occasion == ["Wedding"]
    assert base.images == ["a.jpg"]


def test_overlay_comes_first_and_shadows_static_ids():
    overlay_product = make_product(id=1, name="Admin Saree")
    repo = InMemoryOverlayRepository([overlay_product])

    products = get_all_products(repo)

    assert len(products) == len(STATIC_PRODUCTS) + 1
    assert products[0] is overlay_product
    assert [p.id for p in products].count(1) == 2
    assert find_product(1, repo).name == "Admin Saree"


def test_overlay_order_is_preserved():
    newest = make_product(id=20002, name="Newest")
    older = make_product(id=20001, name="Older")

    products = get_all_products(InMemoryOverlayRepository([newest, older]))

    assert [p.id for p in products[:2]] == [20002, 20001]


def test_failing_overlay_falls_back_to_static(caplog):
    products = get_all_products(BrokenRepository())

    assert products == STATIC_PRODUCTS
    assert "Error loading admin products" in caplog.text


def test_corrupt_overlay_file_falls_back_to_static(tmp_path):
    path = tmp_path / "admin_products.json"
    path.write_text("{not json", encoding="utf-8")

    assert get_all_products(JsonFileOverlayRepository(path)) == STATIC_PRODUCTS


def test_snapshot_is_a_fresh_list():
    repo = InMemoryOverlayRepository()
    first = get_all_products(repo)
    first.clear()

    assert len(get_all_products(repo)) == len(store.STATIC_PRODUCTS)


def test_find_product_unknown_id():
    assert find_product(-1, InMemoryOverlayRepository()) is None
