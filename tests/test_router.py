import pytest
from fastapi.testclient import TestClient

from storefront.catalog.router import get_repository
from storefront.main import app
from storefront.storage import InMemoryOverlayRepository


@pytest.fixture
def repo():
    return InMemoryOverlayRepository()


@pytest.fixture
def client(repo):
    app.dependency_overrides[get_repository] = lambda: repo
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def _new_product(**overrides):
    payload = {
        "name": "Chanderi Silk Saree",
        "price": 3299,
        "category": "Sarees",
        "subcategory": "Ethnic Wear",
        "isNew": True,
        "colors": ["Teal"],
    }
    payload.update(overrides)
    return payload


def test_health_check(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_list_products_defaults(client):
    data = client.get("/api/catalog/products").json()

    assert data["current_page"] == 1
    assert data["page_size"] == 12
    assert len(data["items"]) == 12
    assert data["start_index"] == 1
    assert data["end_index"] == 12
    assert data["can_go_prev"] is False


def test_list_products_category_sorted_by_price(client):
    response = client.get(
        "/api/catalog/products",
        params={"category": "Sarees", "sort": "price-high", "page_size": 50},
    )
    data = response.json()

    assert response.status_code == 200
    assert data["total_items"] == 11
    assert {item["category"] for item in data["items"]} == {"Sarees"}
    prices = [item["price"] for item in data["items"]]
    assert prices == sorted(prices, reverse=True)


def test_list_products_repeatable_facets(client):
    data = client.get(
        "/api/catalog/products",
        params=[("category", "Gowns"), ("category", "Jewelry"), ("page_size", 200)],
    ).json()

    assert {item["category"] for item in data["items"]} == {"Gowns", "Jewelry"}


def test_list_products_flags_and_price(client):
    data = client.get(
        "/api/catalog/products",
        params={"has_discount": "true", "max_price": 1500, "page_size": 200},
    ).json()

    assert data["items"]
    for item in data["items"]:
        assert item["discount"] > 0
        assert item["price"] <= 1500


def test_page_past_the_end_is_empty(client):
    data = client.get("/api/catalog/products", params={"page": 500}).json()

    assert data["items"] == []
    assert data["can_go_next"] is False


@pytest.mark.parametrize(
    "params",
    [{"page": 0}, {"page_size": 0}, {"page_size": 500}, {"sort": "cheapest"}],
)
def test_invalid_query_parameters_are_rejected(client, params):
    assert client.get("/api/catalog/products", params=params).status_code == 422


def test_get_product(client):
    assert client.get("/api/catalog/products/1").json()["sku"] == "JB-SAR-001"
    assert client.get("/api/catalog/products/999999").status_code == 404


def test_search_endpoint_ranks_name_matches_first(client):
    results = client.get("/api/catalog/search", params={"q": "silk"}).json()

    assert results
    assert results[0]["matched_fields"][0] == "name"
    assert results[0]["highlights"][0]["field"] == "name"


def test_suggestions(client):
    assert client.get("/api/catalog/suggestions", params={"q": "s"}).json() == []
    suggestions = client.get("/api/catalog/suggestions", params={"q": "sar", "limit": 3}).json()
    assert 0 < len(suggestions) <= 3


def test_popular_searches_and_sort_options(client):
    assert "saree" in client.get("/api/catalog/popular-searches").json()
    options = client.get("/api/catalog/sort-options").json()
    assert [o["value"] for o in options] == [
        "featured",
        "price-low",
        "price-high",
        "newest",
        "popular",
        "rating",
    ]


def test_filter_options(client):
    options = client.get("/api/catalog/filters").json()

    assert "Sarees" in options["categories"]
    assert "Silk" in options["fabrics"]


def test_admin_product_appears_first_in_catalogue(client, repo):
    response = client.post("/api/catalog/admin/products", json=_new_product())
    created = response.json()

    assert response.status_code == 201
    assert created["isNew"] is True
    assert created["sku"].startswith("JB-SAR-")
    assert [p.id for p in repo.load()] == [created["id"]]

    listing = client.get("/api/catalog/products", params={"q": "chanderi"}).json()
    assert [item["id"] for item in listing["items"]] == [created["id"]]
    assert client.get(f"/api/catalog/products/{created['id']}").json()["name"] == "Chanderi Silk Saree"


def test_admin_product_can_shadow_static_id(client):
    client.post("/api/catalog/admin/products", json=_new_product(id=1))

    assert client.get("/api/catalog/products/1").json()["name"] == "Chanderi Silk Saree"
    everything = client.get("/api/catalog/products", params={"page_size": 200}).json()
    assert [item["id"] for item in everything["items"]].count(1) == 2


def test_admin_duplicate_overlay_id_is_rejected(client):
    assert client.post("/api/catalog/admin/products", json=_new_product(id=42)).status_code == 201
    response = client.post("/api/catalog/admin/products", json=_new_product(id=42))

    assert response.status_code == 400


def test_admin_invalid_payload_is_rejected(client):
    assert client.post("/api/catalog/admin/products", json=_new_product(price=0)).status_code == 422
    assert client.post("/api/catalog/admin/products", json=_new_product(discount=150)).status_code == 422


def test_admin_update_and_delete(client):
    created = client.post("/api/catalog/admin/products", json=_new_product()).json()
    product_id = created["id"]

    updated = client.put(
        f"/api/catalog/admin/products/{product_id}",
        json=_new_product(name="Chanderi Cotton Saree"),
    )
    assert updated.status_code == 200
    assert updated.json()["name"] == "Chanderi Cotton Saree"

    assert client.delete(f"/api/catalog/admin/products/{product_id}").json() == {"status": "ok"}
    assert client.get("/api/catalog/admin/products").json() == []
    assert client.delete(f"/api/catalog/admin/products/{product_id}").status_code == 404
    assert client.put(f"/api/catalog/admin/products/{product_id}", json=_new_product()).status_code == 404
