from urllib.parse import parse_qs, urlparse

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from storefront.core.config import settings
from storefront.models.product import Product
from storefront.models.storage_slot import StorageSlot


def _create_product(db: Session, **overrides) -> Product:
    data = {
        "name": "Kaos Polos",
        "slug": "kaos-polos",
        "category": "Pria",
        "price": 19999,
        "sizes": ["M", "L"],
        "colors": [],
        "is_new": False,
        "is_active": True,
    }
    data.update(overrides)
    product = Product(**data)
    db.add(product)
    db.commit()
    db.refresh(product)
    return product


def _create_catalog(db: Session) -> tuple[Product, Product]:
    bag = _create_product(db, name="Tas Anyaman", slug="tas-anyaman", price=39999, sizes=[], colors=[])
    shirt = _create_product(db)
    return bag, shirt


def test_empty_cart_issues_session_cookie(client: TestClient):
    response = client.get("/api/v1/cart")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["items"] == []
    assert data["total_items"] == 0
    assert data["subtotal"] == 0
    assert data["totals"] is None
    assert settings.CART_SESSION_COOKIE in response.cookies


def test_add_requires_variant_selection(client: TestClient, db_session: Session):
    _, shirt = _create_catalog(db_session)

    response = client.post("/api/v1/cart/items", json={"product_id": shirt.id})

    assert response.status_code == 400
    payload = response.json()
    assert payload["success"] is False
    assert payload["message"] == "Please select a size"
    assert payload["errors"]["missing_options"] == ["size"]
    assert payload["errors"]["sizes"] == ["M", "L"]
    assert "timestamp" in payload
    assert client.get("/api/v1/cart").json()["data"]["items"] == []


def test_add_unknown_product_returns_404(client: TestClient):
    response = client.post("/api/v1/cart/items", json={"product_id": 999})

    assert response.status_code == 404
    assert response.json()["message"] == "Product not found"


def test_add_merges_and_returns_camel_case_lines(client: TestClient, db_session: Session):
    _, shirt = _create_catalog(db_session)
    body = {"product_id": shirt.id, "quantity": 2, "selected_size": "M"}

    first = client.post("/api/v1/cart/items", json=body)
    second = client.post("/api/v1/cart/items", json=body)

    assert first.status_code == 201
    assert second.status_code == 201
    data = second.json()["data"]
    assert len(data["items"]) == 1
    line = data["items"][0]
    assert line["id"] == shirt.id
    assert line["selectedSize"] == "M"
    assert line["isNew"] is False
    assert line["quantity"] == 4
    assert data["subtotal"] == 4 * 19999


def test_update_quantity(client: TestClient, db_session: Session):
    bag, _ = _create_catalog(db_session)
    client.post("/api/v1/cart/items", json={"product_id": bag.id})

    rejected = client.put(f"/api/v1/cart/items/{bag.id}", json={"quantity": 0})
    assert rejected.status_code == 400
    assert rejected.json()["errors"] == {"quantity": 0}
    assert client.get("/api/v1/cart").json()["data"]["items"][0]["quantity"] == 1

    response = client.put(f"/api/v1/cart/items/{bag.id}", json={"quantity": 5})
    assert response.status_code == 200
    assert response.json()["data"]["total_items"] == 5

    missing = client.put("/api/v1/cart/items/999", json={"quantity": 2})
    assert missing.status_code == 404


def test_remove_product_from_cart(client: TestClient, db_session: Session):
    bag, shirt = _create_catalog(db_session)
    client.post("/api/v1/cart/items", json={"product_id": bag.id})
    client.post("/api/v1/cart/items", json={"product_id": shirt.id, "selected_size": "M"})
    client.post("/api/v1/cart/items", json={"product_id": shirt.id, "selected_size": "L"})

    response = client.delete(f"/api/v1/cart/items/{shirt.id}")

    assert response.status_code == 200
    items = response.json()["data"]["items"]
    assert [item["id"] for item in items] == [bag.id]


def test_whatsapp_checkout(client: TestClient, db_session: Session):
    bag, shirt = _create_catalog(db_session)
    client.post("/api/v1/cart/items", json={"product_id": bag.id})
    client.post("/api/v1/cart/items", json={"product_id": shirt.id, "quantity": 2, "selected_size": "M"})

    response = client.get("/api/v1/checkout/whatsapp")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["totals"] == {
        "subtotal": 79997,
        "shipping_cost": 20000,
        "total": 99997,
        "is_free_shipping": False,
        "free_shipping_threshold": 200000,
    }
    assert "*Tas Anyaman*" in data["message"]
    assert "Ukuran: M" in data["message"]
    assert "*Total: Rp\u00a099.997*" in data["message"]

    url = urlparse(data["whatsapp_url"])
    assert url.netloc == "wa.me"
    assert url.path == f"/{settings.WHATSAPP_PHONE_NUMBER}"
    assert parse_qs(url.query)["text"] == [data["message"]]


def test_checkout_with_empty_cart_is_rejected(client: TestClient):
    response = client.get("/api/v1/checkout/whatsapp")

    assert response.status_code == 400
    assert response.json()["message"] == "Cart is empty"


def test_clear_cart_removes_storage_slot(client: TestClient, db_session: Session):
    bag, _ = _create_catalog(db_session)
    client.post("/api/v1/cart/items", json={"product_id": bag.id})
    assert db_session.query(StorageSlot).count() == 1

    response = client.delete("/api/v1/cart")

    assert response.status_code == 200
    assert response.json()["data"]["items"] == []
    assert db_session.query(StorageSlot).count() == 0


def test_carts_are_scoped_to_session_cookie(client: TestClient, db_session: Session):
    bag, _ = _create_catalog(db_session)
    client.post("/api/v1/cart/items", json={"product_id": bag.id})
    assert client.get("/api/v1/cart").json()["data"]["total_items"] == 1

    client.cookies.clear()

    assert client.get("/api/v1/cart").json()["data"]["total_items"] == 0


def test_product_endpoints(client: TestClient, db_session: Session):
    bag, shirt = _create_catalog(db_session)
    _create_product(db_session, name="Arsip", slug="arsip", is_active=False)

    listing = client.get("/api/v1/products")
    assert listing.status_code == 200
    assert listing.json()["meta"]["total"] == 2

    detail = client.get(f"/api/v1/products/{bag.id}").json()["data"]
    assert detail["formatted_price"] == "Rp\u00a039.999"

    by_slug = client.get("/api/v1/products/slug/kaos-polos").json()["data"]
    assert by_slug["id"] == shirt.id


def test_product_inquiry_link(client: TestClient, db_session: Session):
    _, shirt = _create_catalog(db_session)

    response = client.get(f"/api/v1/products/{shirt.id}/inquiry")

    assert response.status_code == 200
    data = response.json()["data"]
    assert "*Kaos Polos*\nHarga: Rp\u00a019.999" in data["message"]
    assert "/products/kaos-polos" in data["message"]
    assert data["whatsapp_url"].startswith(f"https://wa.me/{settings.WHATSAPP_PHONE_NUMBER}?text=")
