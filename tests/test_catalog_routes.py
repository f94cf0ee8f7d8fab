"""Tests for public catalog browsing and seller-only management."""

from __future__ import annotations

import pytest
from flask.testing import FlaskClient

from models.category import Category
from models.product import Product

from conftest import auth_headers, become_seller, register


@pytest.fixture()
def seller_token(client: FlaskClient) -> str:
    return become_seller(client, register(client, "seller@x.com"))


@pytest.fixture()
def other_seller_token(client: FlaskClient) -> str:
    return become_seller(client, register(client, "rival@x.com"))


def _create_category(client: FlaskClient, token: str, name: str = "Books", **extra) -> dict:
    response = client.post(
        "/seller/categories",
        json={"name": name, **extra},
        headers=auth_headers(token),
    )
    assert response.status_code == 201, response.get_json()
    return response.get_json()["data"]


def _create_product(client: FlaskClient, token: str, **overrides) -> dict:
    payload = {"name": "Novel", "description": "A story", "price": 12.5, "stock": 3}
    payload.update(overrides)
    response = client.post("/seller/products", json=payload, headers=auth_headers(token))
    assert response.status_code == 201, response.get_json()
    return response.get_json()["data"]


def test_customer_cannot_use_seller_routes(client: FlaskClient):
    token = register(client, "buyer@x.com")

    response = client.post(
        "/seller/products", json={"name": "Novel"}, headers=auth_headers(token)
    )

    assert response.status_code == 401
    payload = response.get_json()
    assert payload["error"] == "ROLE_REQUIRED"
    assert "join seller program" in payload["detail"]


def test_seller_routes_require_token(client: FlaskClient):
    response = client.get("/seller/products")

    assert response.status_code == 401
    assert response.get_json()["error"] == "MALFORMED_TOKEN"


def test_category_lifecycle(app, client: FlaskClient, seller_token):
    created = _create_category(client, seller_token, "Books", display_order=2)
    _create_category(client, seller_token, "Games", display_order=1)

    listing = client.get("/categories").get_json()["data"]
    assert [category["name"] for category in listing] == ["Games", "Books"]

    edited = client.patch(
        f"/seller/categories/{created['id']}",
        json={"name": "Fiction", "parent_id": 0, "image_url": ""},
        headers=auth_headers(seller_token),
    )
    assert edited.status_code == 200
    assert edited.get_json()["data"]["name"] == "Fiction"
    assert edited.get_json()["data"]["display_order"] == 2

    single = client.get(f"/categories/{created['id']}")
    assert single.get_json()["data"]["name"] == "Fiction"

    deleted = client.delete(
        f"/seller/categories/{created['id']}", headers=auth_headers(seller_token)
    )
    assert deleted.status_code == 200
    assert client.get(f"/categories/{created['id']}").status_code == 404

    with app.app_context():
        assert Category.query.count() == 1


def test_missing_category_is_not_found(client: FlaskClient, seller_token):
    response = client.patch(
        "/seller/categories/404", json={"name": "x"}, headers=auth_headers(seller_token)
    )

    assert response.status_code == 404
    assert response.get_json()["detail"] == "category does not exist"


def test_product_creation_and_public_listing(client: FlaskClient, seller_token):
    category = _create_category(client, seller_token)
    product = _create_product(client, seller_token, category_id=category["id"])

    assert product["price"] == 12.5
    assert product["category_id"] == category["id"]

    public = client.get("/products").get_json()["data"]
    assert [item["id"] for item in public] == [product["id"]]
    assert client.get(f"/products/{product['id']}").get_json()["data"]["name"] == "Novel"
    assert client.get("/products/999").status_code == 404


def test_seller_sees_only_own_products(client: FlaskClient, seller_token, other_seller_token):
    mine = _create_product(client, seller_token, name="Mine")
    _create_product(client, other_seller_token, name="Theirs")

    response = client.get("/seller/products", headers=auth_headers(seller_token))

    assert [item["id"] for item in response.get_json()["data"]] == [mine["id"]]


def test_owner_can_edit_product(app, client: FlaskClient, seller_token):
    product = _create_product(client, seller_token)

    response = client.put(
        f"/seller/products/{product['id']}",
        json={"name": "Revised", "price": 0, "description": ""},
        headers=auth_headers(seller_token),
    )

    assert response.status_code == 200
    data = response.get_json()["data"]
    assert data["name"] == "Revised"
    assert data["price"] == 12.5
    assert data["description"] == "A story"

    with app.app_context():
        assert Product.query.get(product["id"]).name == "Revised"


def test_non_owner_cannot_edit_delete_or_restock(
    app, client: FlaskClient, seller_token, other_seller_token
):
    product = _create_product(client, seller_token)
    headers = auth_headers(other_seller_token)

    edit = client.put(f"/seller/products/{product['id']}", json={"name": "Hijack"}, headers=headers)
    stock = client.patch(f"/seller/products/{product['id']}", json={"stock": 0}, headers=headers)
    delete = client.delete(f"/seller/products/{product['id']}", headers=headers)

    for response in (edit, stock, delete):
        assert response.status_code == 401
        assert response.get_json()["error"] == "NOT_OWNER"

    with app.app_context():
        stored = Product.query.get(product["id"])
        assert stored.name == "Novel"
        assert stored.stock == 3


def test_owner_can_update_stock_and_delete(app, client: FlaskClient, seller_token):
    product = _create_product(client, seller_token)
    headers = auth_headers(seller_token)

    stock = client.patch(f"/seller/products/{product['id']}", json={"stock": 0}, headers=headers)
    assert stock.status_code == 200
    assert stock.get_json()["data"]["stock"] == 0

    delete = client.delete(f"/seller/products/{product['id']}", headers=headers)
    assert delete.status_code == 200

    with app.app_context():
        assert Product.query.get(product["id"]) is None


def test_missing_product_is_not_found_not_unauthorized(client: FlaskClient, seller_token):
    response = client.delete("/seller/products/999", headers=auth_headers(seller_token))

    assert response.status_code == 404
    assert response.get_json()["detail"] == "product does not exist"


@pytest.mark.parametrize(
    "payload",
    [{"name": "Novel", "price": "cheap"}, {"name": "Novel", "stock": -1}, {"price": 5}],
)
def test_invalid_product_payloads(client: FlaskClient, seller_token, payload):
    response = client.post("/seller/products", json=payload, headers=auth_headers(seller_token))

    assert response.status_code == 400


@pytest.mark.parametrize(
    "body",
    [
        '{"name": "Novel", "price": NaN}',
        '{"name": "Novel", "price": Infinity}',
        '{"name": "Novel", "price": "nan"}',
        '{"name": "Novel", "price": 100000000}',
        '{"name": "Novel", "stock": 1000000000000000000000000000000}',
        '{"name": "Novel", "stock": 2.5}',
    ],
)
def test_out_of_range_product_values_are_rejected(app, client: FlaskClient, seller_token, body):
    response = client.post(
        "/seller/products",
        data=body,
        content_type="application/json",
        headers=auth_headers(seller_token),
    )

    assert response.status_code == 400
    assert response.get_json()["error"] == "Bad Request"
    with app.app_context():
        assert Product.query.count() == 0


def test_stock_update_rejects_oversized_value(app, client: FlaskClient, seller_token):
    product = _create_product(client, seller_token)

    response = client.patch(
        f"/seller/products/{product['id']}",
        json={"stock": 10**30},
        headers=auth_headers(seller_token),
    )

    assert response.status_code == 400
    with app.app_context():
        assert Product.query.get(product["id"]).stock == 3
