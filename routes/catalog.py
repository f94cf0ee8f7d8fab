"""Catalog blueprints: public browsing and seller-only management."""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, jsonify, request
from werkzeug.exceptions import BadRequest

from services import get_services
from services.catalog import CategoryInput, ProductInput
from utils.authorization import authorize_seller, current_identity
from utils.request_validation import (
    coerce_float,
    coerce_int,
    coerce_str,
    parse_json_request,
)

catalog_bp = Blueprint("catalog", __name__)
seller_bp = Blueprint("seller", __name__)

# Largest value a Numeric(10, 2) price column holds.
MAX_PRICE = 99999999.99


def _success(message: str, data=None, status: int = HTTPStatus.OK):
    return jsonify({"message": message, "data": data}), status


def _category_input(data: dict) -> CategoryInput:
    return CategoryInput(
        name=coerce_str(data, "name"),
        parent_id=coerce_int(data, "parent_id"),
        image_url=coerce_str(data, "image_url"),
        display_order=coerce_int(data, "display_order"),
    )


def _product_input(data: dict) -> ProductInput:
    product = ProductInput(
        name=coerce_str(data, "name"),
        description=coerce_str(data, "description"),
        category_id=coerce_int(data, "category_id"),
        image_url=coerce_str(data, "image_url"),
        price=coerce_float(data, "price", maximum=MAX_PRICE),
        stock=coerce_int(data, "stock"),
    )
    if product.price < 0:
        raise BadRequest("price must not be negative")
    if product.stock < 0:
        raise BadRequest("stock must not be negative")
    return product


# Public


@catalog_bp.route("/products", methods=["GET"])
def get_products():
    products = get_services().catalog.get_products()
    return _success("products", [product.to_dict() for product in products])


@catalog_bp.route("/products/<int:product_id>", methods=["GET"])
def get_product(product_id: int):
    product = get_services().catalog.get_product(product_id)
    return _success("product", product.to_dict())


@catalog_bp.route("/categories", methods=["GET"])
def get_categories():
    categories = get_services().catalog.get_categories()
    return _success("categories", [category.to_dict() for category in categories])


@catalog_bp.route("/categories/<int:category_id>", methods=["GET"])
def get_category(category_id: int):
    category = get_services().catalog.get_category(category_id)
    return _success("category", category.to_dict())


# Seller


@seller_bp.route("/categories", methods=["POST"])
@authorize_seller
def create_category():
    payload = parse_json_request(request, required_keys=("name",))
    category = get_services().catalog.create_category(_category_input(payload))
    return _success("category created", category.to_dict(), HTTPStatus.CREATED)


@seller_bp.route("/categories/<int:category_id>", methods=["PATCH"])
@authorize_seller
def edit_category(category_id: int):
    payload = parse_json_request(request)
    category = get_services().catalog.edit_category(category_id, _category_input(payload))
    return _success("category edited successfully", category.to_dict())


@seller_bp.route("/categories/<int:category_id>", methods=["DELETE"])
@authorize_seller
def delete_category(category_id: int):
    get_services().catalog.delete_category(category_id)
    return _success("category deleted successfully")


@seller_bp.route("/products", methods=["GET"])
@authorize_seller
def get_seller_products():
    products = get_services().catalog.get_seller_products(current_identity().user_id)
    return _success("seller products", [product.to_dict() for product in products])


@seller_bp.route("/products/<int:product_id>", methods=["GET"])
@authorize_seller
def get_seller_product(product_id: int):
    product = get_services().catalog.get_product(product_id)
    return _success("product", product.to_dict())


@seller_bp.route("/products", methods=["POST"])
@authorize_seller
def create_product():
    payload = parse_json_request(request, required_keys=("name",))
    product = get_services().catalog.create_product(_product_input(payload), current_identity())
    return _success("product created", product.to_dict(), HTTPStatus.CREATED)


@seller_bp.route("/products/<int:product_id>", methods=["PUT"])
@authorize_seller
def edit_product(product_id: int):
    payload = parse_json_request(request)
    product = get_services().catalog.edit_product(
        product_id, _product_input(payload), current_identity()
    )
    return _success("product edited successfully", product.to_dict())


@seller_bp.route("/products/<int:product_id>", methods=["PATCH"])
@authorize_seller
def update_stock(product_id: int):
    payload = parse_json_request(request, required_keys=("stock",))
    stock = coerce_int(payload, "stock")
    if stock < 0:
        raise BadRequest("stock must not be negative")
    product = get_services().catalog.update_product_stock(product_id, stock, current_identity())
    return _success("stock updated", product.to_dict())


@seller_bp.route("/products/<int:product_id>", methods=["DELETE"])
@authorize_seller
def delete_product(product_id: int):
    get_services().catalog.delete_product(product_id, current_identity())
    return _success("product deleted successfully")
