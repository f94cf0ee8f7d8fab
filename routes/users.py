"""User blueprint: registration, login, phone verification and seller onboarding."""

from __future__ import annotations

import logging
from http import HTTPStatus

from flask import Blueprint, jsonify, request
from werkzeug.exceptions import BadRequest, Unauthorized

from services import get_services
from services.accounts import SellerInput
from services.errors import NotFoundError, PasswordMismatchError, WeakPasswordError
from utils.authorization import authorize, current_identity
from utils.request_validation import coerce_int, coerce_str, parse_json_request

logger = logging.getLogger(__name__)

users_bp = Blueprint("users", __name__)

SELLER_FIELDS = (
    "first_name",
    "last_name",
    "phone_number",
    "bank_account_number",
    "swift_code",
    "payment_type",
)


@users_bp.route("/register", methods=["POST"])
def register():
    """Create a customer account and return a token."""

    payload = parse_json_request(request, required_keys=("email", "password"))
    token = get_services().accounts.sign_up(
        coerce_str(payload, "email"),
        payload.get("password") if isinstance(payload.get("password"), str) else "",
        coerce_str(payload, "phone") or None,
    )
    return jsonify({"message": "register", "token": token}), HTTPStatus.OK


@users_bp.route("/login", methods=["POST"])
def login():
    """Exchange email and password for a token."""

    payload = parse_json_request(request, required_keys=("email", "password"))
    password = payload.get("password")
    try:
        token = get_services().accounts.login(
            coerce_str(payload, "email"),
            password if isinstance(password, str) else "",
        )
    except (NotFoundError, PasswordMismatchError, WeakPasswordError):
        logger.info("Login failed for %s", payload.get("email"))
        raise Unauthorized("please provide correct credentials")
    return jsonify({"message": "login", "token": token}), HTTPStatus.OK


@users_bp.route("/verify", methods=["GET"])
@authorize
def request_verification_code():
    """Text a fresh verification code to the caller's phone."""

    get_services().accounts.request_verification_code(current_identity())
    return jsonify({"message": "verification code sent"}), HTTPStatus.OK


@users_bp.route("/verify", methods=["POST"])
@authorize
def verify():
    payload = parse_json_request(request, required_keys=("code",))
    code = coerce_int(payload, "code")
    services = get_services()
    digits = services.settings.code_digits
    if not 10 ** (digits - 1) <= code < 10**digits:
        raise BadRequest(f"code must be a {digits} digit number")
    services.accounts.verify_code(current_identity().user_id, code)
    return jsonify({"message": "verified successfully"}), HTTPStatus.OK


@users_bp.route("/profile", methods=["GET"])
@authorize
def get_profile():
    identity = current_identity()
    user = get_services().accounts.get_profile(identity.user_id)
    return jsonify({"message": "profile", "identity": identity.to_dict(), "user": user.to_dict()})


@users_bp.route("/profile", methods=["POST"])
@authorize
def create_profile():
    return jsonify({"message": "create profile"})


@users_bp.route("/become-seller", methods=["POST"])
@authorize
def become_seller():
    """Join the seller program and receive a token carrying the seller role."""

    payload = parse_json_request(request, required_keys=SELLER_FIELDS)
    seller = SellerInput(**{field: coerce_str(payload, field) for field in SELLER_FIELDS})
    token = get_services().accounts.become_seller(current_identity().user_id, seller)
    return jsonify({"message": "become seller", "token": token}), HTTPStatus.OK


# Cart and order endpoints are placeholders until checkout is built.


@users_bp.route("/cart", methods=["POST"])
@authorize
def add_to_cart():
    return jsonify({"message": "add to cart"})


@users_bp.route("/cart", methods=["GET"])
@authorize
def get_cart():
    return jsonify({"message": "get cart"})


@users_bp.route("/order", methods=["POST"])
@authorize
def create_order():
    return jsonify({"message": "create order"})


@users_bp.route("/order", methods=["GET"])
@authorize
def get_orders():
    return jsonify({"message": "get orders"})


@users_bp.route("/order/<int:order_id>", methods=["GET"])
@authorize
def get_order(order_id: int):
    return jsonify({"message": "get order", "id": order_id})
