"""Bootstrap a demo seller, categories and a product for local development."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from decimal import Decimal
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from app import create_app
from models import db
from models.bank_account import BankAccount
from models.category import Category
from models.product import Product
from models.user import CUSTOMER, SELLER, User
from services.credentials import CredentialHasher
from services.notifications import LogNotifier


@dataclass
class CreatedRecords:
    """Container for created or updated record identifiers."""

    seller_id: int
    customer_id: int
    category_ids: list[int]
    product_id: int


SELLER_EMAIL = "seller@example.com"
SELLER_PASSWORD = "SellerPass123"
CUSTOMER_EMAIL = "shopper@example.com"
CUSTOMER_PASSWORD = "ShopperPass123"
CATEGORY_NAMES = ("Electronics", "Home", "Books")
PRODUCT_NAME = "Noise Cancelling Headphones"


def get_or_create_user(email: str, password: str, role: str, phone: str) -> User:
    """Create or update a verified user with the provided credentials."""

    hasher = CredentialHasher()
    user = User.query.filter_by(email=email).first()
    if user is None:
        user = User(email=email, phone=phone)
        db.session.add(user)
    user.role = role
    user.verified = True
    user.password_hash = hasher.hash(password)
    return user


def ensure_bank_account(seller: User) -> BankAccount:
    account = BankAccount.query.filter_by(user_id=seller.id).first()
    if account is None:
        account = BankAccount(
            user_id=seller.id,
            bank_account="000123456789",
            swift_code="DEMOUS33",
            payment_type="bank_transfer",
        )
        db.session.add(account)
    return account


def ensure_categories() -> list[Category]:
    categories = []
    for order, name in enumerate(CATEGORY_NAMES, start=1):
        category = Category.query.filter_by(name=name).first()
        if category is None:
            category = Category(name=name, display_order=order)
            db.session.add(category)
        categories.append(category)
    return categories


def ensure_product(owner_id: int, category_id: int) -> Product:
    product = Product.query.filter_by(name=PRODUCT_NAME, user_id=owner_id).first()
    if product is None:
        product = Product(name=PRODUCT_NAME, user_id=owner_id)
        db.session.add(product)
    product.description = "Over-ear headphones with active noise cancellation."
    product.category_id = category_id
    product.price = Decimal("199.00")
    product.stock = 25
    return product


def bootstrap() -> CreatedRecords:
    """Bootstrap the demo records and return their identifiers."""

    app = create_app(notifier=LogNotifier())
    with app.app_context():
        db.create_all()

        seller = get_or_create_user(SELLER_EMAIL, SELLER_PASSWORD, SELLER, "+15550000001")
        customer = get_or_create_user(
            CUSTOMER_EMAIL, CUSTOMER_PASSWORD, CUSTOMER, "+15550000002"
        )
        categories = ensure_categories()

        db.session.flush()

        ensure_bank_account(seller)
        product = ensure_product(seller.id, categories[0].id)

        db.session.commit()

        return CreatedRecords(
            seller_id=seller.id,
            customer_id=customer.id,
            category_ids=[category.id for category in categories],
            product_id=product.id,
        )


if __name__ == "__main__":
    records = bootstrap()
    print(json.dumps(asdict(records)))
