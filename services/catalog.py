"""Category and product management."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy.exc import SQLAlchemyError

from models import db
from models.category import Category
from models.product import Product

from .errors import NotFoundError, PersistenceError
from .permissions import require_capability
from .tokens import Identity

logger = logging.getLogger(__name__)


@dataclass
class CategoryInput:
    name: str = ""
    parent_id: int = 0
    image_url: str = ""
    display_order: int = 0


@dataclass
class ProductInput:
    name: str = ""
    description: str = ""
    category_id: int = 0
    image_url: str = ""
    price: float = 0
    stock: int = 0


class CatalogService:
    """CRUD over categories and products with owner checks on product writes."""

    def __init__(self, session=None) -> None:
        self._session = session

    @property
    def session(self):
        return self._session if self._session is not None else db.session

    def _commit(self, message: str) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error("Catalog write failed: %s", message, exc_info=True)
            raise PersistenceError(message) from exc

    # Categories

    def create_category(self, data: CategoryInput) -> Category:
        category = Category(
            name=data.name,
            parent_id=data.parent_id or None,
            image_url=data.image_url or None,
            display_order=data.display_order or 0,
        )
        self.session.add(category)
        self._commit("error creating category")
        return category

    def get_categories(self) -> list[Category]:
        return (
            self.session.query(Category)
            .order_by(Category.display_order.asc(), Category.id.asc())
            .all()
        )

    def get_category(self, category_id: int) -> Category:
        category = self.session.get(Category, category_id)
        if category is None:
            raise NotFoundError("category does not exist")
        return category

    def edit_category(self, category_id: int, data: CategoryInput) -> Category:
        category = self.get_category(category_id)

        if data.name:
            category.name = data.name
        if data.parent_id > 0:
            category.parent_id = data.parent_id
        if data.image_url:
            category.image_url = data.image_url
        if data.display_order > 0:
            category.display_order = data.display_order

        self._commit("error updating category")
        return category

    def delete_category(self, category_id: int) -> None:
        category = self.get_category(category_id)
        self.session.delete(category)
        self._commit("error deleting category")

    # Products

    def get_products(self) -> list[Product]:
        return self.session.query(Product).order_by(Product.id.asc()).all()

    def get_product(self, product_id: int) -> Product:
        product = self.session.get(Product, product_id)
        if product is None:
            raise NotFoundError("product does not exist")
        return product

    def get_seller_products(self, user_id: int) -> list[Product]:
        return (
            self.session.query(Product)
            .filter_by(user_id=user_id)
            .order_by(Product.id.asc())
            .all()
        )

    def create_product(self, data: ProductInput, identity: Identity) -> Product:
        product = Product(
            name=data.name,
            description=data.description or None,
            category_id=data.category_id or None,
            image_url=data.image_url or None,
            price=Decimal(str(data.price or 0)),
            user_id=identity.user_id,
            stock=data.stock or 0,
        )
        self.session.add(product)
        self._commit("error creating product")
        return product

    def edit_product(self, product_id: int, data: ProductInput, identity: Identity) -> Product:
        product = self.get_product(product_id)
        require_capability(identity, owner_id=product.user_id)

        if data.name:
            product.name = data.name
        if data.price > 0:
            product.price = Decimal(str(data.price))
        if data.description:
            product.description = data.description
        if data.category_id > 0:
            product.category_id = data.category_id
        if data.image_url:
            product.image_url = data.image_url

        self._commit("error updating product")
        return product

    def update_product_stock(self, product_id: int, stock: int, identity: Identity) -> Product:
        product = self.get_product(product_id)
        require_capability(identity, owner_id=product.user_id)

        product.stock = stock
        self._commit("error updating product stock")
        return product

    def delete_product(self, product_id: int, identity: Identity) -> None:
        product = self.get_product(product_id)
        require_capability(identity, owner_id=product.user_id)

        self.session.delete(product)
        self._commit("error deleting product")
