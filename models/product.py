"""Catalog product model."""

from decimal import Decimal

from utils.clock import utcnow

from . import db


class Product(db.Model):
    """A product listed by a seller."""

    __tablename__ = "products"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False, index=True)
    description = db.Column(db.Text, nullable=True)
    category_id = db.Column(
        db.Integer, db.ForeignKey("categories.id", ondelete="SET NULL"), nullable=True
    )
    image_url = db.Column(db.String(512), nullable=True)
    price = db.Column(db.Numeric(10, 2), nullable=False, default=0)
    user_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    stock = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    owner = db.relationship("User", back_populates="products")
    category = db.relationship("Category", back_populates="products")

    def to_dict(self) -> dict:
        """Serialize the product."""

        price = float(self.price) if isinstance(self.price, Decimal) else self.price
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "category_id": self.category_id,
            "image_url": self.image_url,
            "price": price,
            "user_id": self.user_id,
            "stock": self.stock,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
