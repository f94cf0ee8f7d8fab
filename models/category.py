"""Catalog category model."""

from utils.clock import utcnow

from . import db


class Category(db.Model):
    """A product category, optionally nested under a parent category."""

    __tablename__ = "categories"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False, index=True)
    parent_id = db.Column(db.Integer, nullable=True)
    image_url = db.Column(db.String(512), nullable=True)
    display_order = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    products = db.relationship("Product", back_populates="category", lazy="dynamic")

    def to_dict(self) -> dict:
        """Serialize the category."""

        return {
            "id": self.id,
            "name": self.name,
            "parent_id": self.parent_id,
            "image_url": self.image_url,
            "display_order": self.display_order,
        }
