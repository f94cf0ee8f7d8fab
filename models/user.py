"""User model definition."""

from __future__ import annotations

from datetime import datetime

from utils.clock import utcnow

from . import db


CUSTOMER = "CUSTOMER"
SELLER = "SELLER"


class User(db.Model):
    """Represents a shopper or seller account."""

    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    first_name = db.Column(db.String(120), nullable=True)
    last_name = db.Column(db.String(120), nullable=True)
    phone = db.Column(db.String(32), nullable=True)
    role = db.Column(db.String(32), nullable=False, default=CUSTOMER)
    verified = db.Column(
        db.Boolean,
        nullable=False,
        default=False,
        server_default=db.false(),
    )
    code = db.Column(db.Integer, nullable=True)
    expiry = db.Column(db.DateTime, nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    bank_accounts = db.relationship(
        "BankAccount",
        back_populates="user",
        cascade="all, delete-orphan",
        lazy="dynamic",
    )
    products = db.relationship("Product", back_populates="owner", lazy="dynamic")

    @property
    def is_seller(self) -> bool:
        return self.role == SELLER

    def code_is_live(self, now: datetime | None = None) -> bool:
        """Return True while the stored verification code has not expired."""

        if self.expiry is None:
            return False
        now = now or utcnow()
        return now < self.expiry

    def to_dict(self) -> dict:
        """Serialize the public profile fields."""

        return {
            "id": self.id,
            "email": self.email,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "phone": self.phone,
            "role": self.role,
            "verified": self.verified,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<User {self.email}>"
