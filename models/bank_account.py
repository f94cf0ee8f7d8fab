"""Bank account model for seller payouts."""

from utils.clock import utcnow

from . import db


class BankAccount(db.Model):
    """Payout details registered when a user joins the seller program."""

    __tablename__ = "bank_accounts"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    bank_account = db.Column(db.String(64), nullable=False)
    swift_code = db.Column(db.String(32), nullable=False)
    payment_type = db.Column(db.String(32), nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    user = db.relationship("User", back_populates="bank_accounts")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "bank_account": self.bank_account,
            "swift_code": self.swift_code,
            "payment_type": self.payment_type,
        }
