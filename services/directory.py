"""SQLAlchemy-backed user directory."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from models import db
from models.bank_account import BankAccount
from models.user import User

from .errors import DuplicateEmailError, PersistenceError

logger = logging.getLogger(__name__)

USER_UPDATABLE_FIELDS = frozenset(
    {"first_name", "last_name", "phone", "role", "verified", "code", "expiry"}
)


class UserDirectory:
    """Reads and writes user records and their bank accounts."""

    def __init__(self, session=None) -> None:
        self._session = session

    @property
    def session(self):
        return self._session if self._session is not None else db.session

    def find_by_email(self, email: str) -> User | None:
        normalized = (email or "").strip().lower()
        return self.session.query(User).filter(func.lower(User.email) == normalized).first()

    def find_by_id(self, user_id: int) -> User | None:
        return self.session.get(User, user_id)

    def is_verified(self, user_id: int) -> bool:
        """Read the stored ``verified`` flag rather than trusting a token."""

        user = self.find_by_id(user_id)
        return user is not None and bool(user.verified)

    def create(self, email: str, password_hash: str, phone: str | None) -> User:
        user = User(email=email, password_hash=password_hash, phone=phone)
        self.session.add(user)
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise DuplicateEmailError() from exc
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error("Failed to create user %s", email, exc_info=True)
            raise PersistenceError("unable to create user") from exc
        return user

    def update(self, user_id: int, *, commit: bool = True, **fields) -> User:
        """Apply ``fields`` to the user row; ``None`` values are written as-is."""

        unknown = set(fields) - USER_UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update user fields: {', '.join(sorted(unknown))}")

        user = self.find_by_id(user_id)
        if user is None:
            raise PersistenceError("unable to update user")
        for name, value in fields.items():
            setattr(user, name, value)

        if commit:
            self._commit("unable to update user")
        else:
            self.session.flush()
        return user

    def create_bank_account(
        self,
        user_id: int,
        *,
        bank_account: str,
        swift_code: str,
        payment_type: str,
        commit: bool = True,
    ) -> BankAccount:
        account = BankAccount(
            user_id=user_id,
            bank_account=bank_account,
            swift_code=swift_code,
            payment_type=payment_type,
        )
        self.session.add(account)
        if commit:
            self._commit("unable to create bank account")
        else:
            self.session.flush()
        return account

    @contextmanager
    def transaction(self) -> Iterator["UserDirectory"]:
        """Group writes made with ``commit=False`` into a single commit.

        Any exception inside the block rolls every pending write back.
        """

        try:
            yield self
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error("Transaction rolled back", exc_info=True)
            raise PersistenceError() from exc
        except Exception:
            self.session.rollback()
            raise

    def _commit(self, message: str) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error("Commit failed: %s", message, exc_info=True)
            raise PersistenceError(message) from exc
