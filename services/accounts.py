"""Account orchestration: sign-up, login, phone verification and seller promotion.

A user moves through ``Registered -> CodeIssued -> Verified`` via
``request_verification_code`` and ``verify_code``; ``become_seller`` is a
separate one-way transition to the ``SELLER`` role.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from config import Settings
from models.user import SELLER, User
from utils.clock import utcnow

from .codes import generate_code
from .credentials import CredentialHasher
from .directory import UserDirectory
from .errors import (
    AlreadySellerError,
    AlreadyVerifiedError,
    CodeExpiredError,
    CodeMismatchError,
    DuplicateEmailError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from .notifications import AbstractNotifier
from .tokens import Identity, TokenService

logger = logging.getLogger(__name__)

VERIFICATION_MESSAGE = "Your verification code is: {code}"


@dataclass(frozen=True)
class SellerInput:
    """Profile and payout details submitted when joining the seller program."""

    first_name: str
    last_name: str
    phone_number: str
    bank_account_number: str
    swift_code: str
    payment_type: str


class AccountService:
    """Coordinates the hasher, token service, directory and notifier."""

    def __init__(
        self,
        settings: Settings,
        directory: UserDirectory,
        hasher: CredentialHasher,
        tokens: TokenService,
        notifier: AbstractNotifier,
        clock: Callable[[], datetime] = utcnow,
        code_generator: Callable[[int], int] = generate_code,
    ) -> None:
        self.settings = settings
        self.directory = directory
        self.hasher = hasher
        self.tokens = tokens
        self.notifier = notifier
        self._clock = clock
        self._generate_code = code_generator

    def sign_up(self, email: str, password: str, phone: str | None) -> str:
        """Create a customer account and return its first token."""

        email = (email or "").strip().lower()
        if not email:
            raise ValidationError("email is required")

        password_hash = self.hasher.hash(password)
        if self.directory.find_by_email(email) is not None:
            raise DuplicateEmailError()

        user = self.directory.create(email, password_hash, phone)
        logger.info("Registered user %s (%s)", user.id, user.role)
        return self.tokens.issue(user.id, user.email, user.role)

    def login(self, email: str, password: str) -> str:
        user = self.directory.find_by_email(email)
        if user is None:
            raise NotFoundError("user doesn't exist with given email id")

        self.hasher.verify(password, user.password_hash)
        return self.tokens.issue(user.id, user.email, user.role)

    def get_profile(self, user_id: int) -> User:
        user = self.directory.find_by_id(user_id)
        if user is None:
            raise NotFoundError("user not found")
        return user

    def request_verification_code(self, identity: Identity) -> None:
        """Store a fresh code on the user row and text it to their phone.

        The code stays stored even when the SMS cannot be delivered.
        """

        user = self.directory.find_by_id(identity.user_id)
        if user is None:
            raise NotFoundError("user not found")
        if user.verified:
            raise AlreadyVerifiedError()

        code = self._generate_code(self.settings.code_digits)
        expiry = self._clock() + self.settings.code_lifetime
        try:
            user = self.directory.update(identity.user_id, code=code, expiry=expiry)
        except PersistenceError as exc:
            raise PersistenceError("unable to update verification code") from exc

        self.notifier.send_sms(user.phone, VERIFICATION_MESSAGE.format(code=code))
        logger.info("Verification code issued for user %s", identity.user_id)

    def verify_code(self, user_id: int, code: int) -> None:
        if self.directory.is_verified(user_id):
            raise AlreadyVerifiedError()

        user = self.directory.find_by_id(user_id)
        if user is None:
            raise NotFoundError("user not found")

        if not user.code_is_live(self._clock()):
            raise CodeExpiredError()
        if user.code is None or user.code != code:
            raise CodeMismatchError()

        try:
            self.directory.update(user_id, verified=True, code=None, expiry=None)
        except PersistenceError as exc:
            raise PersistenceError("unable to verify user") from exc
        logger.info("User %s verified", user_id)

    def become_seller(self, user_id: int, seller: SellerInput) -> str:
        """Promote the user to seller and register the payout account.

        The role change and the bank account are committed together.
        """

        user = self.directory.find_by_id(user_id)
        if user is None:
            raise NotFoundError("user not found")
        if user.role == SELLER:
            raise AlreadySellerError()

        with self.directory.transaction() as directory:
            seller_user = directory.update(
                user_id,
                commit=False,
                first_name=seller.first_name,
                last_name=seller.last_name,
                phone=seller.phone_number,
                role=SELLER,
            )
            directory.create_bank_account(
                user_id,
                bank_account=seller.bank_account_number,
                swift_code=seller.swift_code,
                payment_type=seller.payment_type,
                commit=False,
            )
            token = self.tokens.issue(seller_user.id, seller_user.email, seller_user.role)

        logger.info("User %s joined the seller program", user_id)
        return token
