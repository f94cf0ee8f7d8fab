"""Password hashing helpers."""

from __future__ import annotations

import logging

from werkzeug.security import check_password_hash, generate_password_hash

from .errors import PasswordMismatchError, WeakPasswordError

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 7
DEFAULT_HASH_METHOD = "pbkdf2:sha256:600000"


class CredentialHasher:
    """Salted one-way password hashing with a fixed work factor."""

    def __init__(self, method: str = DEFAULT_HASH_METHOD) -> None:
        self.method = method

    @staticmethod
    def _check_length(password: str | None) -> str:
        if password is None or len(password) < MIN_PASSWORD_LENGTH:
            raise WeakPasswordError()
        return password

    def hash(self, password: str) -> str:
        """Return a salted hash, rejecting passwords of six characters or fewer."""

        password = self._check_length(password)
        return generate_password_hash(password, method=self.method)

    def verify(self, plain_password: str, hashed_password: str) -> None:
        """Raise unless ``plain_password`` matches ``hashed_password``."""

        plain_password = self._check_length(plain_password)
        try:
            matches = check_password_hash(hashed_password or "", plain_password)
        except (TypeError, ValueError):
            logger.warning("Stored password hash could not be checked", exc_info=True)
            matches = False
        if not matches:
            raise PasswordMismatchError()
