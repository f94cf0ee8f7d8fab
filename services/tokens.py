"""Signed identity tokens.

Tokens are stateless HMAC-signed JWTs carrying ``user_id``, ``email``,
``role`` and an absolute ``exp``. Validation never consults the database,
so the identity it returns reflects the user as of issuance.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from datetime import UTC, datetime, timedelta
from typing import Callable

import jwt

from config import HMAC_ALGORITHMS, Settings

from .errors import (
    BadSignatureError,
    InvalidClaimsError,
    MalformedTokenError,
    MissingClaimsError,
    TokenExpiredError,
    WrongSchemeError,
)

logger = logging.getLogger(__name__)

BEARER_SCHEME = "Bearer"
_REQUIRED_CLAIMS = ["exp", "user_id", "email", "role"]

Clock = Callable[[], datetime]


def _system_clock() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True)
class Identity:
    """The caller as described by a validated token."""

    user_id: int
    email: str
    role: str

    def to_dict(self) -> dict:
        return asdict(self)


class TokenService:
    """Issue and validate bearer tokens with a symmetric secret."""

    def __init__(self, settings: Settings, clock: Clock = _system_clock) -> None:
        self._secret = settings.app_secret
        self._algorithm = settings.jwt_algorithm
        self._lifetime: timedelta = settings.token_lifetime
        self._clock = clock

    def issue(self, user_id: int, email: str, role: str) -> str:
        """Return a signed token valid for the configured lifetime."""

        if not user_id or not email or not role:
            raise MissingClaimsError()

        expires_at = self._clock() + self._lifetime
        payload = {
            "user_id": int(user_id),
            "email": email,
            "role": role,
            "exp": int(expires_at.timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def validate(self, header_value: str | None) -> Identity:
        """Validate an ``Authorization`` header value and return its identity."""

        if not header_value:
            raise MalformedTokenError("authorization header is missing")

        parts = header_value.split(" ")
        if len(parts) != 2:
            raise MalformedTokenError()
        scheme, token = parts
        if scheme != BEARER_SCHEME:
            raise WrongSchemeError()

        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=list(HMAC_ALGORITHMS),
                options={"require": _REQUIRED_CLAIMS, "verify_exp": False},
            )
        except (jwt.InvalidAlgorithmError, jwt.InvalidSignatureError) as exc:
            logger.info("Rejected token signature: %s", exc)
            raise BadSignatureError() from exc
        except jwt.MissingRequiredClaimError as exc:
            raise InvalidClaimsError() from exc
        except jwt.DecodeError as exc:
            raise MalformedTokenError("token could not be decoded") from exc
        except jwt.InvalidTokenError as exc:
            raise InvalidClaimsError() from exc

        expires = claims.get("exp")
        if not isinstance(expires, (int, float)):
            raise InvalidClaimsError()
        if self._clock().timestamp() >= expires:
            raise TokenExpiredError()

        return self._identity_from_claims(claims)

    @staticmethod
    def _identity_from_claims(claims: dict) -> Identity:
        user_id = claims.get("user_id")
        email = claims.get("email")
        role = claims.get("role")
        if isinstance(user_id, bool) or not isinstance(user_id, int) or user_id <= 0:
            raise InvalidClaimsError()
        if not isinstance(email, str) or not email:
            raise InvalidClaimsError()
        if not isinstance(role, str) or not role:
            raise InvalidClaimsError()
        return Identity(user_id=user_id, email=email, role=role)
