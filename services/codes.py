"""Verification code generation."""

from __future__ import annotations

import secrets

from .errors import CodeGenerationError


def generate_code(digits: int = 6) -> int:
    """Return a uniformly random integer with exactly ``digits`` digits."""

    if digits < 1:
        raise ValueError("digits must be positive")
    low = 10 ** (digits - 1)
    high = 10**digits
    try:
        return low + secrets.randbelow(high - low)
    except (OSError, NotImplementedError) as exc:
        raise CodeGenerationError() from exc
