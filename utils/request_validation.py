"""Utilities for validating incoming Flask requests."""

from __future__ import annotations

import math
from typing import Iterable

from flask import Request
from werkzeug.exceptions import BadRequest


def parse_json_request(
    req: Request,
    *,
    required_keys: Iterable[str] | None = None,
    allow_empty: bool = False,
) -> dict:
    """Return the parsed JSON body or raise a 400 error."""

    if not req.is_json:
        raise BadRequest("Request content type must be application/json.")

    data = req.get_json(silent=True)
    if data is None:
        raise BadRequest("please provide valid inputs")

    if not isinstance(data, dict):
        raise BadRequest("Request JSON payload must be an object.")

    if not data and not allow_empty:
        raise BadRequest("Request JSON body must not be empty.")

    if required_keys:
        missing = [key for key in required_keys if data.get(key) in (None, "")]
        if missing:
            raise BadRequest(
                "Missing required fields: {}.".format(", ".join(sorted(missing)))
            )

    return data


# Signed 32-bit range shared by the Integer columns.
INT_MIN = -(2**31)
INT_MAX = 2**31 - 1


def coerce_int(data: dict, key: str, default: int = 0) -> int:
    """Read an integer field, rejecting booleans, fractions and out-of-range values."""

    value = data.get(key)
    if value in (None, ""):
        return default
    if isinstance(value, bool):
        raise BadRequest(f"{key} must be an integer")
    if isinstance(value, float) and not value.is_integer():
        raise BadRequest(f"{key} must be an integer")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise BadRequest(f"{key} must be an integer") from None
    if not INT_MIN <= number <= INT_MAX:
        raise BadRequest(f"{key} is out of range")
    return number


def coerce_float(
    data: dict, key: str, default: float = 0, maximum: float | None = None
) -> float:
    value = data.get(key)
    if value in (None, ""):
        return default
    if isinstance(value, bool):
        raise BadRequest(f"{key} must be numeric")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise BadRequest(f"{key} must be numeric") from None
    if not math.isfinite(number):
        raise BadRequest(f"{key} must be a finite number")
    if maximum is not None and abs(number) > maximum:
        raise BadRequest(f"{key} is out of range")
    return number


def coerce_str(data: dict, key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, (str, int, float)) or isinstance(value, bool):
        raise BadRequest(f"{key} must be a string")
    return str(value).strip()
