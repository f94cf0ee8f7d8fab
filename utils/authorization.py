"""Bearer-token gates for Flask views."""

from __future__ import annotations

from functools import wraps

from flask import g, request

from models.user import SELLER
from services import get_services
from services.errors import AuthorizationError
from services.permissions import require_capability
from services.tokens import Identity


def _resolve_identity() -> Identity:
    header = request.headers.get("Authorization")
    return get_services().tokens.validate(header)


def authorize(view):
    """Require a valid bearer token and expose the caller as ``g.identity``."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        g.identity = require_capability(_resolve_identity())
        return view(*args, **kwargs)

    return wrapper


def authorize_seller(view):
    """Like ``authorize`` but the caller must also hold the seller role."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        g.identity = require_capability(_resolve_identity(), role=SELLER)
        return view(*args, **kwargs)

    return wrapper


def current_identity() -> Identity:
    identity = g.get("identity")
    if identity is None:
        raise AuthorizationError()
    return identity
