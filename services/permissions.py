"""Capability checks shared by the middleware and the services."""

from __future__ import annotations

from .errors import AuthorizationError, OwnershipError, RoleRequiredError
from .tokens import Identity


def require_capability(
    identity: Identity | None,
    *,
    role: str | None = None,
    owner_id: int | None = None,
) -> Identity:
    """Return ``identity`` if it holds ``role`` and owns ``owner_id``.

    Either check is skipped when its argument is ``None``.
    """

    if identity is None or identity.user_id <= 0:
        raise AuthorizationError()
    if role is not None and identity.role != role:
        raise RoleRequiredError()
    if owner_id is not None and identity.user_id != owner_id:
        raise OwnershipError()
    return identity
