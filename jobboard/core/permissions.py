"""
Authorization gate.

Two rule families guard every mutating operation:
- role-required: the caller's role must be in an allowed set
- owner-or-admin: the caller owns the resource, or is an admin

The predicates are pure functions of (identity, resource owner) so they can
be checked without a request. Failures raise Forbidden (403); a missing or
bad token is reported earlier as Unauthenticated (401).
"""

from typing import Callable

from fastapi import Depends

from jobboard.core.auth import Identity, get_current_identity
from jobboard.core.errors import Forbidden
from jobboard.models import UserRole


def has_role(identity: Identity, *roles: UserRole) -> bool:
    return identity.role in roles


def is_owner_or_admin(identity: Identity, owner_user_id: int) -> bool:
    return identity.user_id == owner_user_id or identity.role == UserRole.ADMIN


def ensure_role(identity: Identity, *roles: UserRole) -> None:
    if not has_role(identity, *roles):
        names = " or ".join(role.value.capitalize() for role in roles)
        raise Forbidden(f"Access denied: {names} role required")


def ensure_owner_or_admin(identity: Identity, owner_user_id: int, message: str) -> None:
    if not is_owner_or_admin(identity, owner_user_id):
        raise Forbidden(message)


def require_role(*roles: UserRole) -> Callable:
    """Build a dependency that authenticates the caller and checks the role."""

    async def dependency(identity: Identity = Depends(get_current_identity)) -> Identity:
        ensure_role(identity, *roles)
        return identity

    return dependency
