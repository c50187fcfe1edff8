"""Access policy — who may perform which review and park transition.

The identity provider hands over a user id and a role; an absent user id
means the request is unauthenticated. Checks raise before any store access
that mutates state.
"""

from dataclasses import dataclass
from enum import Enum

from parks.shared.errors import ForbiddenError, UnauthenticatedError


class Role(Enum):
    USER = "USER"
    ADMIN = "ADMIN"


@dataclass(frozen=True)
class Actor:
    """The authenticated caller of an operation."""

    user_id: str
    role: str = Role.USER.value

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value


def actor_from(user_id, role=None) -> Actor | None:
    """Build an Actor from identity-provider values, or None when unauthenticated.

    Unknown roles are treated as plain users.
    """
    if user_id is None or not str(user_id).strip():
        return None

    normalized = str(role).upper() if role else Role.USER.value
    if normalized not in {r.value for r in Role}:
        normalized = Role.USER.value
    return Actor(user_id=str(user_id).strip(), role=normalized)


def require_authenticated(actor: Actor | None) -> Actor:
    if actor is None:
        raise UnauthenticatedError()
    return actor


def require_admin(actor: Actor | None) -> Actor:
    actor = require_authenticated(actor)
    if not actor.is_admin:
        raise ForbiddenError("Administrator role required")
    return actor


def require_owner(actor: Actor | None, owner_id) -> Actor:
    """Only the owner; admins get no override (used for content edits)."""
    actor = require_authenticated(actor)
    if actor.user_id != str(owner_id):
        raise ForbiddenError("Only the author can change this review")
    return actor


def require_owner_or_admin(actor: Actor | None, owner_id) -> Actor:
    actor = require_authenticated(actor)
    if actor.is_admin or actor.user_id == str(owner_id):
        return actor
    raise ForbiddenError("Only the author or an administrator can do this")
