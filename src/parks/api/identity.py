"""Request identity — who is calling.

Sign-in lives outside this service; the gateway in front of it forwards the
caller as ``X-User-Id`` and ``X-User-Role`` headers. A missing user id means
the request is anonymous.
"""

from fastapi import Header

from parks.shared.access import Actor, actor_from


def current_actor(
    x_user_id: str | None = Header(default=None),
    x_user_role: str | None = Header(default=None),
) -> Actor | None:
    return actor_from(x_user_id, x_user_role)
