"""Role and ownership rules, evaluated in one place."""

from __future__ import annotations

from typing import Callable

from models.user import ROLE_ADMIN, ROLE_ORGANIZER, ROLES
from services.credentials import Principal

EVENT_MANAGERS = (ROLE_ADMIN, ROLE_ORGANIZER)
ADMINS_ONLY = (ROLE_ADMIN,)
ANY_ROLE = ROLES


def _organizer_or_admin(actor: Principal, resource) -> bool:
    return actor.role == ROLE_ADMIN or resource.organizer_id == actor.id


# action -> (allowed roles, ownership check applied when a resource is given)
POLICIES: dict[str, tuple[tuple[str, ...], Callable[[Principal, object], bool] | None]] = {
    "user:list": (EVENT_MANAGERS, None),
    "user:read": (ANY_ROLE, None),
    "user:update": (ADMINS_ONLY, None),
    "user:delete": (ADMINS_ONLY, None),
    "event:list": (ANY_ROLE, None),
    "event:read": (ANY_ROLE, None),
    "event:create": (EVENT_MANAGERS, None),
    "event:update": (ANY_ROLE, _organizer_or_admin),
    "event:delete": (ANY_ROLE, _organizer_or_admin),
    "participant:add": (EVENT_MANAGERS, None),
    "participant:update": (EVENT_MANAGERS, None),
    "participant:remove": (EVENT_MANAGERS, None),
}


def roles_for(action: str) -> tuple[str, ...]:
    """Roles allowed to attempt ``action`` before any resource is loaded."""

    return POLICIES[action][0]


def can_perform(actor: Principal | None, action: str, resource=None) -> bool:
    """Return True when ``actor`` may perform ``action`` on ``resource``.

    Unknown actions are denied.
    """

    if actor is None or action not in POLICIES:
        return False
    roles, ownership = POLICIES[action]
    if actor.role not in roles:
        return False
    if ownership is not None and resource is not None:
        return ownership(actor, resource)
    return True
