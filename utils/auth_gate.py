"""View decorators enforcing authentication and role authorization.

``authenticate`` must be the outer decorator; ``authorize`` reads the
principal that ``authenticate`` passes down::

    @bp.route("", methods=["GET"])
    @authenticate
    @authorize(ROLE_ADMIN, ROLE_ORGANIZER)
    def list_things(principal): ...
"""

from __future__ import annotations

from functools import wraps
from typing import Callable

from flask import current_app, g, request

from services.credentials import Principal, verify_token
from utils.errors import Forbidden, InvalidToken, Unauthenticated


def _bearer_token() -> str:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme != "Bearer" or not token.strip():
        raise Unauthenticated("Unauthorized: No token provided.")
    return token.strip()


def authenticate(view: Callable) -> Callable:
    """Require a valid bearer token and pass the caller as ``principal``."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        token = _bearer_token()
        try:
            principal = verify_token(token)
        except InvalidToken as exc:
            current_app.logger.info("Rejected token on %s: %s", request.path, exc)
            raise Unauthenticated("Unauthorized: Invalid token.") from exc
        g.principal = principal
        return view(*args, principal=principal, **kwargs)

    wrapper.requires_auth = True
    return wrapper


def authorize(*roles: str) -> Callable[[Callable], Callable]:
    """Allow the view only for principals whose role is in ``roles``."""

    allowed = frozenset(roles)

    def decorator(view: Callable) -> Callable:
        @wraps(view)
        def wrapper(*args, principal: Principal | None = None, **kwargs):
            if principal is None:
                raise Unauthenticated("Unauthorized: User not authenticated.")
            if principal.role not in allowed:
                raise Forbidden("Forbidden: Insufficient permissions.")
            return view(*args, principal=principal, **kwargs)

        wrapper.required_roles = tuple(roles)
        return wrapper

    return decorator
