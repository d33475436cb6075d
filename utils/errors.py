"""HTTP error types raised by services and routes.

Every class is a Werkzeug ``HTTPException`` so the application-wide JSON
handler renders it with its ``name`` as the ``error`` field.
"""

from __future__ import annotations

from werkzeug.exceptions import BadRequest, Forbidden, HTTPException, NotFound, Unauthorized

__all__ = [
    "AccountNotVerified",
    "BadRequest",
    "Conflict",
    "Forbidden",
    "InvalidCode",
    "InvalidCredentials",
    "InvalidToken",
    "NotFound",
    "Unauthenticated",
]


class InvalidToken(Exception):
    """Raised by the credential service when a token cannot be trusted."""


class Unauthenticated(Unauthorized):
    name = "Unauthenticated"
    description = "Authentication is required."


class Conflict(HTTPException):
    """Duplicate resource or invalid state transition. Reported as 400."""

    code = 400
    name = "Conflict"
    description = "The request conflicts with the current state of the resource."


class InvalidCredentials(Unauthorized):
    name = "Invalid Credentials"
    description = "Invalid credentials."


class InvalidCode(HTTPException):
    code = 400
    name = "Invalid Code"
    description = "Invalid verification code."


class AccountNotVerified(Forbidden):
    name = "Account Not Verified"
    description = "Account not verified. Please verify your account first."
