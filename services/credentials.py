"""Password hashing, access tokens and verification codes."""

from __future__ import annotations

import random
import string
from dataclasses import dataclass
from typing import Any

from flask_jwt_extended import create_access_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError
from werkzeug.security import check_password_hash, generate_password_hash

from utils.errors import InvalidToken

VERIFICATION_CODE_LENGTH = 6
VERIFICATION_CODE_ALPHABET = string.ascii_uppercase + string.digits


@dataclass(frozen=True)
class Principal:
    """The authenticated caller, decoded from a verified access token."""

    id: int
    email: str
    role: str

    @classmethod
    def from_claims(cls, claims: dict[str, Any]) -> "Principal":
        try:
            return cls(
                id=int(claims["id"]),
                email=str(claims["email"]),
                role=str(claims["role"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise InvalidToken("Token is missing identity claims.") from exc


def hash_password(password: str) -> str:
    """Return a salted one-way hash of ``password``."""

    return generate_password_hash(password)


def verify_password(password: str, password_hash: str | None) -> bool:
    """Check ``password`` against a stored hash without raising on mismatch."""

    if not password or not password_hash:
        return False
    try:
        return check_password_hash(password_hash, password)
    except (TypeError, ValueError):
        return False


def issue_token(user) -> str:
    """Sign an access token carrying the user's id, email and role.

    Lifetime comes from ``JWT_ACCESS_TOKEN_EXPIRES``.
    """

    return create_access_token(
        identity=str(user.id),
        additional_claims={"id": user.id, "email": user.email, "role": user.role},
    )


def verify_token(token: str) -> Principal:
    """Decode ``token`` and return its principal.

    Raises ``InvalidToken`` for bad signatures, malformed or expired tokens.
    """

    if not token:
        raise InvalidToken("Token is empty.")
    try:
        claims = decode_token(token)
    except (PyJWTError, JWTExtendedException) as exc:
        raise InvalidToken(str(exc)) from exc
    if claims.get("type") != "access":
        raise InvalidToken("Only access tokens are accepted.")
    return Principal.from_claims(claims)


def generate_verification_code(length: int = VERIFICATION_CODE_LENGTH) -> str:
    # Emailed one-time code, not a secret: the random module is enough.
    return "".join(random.choices(VERIFICATION_CODE_ALPHABET, k=length))
