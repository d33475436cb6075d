"""Account lifecycle: register, verify, login and admin seeding.

A user moves ``Registered (unverified) -> Verified`` exactly once. Mail is
sent only after the state change is committed, and a mail failure never
undoes or fails the request.
"""

from __future__ import annotations

from typing import Callable

from flask import current_app
from sqlalchemy.exc import IntegrityError

from models import db
from models.user import ROLE_ADMIN, ROLE_PARTICIPANT, User
from notifications import get_mailer
from services.credentials import generate_verification_code, issue_token
from utils.errors import (
    AccountNotVerified,
    Conflict,
    InvalidCode,
    InvalidCredentials,
    NotFound,
)


def _find_by_email(email: str) -> User | None:
    return User.query.filter_by(email=email).first()


def _dispatch(send: Callable[..., None], *args) -> None:
    try:
        send(*args)
    except Exception:
        current_app.logger.exception("Failed to send %s to %s", send.__name__, args[0])


def register(email: str, name: str, password: str) -> User:
    """Create an unverified participant and email them a verification code."""

    if _find_by_email(email) is not None:
        raise Conflict("User with this email already exists.")

    code = generate_verification_code()
    user = User(email=email, name=name, role=ROLE_PARTICIPANT, verification_code=code)
    user.set_password(password)
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError as exc:
        db.session.rollback()
        raise Conflict("User with this email already exists.") from exc

    current_app.logger.info("Registered user %s", user.id)
    _dispatch(get_mailer().send_verification_email, user.email, user.name, code)
    return user


def verify(email: str, code: str) -> User:
    """Mark the account verified when ``code`` matches the stored one."""

    user = _find_by_email(email)
    if user is None:
        raise NotFound("User not found.")
    if user.is_verified:
        raise Conflict("Account already verified.")
    if user.verification_code is None or user.verification_code != code:
        current_app.logger.info("Invalid verification code for user %s", user.id)
        raise InvalidCode("Invalid verification code.")

    if not user.mark_verified():
        db.session.rollback()
        raise Conflict("Account already verified.")
    db.session.commit()

    current_app.logger.info("Verified user %s", user.id)
    _dispatch(get_mailer().send_confirmation_email, user.email, user.name, code)
    return user


def login(email: str, password: str) -> tuple[str, User]:
    """Return an access token and the user for valid, verified credentials."""

    user = _find_by_email(email)
    # Same error for an unknown email and a wrong password.
    if user is None:
        raise InvalidCredentials("Invalid credentials.")
    if not user.is_verified:
        raise AccountNotVerified()
    if not user.check_password(password):
        current_app.logger.info("Failed login for user %s", user.id)
        raise InvalidCredentials("Invalid credentials.")

    return issue_token(user), user


def ensure_admin() -> tuple[User, bool]:
    """Create the configured administrator unless an ADMIN already exists.

    Returns the admin and whether it was created by this call.
    """

    existing = User.query.filter_by(role=ROLE_ADMIN).first()
    if existing is not None:
        return existing, False

    config = current_app.config
    admin = User(
        email=config.get("SEED_ADMIN_EMAIL", "admin@example.com"),
        name=config.get("SEED_ADMIN_NAME", "Admin"),
        role=ROLE_ADMIN,
        is_verified=True,
    )
    admin.set_password(config.get("SEED_ADMIN_PASSWORD", "admin123"))
    db.session.add(admin)
    try:
        db.session.commit()
    except IntegrityError as exc:
        db.session.rollback()
        raise Conflict("Seed admin email is already taken by another user.") from exc

    current_app.logger.info("Seeded admin user %s", admin.email)
    return admin, True
