"""User management blueprint."""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request
from sqlalchemy.exc import IntegrityError

from models import db
from models.user import ROLES, User
from services.credentials import Principal
from services.policy import roles_for
from utils.auth_gate import authenticate, authorize
from utils.errors import Conflict, NotFound
from utils.request_validation import choice_field, parse_json_request, string_field

users_bp = Blueprint("users", __name__)


def _get_user_or_404(user_id: int) -> User:
    user = db.session.get(User, user_id)
    if user is None:
        raise NotFound("User not found.")
    return user


@users_bp.route("", methods=["GET"])
@authenticate
@authorize(*roles_for("user:list"))
def list_users(principal: Principal):
    """List every user."""

    users = User.query.order_by(User.id.asc()).all()
    return jsonify([user.to_dict() for user in users])


@users_bp.route("/<int:user_id>", methods=["GET"])
@authenticate
@authorize(*roles_for("user:read"))
def get_user(user_id: int, principal: Principal):
    """Return a user with the events they take part in."""

    user = _get_user_or_404(user_id)
    return jsonify(user.to_dict(include_events=True))


@users_bp.route("/<int:user_id>", methods=["PUT"])
@authenticate
@authorize(*roles_for("user:update"))
def update_user(user_id: int, principal: Principal):
    """Apply the fields present in the body; absent fields stay unchanged."""

    user = _get_user_or_404(user_id)
    data = parse_json_request(request, allow_empty=True)

    if "name" in data:
        user.name = string_field(data, "name")
    if "email" in data:
        email = string_field(data, "email")
        if email != user.email and User.query.filter_by(email=email).first() is not None:
            raise Conflict("User with this email already exists.")
        user.email = email
    if "role" in data:
        user.role = choice_field(data, "role", ROLES)
    if "password" in data:
        user.set_password(string_field(data, "password"))

    try:
        db.session.commit()
    except IntegrityError as exc:
        db.session.rollback()
        raise Conflict("User with this email already exists.") from exc

    current_app.logger.info("User %s updated by %s", user.id, principal.id)
    return jsonify(user.to_dict())


@users_bp.route("/<int:user_id>", methods=["DELETE"])
@authenticate
@authorize(*roles_for("user:delete"))
def delete_user(user_id: int, principal: Principal):
    """Delete a user together with their events and participations."""

    user = _get_user_or_404(user_id)
    db.session.delete(user)
    db.session.commit()

    current_app.logger.info("User %s deleted by %s", user_id, principal.id)
    return jsonify({"message": "User deleted successfully"})
