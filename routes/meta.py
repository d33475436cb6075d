"""Unauthenticated service endpoints: health check, admin seeding and API docs."""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify

from services import accounts

meta_bp = Blueprint("meta", __name__)

API_TITLE = "Event RSVP API"
API_VERSION = "1.0.0"
_HIDDEN_METHODS = {"HEAD", "OPTIONS"}


@meta_bp.route("/health", methods=["GET"])
def health_check():
    """Report that the service is up."""
    return jsonify({"status": "ok"})


@meta_bp.route("/seed", methods=["GET"])
def seed():
    """Create the initial administrator if no admin exists yet."""

    admin, created = accounts.ensure_admin()
    if not created:
        return jsonify({"message": "Admin user already exists"})
    return jsonify({"message": "Database seeded successfully", "admin": admin.to_dict()})


def _describe(view) -> str:
    doc = (view.__doc__ or "").strip()
    return doc.splitlines()[0] if doc else ""


@meta_bp.route("/docs", methods=["GET"])
def docs():
    """Machine-readable catalog of every endpoint."""

    endpoints = []
    for rule in current_app.url_map.iter_rules():
        if rule.endpoint == "static":
            continue
        view = current_app.view_functions[rule.endpoint]
        roles = getattr(view, "required_roles", None)
        for method in sorted((rule.methods or set()) - _HIDDEN_METHODS):
            endpoints.append(
                {
                    "path": rule.rule,
                    "method": method,
                    "description": _describe(view),
                    "auth": "Bearer token" if getattr(view, "requires_auth", False) else None,
                    "roles": list(roles) if roles else None,
                }
            )
    endpoints.sort(key=lambda item: (item["path"], item["method"]))

    return jsonify(
        {
            "title": API_TITLE,
            "version": API_VERSION,
            "description": "Registration, email verification, login and event RSVP management.",
            "endpoints": endpoints,
        }
    )
