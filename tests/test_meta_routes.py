"""Tests for the seed and docs endpoints."""

from __future__ import annotations

from models.user import User


def test_seed_is_idempotent(app, client):
    first = client.get("/seed")
    second = client.get("/seed")

    assert first.status_code == 200
    assert first.get_json()["message"] == "Database seeded successfully"
    admin = first.get_json()["admin"]
    assert admin["role"] == "ADMIN"
    assert admin["isVerified"] is True
    assert "password_hash" not in admin

    assert second.status_code == 200
    assert second.get_json() == {"message": "Admin user already exists"}
    with app.app_context():
        assert User.query.filter_by(role="ADMIN").count() == 1


def test_seeded_admin_can_log_in(client):
    client.get("/seed")

    response = client.post(
        "/auth/login", json={"email": "admin@example.com", "password": "admin123"}
    )

    assert response.status_code == 200
    assert response.get_json()["user"]["role"] == "ADMIN"


def test_seed_skips_when_any_admin_exists(app, client, make_user):
    make_user("other-admin@example.com", role="ADMIN")

    response = client.get("/seed")

    assert response.get_json() == {"message": "Admin user already exists"}
    with app.app_context():
        assert User.query.filter_by(email="admin@example.com").first() is None


def test_docs_catalog_reports_auth_requirements(client):
    response = client.get("/docs")

    assert response.status_code == 200
    catalog = response.get_json()
    assert catalog["version"]
    entries = {(e["path"], e["method"]): e for e in catalog["endpoints"]}

    assert entries[("/auth/register", "POST")]["auth"] is None
    assert entries[("/users", "GET")]["auth"] == "Bearer token"
    assert set(entries[("/users", "GET")]["roles"]) == {"ADMIN", "ORGANIZER"}
    assert entries[("/users/<int:user_id>", "PUT")]["roles"] == ["ADMIN"]
    assert entries[("/events/<int:event_id>", "PUT")]["auth"] == "Bearer token"
    assert entries[("/events/<int:event_id>", "PUT")]["roles"] is None
    removal = entries[("/events/<int:event_id>/participants/<int:user_id>", "DELETE")]
    assert removal["description"] == "Remove a user from an event."
    assert all(entry["description"] for entry in entries.values())
    assert ("/seed", "GET") in entries
    assert entries[("/events", "POST")]["description"] == "Create an event organized by the caller."
