"""Tests for the user management endpoints."""

from __future__ import annotations

from datetime import datetime

from models import db
from models.event import Event
from models.event_participant import EventParticipant
from models.user import User


def _event(app, organizer_id: int, title: str = "Party") -> int:
    with app.app_context():
        event = Event(title=title, date=datetime(2030, 5, 1, 18, 0), organizer_id=organizer_id)
        db.session.add(event)
        db.session.commit()
        return event.id


def test_list_users_hides_secrets(client, make_user, auth_headers):
    admin_id = make_user("admin@example.com", role="ADMIN")
    make_user("p@example.com")

    response = client.get("/users", headers=auth_headers(admin_id))

    assert response.status_code == 200
    users = response.get_json()
    assert [u["email"] for u in users] == ["admin@example.com", "p@example.com"]
    for user in users:
        assert set(user) == {"id", "email", "name", "role", "isVerified", "createdAt"}


def test_get_user_includes_events(app, client, make_user, auth_headers):
    organizer_id = make_user("org@example.com", role="ORGANIZER")
    member_id = make_user("member@example.com")
    event_id = _event(app, organizer_id, "Launch")
    with app.app_context():
        db.session.add(EventParticipant(user_id=member_id, event_id=event_id, status="CONFIRMED"))
        db.session.commit()

    response = client.get(f"/users/{member_id}", headers=auth_headers(member_id))

    assert response.status_code == 200
    payload = response.get_json()
    assert payload["email"] == "member@example.com"
    assert len(payload["events"]) == 1
    assert payload["events"][0]["status"] == "CONFIRMED"
    assert payload["events"][0]["event"]["title"] == "Launch"


def test_get_missing_user_is_not_found(client, make_user, auth_headers):
    headers = auth_headers(make_user("any@example.com"))

    assert client.get("/users/999", headers=headers).status_code == 404


def test_partial_update_only_touches_given_fields(app, client, make_user, auth_headers):
    admin_id = make_user("admin@example.com", role="ADMIN")
    target_id = make_user("target@example.com", "KeepMe123", role="ORGANIZER", name="Old")
    with app.app_context():
        before_hash = db.session.get(User, target_id).password_hash

    response = client.put(
        f"/users/{target_id}", json={"name": "New"}, headers=auth_headers(admin_id)
    )

    assert response.status_code == 200
    assert response.get_json()["name"] == "New"
    with app.app_context():
        user = db.session.get(User, target_id)
        assert user.name == "New"
        assert user.email == "target@example.com"
        assert user.role == "ORGANIZER"
        assert user.password_hash == before_hash


def test_empty_update_leaves_user_unchanged(app, client, make_user, auth_headers):
    admin_id = make_user("admin@example.com", role="ADMIN")
    target_id = make_user("still@example.com", role="ORGANIZER", name="Still")
    with app.app_context():
        before_hash = db.session.get(User, target_id).password_hash

    response = client.put(f"/users/{target_id}", json={}, headers=auth_headers(admin_id))

    assert response.status_code == 200
    assert response.get_json()["name"] == "Still"
    with app.app_context():
        user = db.session.get(User, target_id)
        assert user.name == "Still"
        assert user.email == "still@example.com"
        assert user.role == "ORGANIZER"
        assert user.password_hash == before_hash


def test_update_password_and_role(app, client, make_user, auth_headers):
    admin_id = make_user("admin@example.com", role="ADMIN")
    target_id = make_user("promote@example.com", "OldPass123")

    response = client.put(
        f"/users/{target_id}",
        json={"role": "ORGANIZER", "password": "NewPass456"},
        headers=auth_headers(admin_id),
    )

    assert response.status_code == 200
    assert response.get_json()["role"] == "ORGANIZER"
    login = client.post(
        "/auth/login", json={"email": "promote@example.com", "password": "NewPass456"}
    )
    assert login.status_code == 200


def test_update_rejects_unknown_role_and_taken_email(client, make_user, auth_headers):
    admin_headers = auth_headers(make_user("admin@example.com", role="ADMIN"))
    target_id = make_user("target@example.com")
    make_user("taken@example.com")

    bad_role = client.put(f"/users/{target_id}", json={"role": "OWNER"}, headers=admin_headers)
    taken = client.put(
        f"/users/{target_id}", json={"email": "taken@example.com"}, headers=admin_headers
    )

    assert bad_role.status_code == 400
    assert taken.status_code == 400
    assert taken.get_json()["error"] == "Conflict"


def test_only_admin_can_update_or_delete(client, make_user, auth_headers):
    organizer_headers = auth_headers(make_user("org@example.com", role="ORGANIZER"))
    target_id = make_user("target@example.com")

    assert client.put(
        f"/users/{target_id}", json={"name": "X"}, headers=organizer_headers
    ).status_code == 403
    assert client.delete(f"/users/{target_id}", headers=organizer_headers).status_code == 403


def test_update_missing_user_is_not_found(client, make_user, auth_headers):
    admin_headers = auth_headers(make_user("admin@example.com", role="ADMIN"))

    response = client.put("/users/404", json={"name": "X"}, headers=admin_headers)

    assert response.status_code == 404


def test_delete_user_cascades(app, client, make_user, auth_headers):
    admin_id = make_user("admin@example.com", role="ADMIN")
    organizer_id = make_user("org@example.com", role="ORGANIZER")
    member_id = make_user("member@example.com")
    event_id = _event(app, organizer_id)
    other_event_id = _event(app, admin_id, "Admin event")
    with app.app_context():
        db.session.add(EventParticipant(user_id=member_id, event_id=event_id))
        db.session.add(EventParticipant(user_id=organizer_id, event_id=other_event_id))
        db.session.commit()

    response = client.delete(f"/users/{organizer_id}", headers=auth_headers(admin_id))

    assert response.status_code == 200
    with app.app_context():
        assert db.session.get(User, organizer_id) is None
        assert db.session.get(Event, event_id) is None
        assert db.session.get(Event, other_event_id) is not None
        assert EventParticipant.query.count() == 0

    assert client.delete(f"/users/{organizer_id}", headers=auth_headers(admin_id)).status_code == 404
