"""Events blueprint with event CRUD and participant management."""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload

from models import db
from models.event import Event
from models.event_participant import (
    PARTICIPANT_STATUSES,
    STATUS_PENDING,
    EventParticipant,
)
from models.user import User
from services.credentials import Principal
from services.policy import can_perform, roles_for
from utils.auth_gate import authenticate, authorize
from utils.errors import BadRequest, Conflict, Forbidden, NotFound
from utils.request_validation import (
    choice_field,
    parse_datetime,
    parse_json_request,
    string_field,
)

events_bp = Blueprint("events", __name__)


def _get_event_or_404(event_id: int) -> Event:
    event = db.session.get(Event, event_id)
    if event is None:
        raise NotFound("Event not found.")
    return event


def _get_participant_or_404(event_id: int, user_id: int) -> EventParticipant:
    participant = db.session.get(EventParticipant, (user_id, event_id))
    if participant is None:
        raise NotFound("Participant not found.")
    return participant


def _require_owner(principal: Principal, action: str, event: Event) -> None:
    if not can_perform(principal, action, event):
        verb = action.split(":", 1)[1]
        raise Forbidden(f"You are not authorized to {verb} this event.")


@events_bp.route("", methods=["GET"])
@authenticate
@authorize(*roles_for("event:list"))
def list_events(principal: Principal):
    """List all events with their participants."""

    events = (
        Event.query.options(
            selectinload(Event.participants).selectinload(EventParticipant.user)
        )
        .order_by(Event.date.asc())
        .all()
    )
    return jsonify([event.to_dict() for event in events])


@events_bp.route("", methods=["POST"])
@authenticate
@authorize(*roles_for("event:create"))
def create_event(principal: Principal):
    """Create an event organized by the caller."""

    data = parse_json_request(request, required_keys=("title", "date"))
    event = Event(
        title=string_field(data, "title"),
        description=string_field(data, "description", nullable=True),
        date=parse_datetime(data.get("date")),
        location=string_field(data, "location", nullable=True),
        organizer_id=principal.id,
    )
    db.session.add(event)
    db.session.commit()

    current_app.logger.info("Event %s created by %s", event.id, principal.id)
    return jsonify(event.to_dict()), 201


@events_bp.route("/<int:event_id>", methods=["GET"])
@authenticate
@authorize(*roles_for("event:read"))
def get_event(event_id: int, principal: Principal):
    """Return one event with its participants."""

    return jsonify(_get_event_or_404(event_id).to_dict())


@events_bp.route("/<int:event_id>", methods=["PUT"])
@authenticate
def update_event(event_id: int, principal: Principal):
    """Update an event. Only its organizer or an admin may do so."""

    event = _get_event_or_404(event_id)
    _require_owner(principal, "event:update", event)

    data = parse_json_request(request, allow_empty=True)
    if "title" in data:
        event.title = string_field(data, "title")
    if "description" in data:
        event.description = string_field(data, "description", nullable=True)
    if "date" in data:
        event.date = parse_datetime(data.get("date"))
    if "location" in data:
        event.location = string_field(data, "location", nullable=True)

    db.session.commit()
    return jsonify(event.to_dict())


@events_bp.route("/<int:event_id>", methods=["DELETE"])
@authenticate
def delete_event(event_id: int, principal: Principal):
    """Delete an event and, by cascade, its participants."""

    event = _get_event_or_404(event_id)
    _require_owner(principal, "event:delete", event)

    db.session.delete(event)
    db.session.commit()

    current_app.logger.info("Event %s deleted by %s", event_id, principal.id)
    return jsonify({"message": "Event deleted successfully"})


@events_bp.route("/<int:event_id>/participants", methods=["POST"])
@authenticate
@authorize(*roles_for("participant:add"))
def add_participant(event_id: int, principal: Principal):
    """Add a user to an event. Adding the same user twice is a conflict."""

    data = parse_json_request(request, required_keys=("userId",))
    user_id = data.get("userId")
    if isinstance(user_id, bool) or not isinstance(user_id, int):
        raise BadRequest("userId must be an integer.")
    status = (
        choice_field(data, "status", PARTICIPANT_STATUSES)
        if data.get("status") is not None
        else STATUS_PENDING
    )

    _get_event_or_404(event_id)
    if db.session.get(User, user_id) is None:
        raise NotFound("User not found.")
    if db.session.get(EventParticipant, (user_id, event_id)) is not None:
        raise Conflict("User is already a participant of this event.")

    participant = EventParticipant(user_id=user_id, event_id=event_id, status=status)
    db.session.add(participant)
    try:
        db.session.commit()
    except IntegrityError as exc:
        db.session.rollback()
        raise Conflict("User is already a participant of this event.") from exc

    return jsonify(participant.to_dict(include_user=True)), 201


@events_bp.route("/<int:event_id>/participants/<int:user_id>", methods=["PUT"])
@authenticate
@authorize(*roles_for("participant:update"))
def update_participant(event_id: int, user_id: int, principal: Principal):
    """Change a participant's RSVP status."""

    participant = _get_participant_or_404(event_id, user_id)
    data = parse_json_request(request, required_keys=("status",))
    participant.status = choice_field(data, "status", PARTICIPANT_STATUSES)
    db.session.commit()

    return jsonify(participant.to_dict(include_user=True))


@events_bp.route("/<int:event_id>/participants/<int:user_id>", methods=["DELETE"])
@authenticate
@authorize(*roles_for("participant:remove"))
def remove_participant(event_id: int, user_id: int, principal: Principal):
    """Remove a user from an event."""

    participant = _get_participant_or_404(event_id, user_id)
    db.session.delete(participant)
    db.session.commit()

    return jsonify({"message": "Participant removed successfully"})
