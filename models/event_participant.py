"""EventParticipant model definition."""

from datetime import UTC, datetime

from . import db


STATUS_PENDING = "PENDING"
STATUS_CONFIRMED = "CONFIRMED"
STATUS_DECLINED = "DECLINED"
PARTICIPANT_STATUSES = (STATUS_PENDING, STATUS_CONFIRMED, STATUS_DECLINED)


def _utcnow() -> datetime:
    return datetime.now(UTC).replace(tzinfo=None)


class EventParticipant(db.Model):
    """Links a user to an event. One row per (user, event) pair."""

    __tablename__ = "event_participants"

    user_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    event_id = db.Column(
        db.Integer,
        db.ForeignKey("events.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )
    status = db.Column(
        db.Enum(*PARTICIPANT_STATUSES, name="participant_status"),
        nullable=False,
        default=STATUS_PENDING,
        server_default=STATUS_PENDING,
    )
    created_at = db.Column(db.DateTime, nullable=False, default=_utcnow)
    updated_at = db.Column(
        db.DateTime, nullable=False, default=_utcnow, onupdate=_utcnow
    )

    user = db.relationship("User", back_populates="participations")
    event = db.relationship("Event", back_populates="participants")

    def to_dict(self, include_user: bool = False, include_event: bool = False) -> dict:
        data = {
            "userId": self.user_id,
            "eventId": self.event_id,
            "status": self.status,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
        if include_user and self.user is not None:
            data["user"] = {
                "id": self.user.id,
                "name": self.user.name,
                "email": self.user.email,
            }
        if include_event and self.event is not None:
            data["event"] = self.event.to_dict(include_participants=False)
        return data

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return (
            f"<EventParticipant user_id={self.user_id} "
            f"event_id={self.event_id} status={self.status}>"
        )
