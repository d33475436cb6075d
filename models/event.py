"""Event model definition."""

from datetime import UTC, datetime

from . import db


def _utcnow() -> datetime:
    return datetime.now(UTC).replace(tzinfo=None)


class Event(db.Model):
    """An event owned by its organizer."""

    __tablename__ = "events"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=True)
    date = db.Column(db.DateTime, nullable=False)
    location = db.Column(db.String(255), nullable=True)
    organizer_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at = db.Column(db.DateTime, nullable=False, default=_utcnow)
    updated_at = db.Column(
        db.DateTime, nullable=False, default=_utcnow, onupdate=_utcnow
    )

    organizer = db.relationship("User", back_populates="organized_events")
    participants = db.relationship(
        "EventParticipant",
        back_populates="event",
        cascade="all, delete-orphan",
        order_by="EventParticipant.created_at",
    )

    def to_dict(self, include_participants: bool = True) -> dict:
        """Serialize the event, optionally with its participant list."""

        data = {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "date": self.date.isoformat() if self.date else None,
            "location": self.location,
            "organizerId": self.organizer_id,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
        if include_participants:
            data["participants"] = [
                participant.to_dict(include_user=True)
                for participant in self.participants
            ]
        return data

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<Event id={self.id} organizer_id={self.organizer_id}>"
