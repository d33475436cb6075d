"""User model definition."""

from datetime import UTC, datetime

from services.credentials import hash_password, verify_password

from . import db


ROLE_ADMIN = "ADMIN"
ROLE_ORGANIZER = "ORGANIZER"
ROLE_PARTICIPANT = "PARTICIPANT"
ROLES = (ROLE_ADMIN, ROLE_ORGANIZER, ROLE_PARTICIPANT)


def _utcnow() -> datetime:
    return datetime.now(UTC).replace(tzinfo=None)


class User(db.Model):
    """Represents a platform user."""

    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False)
    name = db.Column(db.String(255), nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(
        db.Enum(*ROLES, name="user_role"),
        nullable=False,
        default=ROLE_PARTICIPANT,
        server_default=ROLE_PARTICIPANT,
    )
    is_verified = db.Column(
        db.Boolean,
        nullable=False,
        default=False,
        server_default=db.false(),
    )
    verification_code = db.Column(db.String(32), nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=_utcnow)

    organized_events = db.relationship(
        "Event",
        back_populates="organizer",
        cascade="all, delete-orphan",
    )
    participations = db.relationship(
        "EventParticipant",
        back_populates="user",
        cascade="all, delete-orphan",
    )

    def set_password(self, password: str) -> None:
        """Hash and store the password."""

        self.password_hash = hash_password(password)

    def check_password(self, password: str) -> bool:
        """Verify a password against the stored hash."""

        return verify_password(password, self.password_hash)

    def mark_verified(self) -> bool:
        """Move the account to the verified state. There is no way back.

        The flag only flips on a row that is still unverified, so of two
        concurrent calls exactly one returns True.
        """

        result = db.session.execute(
            db.update(User)
            .where(User.id == self.id, User.is_verified.is_(False))
            .values(is_verified=True)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            return False
        self.is_verified = True
        return True

    def to_public_dict(self) -> dict:
        """Projection returned by login: never includes secrets."""

        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "role": self.role,
        }

    def to_dict(self, include_events: bool = False) -> dict:
        """Serialize the user without its password hash or verification code."""

        data = {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "role": self.role,
            "isVerified": self.is_verified,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
        if include_events:
            data["events"] = [
                participation.to_dict(include_event=True)
                for participation in self.participations
            ]
        return data

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<User {self.email}>"
