"""Seed an administrator user."""

from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from app import create_app  # noqa: E402
from services.accounts import ensure_admin  # noqa: E402


def main() -> None:
    app = create_app()
    with app.app_context():
        admin, created = ensure_admin()
        action = "created" if created else "already exists"
        print(f"Admin user {action}: {admin.email}")


if __name__ == "__main__":
    main()
