"""Utilities for validating incoming Flask requests."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Iterable

from flask import Request
from werkzeug.exceptions import BadRequest


def parse_json_request(
    req: Request,
    *,
    required_keys: Iterable[str] | None = None,
    allow_empty: bool = False,
) -> dict:
    """Return the parsed JSON body or raise a 400 error."""

    if not req.is_json:
        raise BadRequest("Request content type must be application/json.")

    data = req.get_json(silent=True)
    if data is None:
        raise BadRequest("Request JSON body is required.")

    if not isinstance(data, dict):
        raise BadRequest("Request JSON payload must be an object.")

    if not data and not allow_empty:
        raise BadRequest("Request JSON body must not be empty.")

    if required_keys:
        missing = [key for key in required_keys if data.get(key) in (None, "")]
        if missing:
            raise BadRequest(
                "Missing required fields: {}.".format(
                    ", ".join(sorted(missing))
                )
            )

    return data


def string_field(data: dict, key: str, *, nullable: bool = False) -> str | None:
    """Return ``data[key]`` stripped, rejecting non-strings and blanks."""

    value: Any = data.get(key)
    if value is None and nullable:
        return None
    if not isinstance(value, str) or not value.strip():
        raise BadRequest(f"{key} must be a non-empty string.")
    return value.strip()


def choice_field(data: dict, key: str, choices: Iterable[str]) -> str:
    value = data.get(key)
    allowed = tuple(choices)
    if value not in allowed:
        raise BadRequest(f"{key} must be one of: {', '.join(allowed)}.")
    return value


def parse_datetime(value: Any, key: str = "date") -> datetime:
    """Parse an ISO 8601 timestamp into a naive UTC datetime."""

    if not isinstance(value, str) or not value.strip():
        raise BadRequest(f"{key} must be an ISO 8601 timestamp.")
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError as exc:
        raise BadRequest(f"{key} must be an ISO 8601 timestamp.") from exc
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(UTC).replace(tzinfo=None)
    return parsed
