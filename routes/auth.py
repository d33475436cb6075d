"""Authentication blueprint: register, verify and login."""

from __future__ import annotations
from http import HTTPStatus

from flask import Blueprint, jsonify, request

from services import accounts
from utils.errors import BadRequest
from utils.request_validation import parse_json_request, string_field

auth_bp = Blueprint("auth", __name__)


def _email(payload: dict) -> str:
    # Emails are matched exactly as stored; only surrounding whitespace is dropped.
    return string_field(payload, "email")


@auth_bp.route("/register", methods=["POST"])
def register() -> tuple:
    """Register a new participant and email them a verification code."""
    payload = parse_json_request(request, required_keys=("email", "name", "password"))
    user = accounts.register(
        _email(payload),
        string_field(payload, "name"),
        string_field(payload, "password"),
    )

    return (
        jsonify(
            {
                "message": "User registered successfully. Please check your email for verification code.",
                "userId": user.id,
            }
        ),
        HTTPStatus.CREATED,
    )


@auth_bp.route("/verify", methods=["POST"])
def verify() -> tuple:
    """Verify an account with the emailed verification code."""
    payload = parse_json_request(request, required_keys=("email", "verificationCode"))
    code = payload.get("verificationCode")
    if not isinstance(code, str):
        raise BadRequest("verificationCode must be a string.")
    # Compared exactly as sent, surrounding whitespace included.
    accounts.verify(_email(payload), code)

    return (
        jsonify(
            {"message": "Account verified successfully. Please check your email for confirmation."}
        ),
        HTTPStatus.OK,
    )


@auth_bp.route("/login", methods=["POST"])
def login() -> tuple:
    """Exchange email and password for an access token."""
    payload = parse_json_request(request, required_keys=("email", "password"))
    token, user = accounts.login(_email(payload), string_field(payload, "password"))

    return (
        jsonify(
            {
                "message": "Login successful",
                "token": token,
                "user": user.to_public_dict(),
            }
        ),
        HTTPStatus.OK,
    )
