import base64
import json
import logging
import re
from typing import Any, Dict, Optional

import requests

import config
from core.errors import ApiError, NetworkError, SessionExpiredError, ValidationError, error_for_status
from core.session import ApiSession, read_json
from services.file_manager import clear_token, load_token, save_token

logger = logging.getLogger(__name__)

# At least 8 characters with one digit, one lowercase and one uppercase letter.
PASSWORD_PATTERN = re.compile(r"^(?=.*[0-9])(?=.*[a-z])(?=.*[A-Z]).{8,}$")

PASSWORD_RULE_MESSAGE = (
    "Password must be at least 8 characters long and include "
    "a number, a lowercase and an uppercase letter."
)


def validate_password_strength(password: str) -> None:
    """
    Raises:
        ValidationError: If the password does not meet the strength rule.
    """
    if not PASSWORD_PATTERN.match(password or ""):
        raise ValidationError(PASSWORD_RULE_MESSAGE)


# --- LOGIN / LOGOUT ---

def login(session: ApiSession, email: str, password: str) -> str:
    """
    Authenticates against the backend and persists the returned token.

    Args:
        session (ApiSession): Gateway used for the call.
        email (str): Admin email.
        password (str): Plain text password.

    Returns:
        str: The bearer token.

    Raises:
        ValidationError: Empty credentials.
        ApiError: Rejected credentials (message is the server text or 'Login failed').
        NetworkError: Backend unreachable.
    """
    if not email.strip() or not password:
        raise ValidationError("Email and password are required.")

    # Wrong credentials also come back as 401; that is not an expired session.
    try:
        response = session.request(
            config.LOGIN_PATH, method="POST",
            json={"email": email.strip(), "password": password},
            suppress_auth_redirect=True,
        )
    except requests.RequestException as e:
        logger.error("Login request failed: %s", e)
        raise NetworkError() from e

    if not response.ok:
        raise ApiError(response.status_code, response.text.strip() or "Login failed")

    token = (read_json(response, default={}) or {}).get("token")
    if not token:
        raise ApiError(response.status_code, "Login failed")

    save_token(token)
    logger.info("Logged in as %s", email.strip())
    return token


def logout() -> None:
    clear_token()
    logger.info("Logged out")


def is_logged_in() -> bool:
    return load_token() is not None


def decode_token_claims(token: Optional[str]) -> Optional[Dict[str, Any]]:
    """
    Reads the JWT payload for display purposes only (no signature check).
    Returns None for missing or malformed tokens.
    """
    if not token:
        return None
    try:
        payload = token.split(".")[1]
        payload += "=" * (-len(payload) % 4)
        claims = json.loads(base64.urlsafe_b64decode(payload.encode("ascii")))
    except (IndexError, ValueError) as e:
        logger.debug("Could not decode token claims: %s", e)
        return None
    return claims if isinstance(claims, dict) else None


def current_user() -> Optional[Dict[str, Any]]:
    """Claims of the logged-in user, e.g. {'sub': 'admin@gym.com', 'name': ...}."""
    return decode_token_claims(load_token())


def welcome_text() -> str:
    claims = current_user() or {}
    who = claims.get("name") or claims.get("email") or claims.get("sub")
    return f"Welcome, {who}" if who else "Welcome"


# --- PASSWORD MANAGEMENT ---

def change_password(session: ApiSession, current_password: str, new_password: str) -> None:
    """
    Changes the logged-in user's password.
    Sent with the auth redirect suppressed: an expired session raises
    SessionExpiredError so the dialog can say so without closing.
    """
    if not current_password:
        raise ValidationError("Enter your current password.")
    validate_password_strength(new_password)

    try:
        response = session.request(
            f"{config.USERS_PATH}/change-password", method="POST",
            json={"currentPassword": current_password, "newPassword": new_password},
            suppress_auth_redirect=True,
        )
    except requests.RequestException as e:
        raise NetworkError() from e

    if response.status_code == 401:
        raise SessionExpiredError(401, "Your session has expired. Please log in again.")
    if not response.ok:
        raise error_for_status(response.status_code, response.text, "Could not change the password")


def request_password_reset(session: ApiSession, email: str) -> str:
    """
    Starts password recovery. The server answers the same way whether the email exists or not.

    Returns:
        str: Message to show the user.
    """
    if not email.strip():
        raise ValidationError("Email is required.")
    response = session.send(f"{config.PASSWORD_PATH}/request-reset", method="POST",
                            json={"email": email.strip()}, suppress_auth_redirect=True,
                            fallback="Could not request the password reset")
    return response.text.strip() or "If the email exists you will receive instructions shortly."


def validate_reset_token(session: ApiSession, token: str) -> bool:
    if not token.strip():
        return False
    response = session.send(f"{config.PASSWORD_PATH}/validate-token/{token.strip()}",
                            suppress_auth_redirect=True, fallback="Could not validate the token")
    return bool(read_json(response, default=False))


def confirm_password_reset(session: ApiSession, token: str, new_password: str) -> str:
    """
    Completes password recovery with the emailed token.

    Raises:
        ValidationError: Weak password (nothing is sent).
        ApiError: Invalid or expired token.
    """
    if not token.strip():
        raise ValidationError("The recovery token is required.")
    validate_password_strength(new_password)
    response = session.send(f"{config.PASSWORD_PATH}/confirm-reset", method="POST",
                            json={"token": token.strip(), "newPassword": new_password},
                            suppress_auth_redirect=True,
                            fallback="The token is invalid or has expired.")
    return response.text.strip() or "Password updated."
