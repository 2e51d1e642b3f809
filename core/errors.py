import re
from typing import Optional

# Backend has no structured error codes; duplicates are detected from the body text.
DUPLICATE_PATTERN = re.compile(
    r"duplicate|duplicad|exists|existe|already|ya est[aá] registrad", re.IGNORECASE
)


class ApiError(Exception):
    """
    Raised when the backend answers with a non-2xx status.

    Attributes:
        status (int): HTTP status code.
        message (str): Body text sent by the server (or a generic fallback).
    """
    def __init__(self, status: int, message: str):
        super().__init__(message)
        self.status = status
        self.message = message


class ConflictError(ApiError):
    """A user-actionable conflict, e.g. duplicate email or second valid payment in a period."""


class SessionExpiredError(ApiError):
    """The bearer token was rejected (HTTP 401)."""


class NetworkError(Exception):
    """The request never produced a response (connection refused, DNS, reset...)."""
    def __init__(self, message: str = "Network error"):
        super().__init__(message)


class ValidationError(ValueError):
    """Invalid input detected locally, before any request is sent."""


def is_duplicate_message(text: Optional[str]) -> bool:
    return bool(text) and DUPLICATE_PATTERN.search(text) is not None


def error_for_status(status: int, body: str, fallback: str = "Request failed") -> ApiError:
    """
    Maps an HTTP status and its body text onto the error taxonomy.

    Args:
        status (int): HTTP status code of the failed response.
        body (str): Raw body text.
        fallback (str): Message used when the server sent an empty body.

    Returns:
        ApiError: The most specific subclass for the failure.
    """
    message = (body or "").strip() or fallback
    if status == 401:
        return SessionExpiredError(status, message)
    if status == 409 or is_duplicate_message(body):
        return ConflictError(status, message)
    return ApiError(status, message)
