import logging
import re
from typing import Any, Dict, List, Optional

import config
from core.client_cache import ClientCache
from core.errors import ValidationError
from core.session import ApiSession, read_json
from core.utils import pause_duration_days
from models.client import Client
from models.filters import ClientFilters

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _client_path(client_id: Optional[int] = None, action: Optional[str] = None) -> str:
    path = config.CLIENTS_PATH
    if client_id is not None:
        path = f"{path}/{client_id}"
    if action:
        path = f"{path}/{action}"
    return path


# --- QUERIES ---

def list_clients(session: ApiSession, filters: ClientFilters, cache: Optional[ClientCache] = None) -> List[Client]:
    """
    Loads the client list matching the filters.
    On success the cache (if given) is replaced with the new list; on failure it is left untouched.
    Background loads pass no cache and let the view replace it once the result is known to be current.

    Returns:
        List[Client]: Clients in backend order. Empty list means "no results", not an error.

    Raises:
        NetworkError, ApiError: Propagated from the session.
    """
    response = session.send(
        _client_path(), params=filters.to_params(), fallback="Could not load the client list"
    )
    data = read_json(response, default=[]) or []
    if isinstance(data, dict):
        data = data.get("content") or []

    clients = [Client.from_dict(d) for d in data]
    if cache is not None:
        cache.replace(clients)
    logger.info("Loaded %d clients (filters=%s)", len(clients), filters.to_params())
    return clients


def get_client(session: ApiSession, client_id: int) -> Client:
    response = session.send(_client_path(client_id), fallback="Client not found")
    return Client.from_dict(read_json(response, default={}))


# --- CREATE / EDIT ---

def validate_client(client: Client) -> None:
    """
    Checks the form before it is sent.

    Raises:
        ValidationError: If a required field is missing or the email is malformed.
    """
    if not client.first_name.strip() or not client.last_name.strip():
        raise ValidationError("First and last name are required.")
    if not client.email.strip():
        raise ValidationError("Email is required.")
    if not EMAIL_PATTERN.match(client.email.strip()):
        raise ValidationError("Please enter a valid email address.")


def create_client(session: ApiSession, client: Client) -> Client:
    """
    Registers a new client.

    Raises:
        ValidationError: Invalid form (nothing is sent).
        ConflictError: The email is already registered.
    """
    validate_client(client)
    response = session.send(_client_path(), method="POST", json=client.to_payload(),
                            fallback="Could not create the client")
    created = Client.from_dict(read_json(response, default={}) or client.to_payload())
    logger.info("Created client %s (%s)", created.id, created.email)
    return created


def update_client(session: ApiSession, client: Client) -> Client:
    if client.id is None:
        raise ValidationError("Can't update a client without an id.")
    validate_client(client)
    response = session.send(_client_path(client.id), method="PUT", json=client.to_payload(),
                            fallback="Could not update the client")
    return Client.from_dict(read_json(response, default={}) or client.to_payload())


# --- STATUS MANAGEMENT ---

def deactivate_client(session: ApiSession, client_id: int) -> None:
    """Soft deactivation; the backend keeps the record."""
    session.send(_client_path(client_id), method="DELETE", fallback="Could not deactivate the client")
    logger.info("Deactivated client %s", client_id)


def activate_client(session: ApiSession, client_id: int) -> None:
    session.send(_client_path(client_id, "activate"), method="POST", fallback="Could not activate the client")
    logger.info("Activated client %s", client_id)


def pause_client(session: ApiSession, client_id: int, date_from: str, date_to: str,
                 reason: Optional[str] = None) -> Client:
    """
    Pauses a membership for the inclusive window [date_from, date_to] ('YYYY-MM-DD').

    The window is validated locally first, so a reversed range never reaches the server.

    Raises:
        ValidationError: Malformed dates or date_to before date_from.
    """
    days = pause_duration_days(date_from, date_to)

    params: Dict[str, Any] = {"from": date_from.strip(), "to": date_to.strip()}
    if reason and reason.strip():
        params["reason"] = reason.strip()

    response = session.send(_client_path(client_id, "pause"), method="POST", params=params,
                            fallback="Could not pause the membership")
    logger.info("Paused client %s for %d days (%s -> %s)", client_id, days, date_from, date_to)
    data = read_json(response, default=None)
    return Client.from_dict(data) if data else get_client(session, client_id)


def resume_client(session: ApiSession, client_id: int) -> Client:
    response = session.send(_client_path(client_id, "resume"), method="POST",
                            fallback="Could not resume the membership")
    logger.info("Resumed client %s", client_id)
    data = read_json(response, default=None)
    return Client.from_dict(data) if data else get_client(session, client_id)
