import logging
from typing import Any, Callable, Dict, Optional

import requests

from core.errors import NetworkError, error_for_status

logger = logging.getLogger(__name__)


class ApiSession:
    """
    Gateway for every call to the gym backend.

    Attaches the bearer token from persisted storage and routes HTTP 401
    answers to the login entry point. There are no retries and no timeouts:
    transport failures propagate to the caller.

    Args:
        base_url (str): Scheme and host of the backend, e.g. 'http://localhost:8080'.
        token_loader (callable, optional): Returns the stored token or None.
        on_unauthorized (callable, optional): Navigates the app to the login screen.
        http (requests.Session, optional): Underlying HTTP session (injectable for tests).
    """
    def __init__(
        self,
        base_url: str,
        token_loader: Optional[Callable[[], Optional[str]]] = None,
        on_unauthorized: Optional[Callable[[], None]] = None,
        http: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.token_loader = token_loader
        self.on_unauthorized = on_unauthorized
        self.http = http or requests.Session()

    def url_for(self, path: str) -> str:
        if path.startswith("http://") or path.startswith("https://"):
            return path
        return f"{self.base_url}/{path.lstrip('/')}"

    def request(
        self,
        path: str,
        method: str = "GET",
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
        suppress_auth_redirect: bool = False,
    ) -> requests.Response:
        """
        Sends a request and returns the raw response (the body is not parsed).

        With suppress_auth_redirect=True a 401 response is handed back untouched,
        so flows running inside a modal can show an inline message instead of
        losing unsaved input.
        """
        opts_headers = dict(headers or {})
        token = self.token_loader() if self.token_loader else None
        if token:
            opts_headers["Authorization"] = f"Bearer {token}"

        response = self.http.request(
            method, self.url_for(path), headers=opts_headers, params=params, json=json
        )

        if response.status_code == 401 and not suppress_auth_redirect:
            logger.warning("401 on %s %s, redirecting to login", method, path)
            if self.on_unauthorized:
                self.on_unauthorized()

        return response

    def send(self, path: str, method: str = "GET", fallback: str = "Request failed", **kwargs: Any) -> requests.Response:
        """
        Same as request() but raises instead of returning a failed response.

        Raises:
            NetworkError: If no response was received.
            ApiError: If the response status is not 2xx.
        """
        try:
            response = self.request(path, method=method, **kwargs)
        except requests.RequestException as e:
            logger.error("Network error on %s %s: %s", method, path, e)
            raise NetworkError() from e
        check_response(response, fallback)
        return response


def check_response(response: requests.Response, fallback: str = "Request failed") -> None:
    """Raises the matching ApiError subclass when the response is not 2xx."""
    if response.ok:
        return
    raise error_for_status(response.status_code, response.text, fallback)


def read_json(response: requests.Response, default: Any = None) -> Any:
    """Parses a JSON body, returning default for empty bodies (204 / blank)."""
    if not response.content:
        return default
    return response.json()
