"""
Shared fixtures for the gym admin test suite.

Every test runs WITHOUT a backend: the HTTP layer is a MagicMock standing in
for requests.Session, and the token / server files live in a temp directory.
"""
import json
from typing import Any, Optional
from unittest.mock import MagicMock

import pytest
import requests

import config
from core.session import ApiSession

BASE_URL = "http://api.test"


# ---------------------------------------------------------------------------
# Isolation
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _isolate_files(tmp_path, monkeypatch):
    """Redirect the token and server config files to a temp directory."""
    monkeypatch.setattr(config, "TOKEN_FILE", tmp_path / "token")
    monkeypatch.setattr(config, "CONFIG_FILE", tmp_path / "server")
    yield


# ---------------------------------------------------------------------------
# HTTP fakes
# ---------------------------------------------------------------------------

def build_response(status: int = 200, body: Any = None, text: Optional[str] = None) -> requests.Response:
    """A real requests.Response with a canned status and body."""
    r = requests.Response()
    r.status_code = status
    if text is not None:
        r._content = text.encode("utf-8")
    elif body is not None:
        r._content = json.dumps(body).encode("utf-8")
    else:
        r._content = b""
    r.encoding = "utf-8"
    return r


@pytest.fixture
def make_response():
    return build_response


@pytest.fixture
def http():
    """Stand-in for requests.Session; tests set return_value / side_effect on .request."""
    h = MagicMock()
    h.request.return_value = build_response(200, [])
    return h


@pytest.fixture
def on_unauthorized():
    return MagicMock()


@pytest.fixture
def session(http, on_unauthorized):
    return ApiSession(BASE_URL, token_loader=lambda: "tok-123", on_unauthorized=on_unauthorized, http=http)
