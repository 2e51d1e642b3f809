"""Tests for client operations."""
import datetime

import pytest
import requests

from core.client_cache import ClientCache
from core.errors import ApiError, ConflictError, NetworkError, ValidationError
from models.client import Client
from models.filters import ClientFilters
from services.client_service import (
    activate_client, create_client, deactivate_client, list_clients,
    pause_client, resume_client, update_client, validate_client,
)

ANA = {"id": 3, "firstName": "Ana", "lastName": "López", "email": "ana@gym.com", "active": True}


def new_client(**overrides):
    data = dict(id=None, first_name="Ana", last_name="López", email="ana@gym.com")
    data.update(overrides)
    return Client(**data)


# ===================================================================
# list_clients & cache
# ===================================================================

class TestListClients:

    def test_sends_filters_and_replaces_cache(self, session, http, make_response):
        http.request.return_value = make_response(200, [ANA])
        cache = ClientCache([new_client(id=99)])

        clients = list_clients(session, ClientFilters(q="ana", active="true"), cache)

        assert [c.id for c in clients] == [3]
        assert [c.id for c in cache] == [3]
        assert http.request.call_args.kwargs["params"] == {"q": "ana", "active": "true"}

    def test_accepts_page_envelope(self, session, http, make_response):
        http.request.return_value = make_response(200, {"content": [ANA], "totalElements": 1})
        assert [c.email for c in list_clients(session, ClientFilters())] == ["ana@gym.com"]

    def test_empty_list_is_not_an_error(self, session, http, make_response):
        http.request.return_value = make_response(200, [])
        cache = ClientCache([new_client(id=99)])
        assert list_clients(session, ClientFilters(), cache) == []
        assert len(cache) == 0

    def test_failure_leaves_cache_untouched(self, session, http, make_response):
        http.request.return_value = make_response(500, text="boom")
        cache = ClientCache([new_client(id=99)])

        with pytest.raises(ApiError):
            list_clients(session, ClientFilters(), cache)
        assert [c.id for c in cache] == [99]

    def test_network_failure_leaves_cache_untouched(self, session, http):
        http.request.side_effect = requests.ConnectionError("down")
        cache = ClientCache([new_client(id=99)])

        with pytest.raises(NetworkError):
            list_clients(session, ClientFilters(), cache)
        assert len(cache) == 1


# ===================================================================
# Create / edit
# ===================================================================

class TestSaveClient:

    @pytest.mark.parametrize("overrides", [
        {"first_name": " "},
        {"last_name": ""},
        {"email": ""},
        {"email": "not-an-email"},
    ])
    def test_invalid_form_sends_nothing(self, session, http, overrides):
        with pytest.raises(ValidationError):
            create_client(session, new_client(**overrides))
        http.request.assert_not_called()

    def test_validate_accepts_good_form(self):
        validate_client(new_client())

    def test_create_posts_payload(self, session, http, make_response):
        http.request.return_value = make_response(201, ANA)

        created = create_client(session, new_client(start_date=datetime.date(2024, 1, 2)))

        args, kwargs = http.request.call_args
        assert args == ("POST", "http://api.test/api/clients")
        assert kwargs["json"]["startDate"] == "2024-01-02"
        assert "pausedFrom" not in kwargs["json"]
        assert created.id == 3

    def test_duplicate_email_is_a_conflict(self, session, http, make_response):
        http.request.return_value = make_response(400, text="El email ya está registrado")
        with pytest.raises(ConflictError) as exc:
            create_client(session, new_client())
        assert exc.value.message == "El email ya está registrado"

    def test_update_puts_to_client_url(self, session, http, make_response):
        http.request.return_value = make_response(200, ANA)
        update_client(session, new_client(id=3))
        args, kwargs = http.request.call_args
        assert args == ("PUT", "http://api.test/api/clients/3")
        assert kwargs["json"]["id"] == 3

    def test_update_without_id(self, session, http):
        with pytest.raises(ValidationError):
            update_client(session, new_client())
        http.request.assert_not_called()


# ===================================================================
# Status management
# ===================================================================

class TestStatusActions:

    def test_deactivate_is_a_delete(self, session, http, make_response):
        http.request.return_value = make_response(204)
        deactivate_client(session, 3)
        assert http.request.call_args.args == ("DELETE", "http://api.test/api/clients/3")

    def test_activate(self, session, http, make_response):
        http.request.return_value = make_response(200)
        activate_client(session, 3)
        assert http.request.call_args.args == ("POST", "http://api.test/api/clients/3/activate")

    def test_reversed_pause_is_rejected_before_any_request(self, session, http):
        with pytest.raises(ValidationError):
            pause_client(session, 3, "2024-01-10", "2024-01-09")
        http.request.assert_not_called()

    def test_malformed_pause_date(self, session, http):
        with pytest.raises(ValidationError):
            pause_client(session, 3, "10/01/2024", "2024-01-12")
        http.request.assert_not_called()

    def test_pause_sends_window_and_reason(self, session, http, make_response):
        http.request.return_value = make_response(200, dict(ANA, pausedFrom="2024-03-01", pausedTo="2024-03-07"))

        c = pause_client(session, 3, "2024-03-01", "2024-03-07", "  travel ")

        args, kwargs = http.request.call_args
        assert args == ("POST", "http://api.test/api/clients/3/pause")
        assert kwargs["params"] == {"from": "2024-03-01", "to": "2024-03-07", "reason": "travel"}
        assert c.paused_to == datetime.date(2024, 3, 7)

    def test_pause_without_reason_omits_it(self, session, http, make_response):
        http.request.return_value = make_response(200, ANA)
        pause_client(session, 3, "2024-03-01", "2024-03-01", "   ")
        assert "reason" not in http.request.call_args.kwargs["params"]

    def test_empty_pause_answer_refetches_client(self, session, http, make_response):
        http.request.side_effect = [make_response(204), make_response(200, ANA)]

        c = pause_client(session, 3, "2024-03-01", "2024-03-02")

        assert c.id == 3
        assert http.request.call_args.args == ("GET", "http://api.test/api/clients/3")

    def test_resume(self, session, http, make_response):
        http.request.return_value = make_response(200, ANA)
        assert resume_client(session, 3).id == 3
        assert http.request.call_args.args == ("POST", "http://api.test/api/clients/3/resume")
