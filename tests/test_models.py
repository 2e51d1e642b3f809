"""Tests for backend JSON parsing and request payloads."""
import datetime

from models.client import Client
from models.filters import ClientFilters, PaymentFilters
from models.payment import PaymentDuration


class TestClient:

    def test_from_dict(self):
        c = Client.from_dict({
            "id": "3", "firstName": "Ana", "lastName": "López", "email": "ana@gym.com",
            "phone": "555", "active": False, "startDate": "2024-01-02",
            "pausedFrom": "2024-03-01", "pausedTo": "2024-03-07", "pauseReason": "travel",
            "createdAt": "2024-01-02T09:00:00",
        })
        assert c.id == 3
        assert c.full_name == "Ana López"
        assert not c.active
        assert c.paused_from == datetime.date(2024, 3, 1)
        assert c.pause_reason == "travel"
        assert c.created_at == datetime.datetime(2024, 1, 2, 9, 0)

    def test_legacy_shapes(self):
        c = Client.from_dict({
            "id": 1, "firstName": "Luis", "lastName": "Paz",
            "telephone": "123", "isActive": False, "user": {"email": "luis@gym.com"},
        })
        assert c.phone == "123"
        assert not c.active
        assert c.email == "luis@gym.com"

    def test_active_defaults_to_true(self):
        assert Client.from_dict({"id": 1}).active

    def test_payload_omits_pause_fields(self):
        c = Client(id=None, first_name="Ana", last_name="López", email="ana@gym.com",
                   paused_from=datetime.date(2024, 3, 1), paused_to=datetime.date(2024, 3, 2))
        payload = c.to_payload()
        assert "id" not in payload
        assert "pausedFrom" not in payload and "pausedTo" not in payload
        assert payload["phone"] is None


class TestFilters:

    def test_client_filters_omit_absent_keys(self):
        assert ClientFilters(active="false").to_params() == {"active": "false"}

    def test_payment_filters_params(self):
        f = PaymentFilters(date_from=datetime.date(2024, 1, 1), state="VOIDED", page=2, size=50)
        assert f.to_params() == {"page": 2, "size": 50, "from": "2024-01-01", "state": "VOIDED"}

    def test_no_results_marker(self):
        assert PaymentFilters(client_ids=()).matches_nothing
        assert not PaymentFilters().matches_nothing
        assert not PaymentFilters(client_ids=(1,)).matches_nothing


def test_payment_duration_days():
    assert PaymentDuration.FIFTEEN_DAYS.days == 15
    assert PaymentDuration.ONE_MONTH.days == 30
