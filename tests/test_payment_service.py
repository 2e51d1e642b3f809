"""Tests for payment loading, aggregation, registration and the void flow."""
import datetime
from unittest.mock import MagicMock

import pytest
import requests

from core.errors import ApiError, ConflictError, NetworkError, SessionExpiredError, ValidationError
from models.filters import PaymentFilters
from models.payment import Payment, PaymentDuration, PaymentMethod, PaymentState
from services.payment_service import (
    PaymentVoidFlow, VoidState, load_payments, parse_payment_page,
    register_payment, sort_payments,
)
from workers.report_worker import ReportWorker

D = datetime.date


def payment(pid, client_id, date, **extra):
    row = {"id": pid, "clientId": client_id, "amount": 100, "paymentDate": date}
    row.update(extra)
    return row


# ===================================================================
# Page parsing & ordering
# ===================================================================

class TestParsePaymentPage:

    def test_bare_list(self):
        page = parse_payment_page([payment(1, 1, "2024-01-01"), payment(2, 1, "2024-01-02")])
        assert [p.id for p in page.items] == [1, 2]
        assert page.total == 2

    def test_envelope_total(self):
        page = parse_payment_page({"content": [payment(1, 1, "2024-01-01")], "totalElements": 57})
        assert len(page.items) == 1
        assert page.total == 57

    def test_envelope_without_total_falls_back_to_length(self):
        page = parse_payment_page({"content": [payment(1, 1, "2024-01-01")]})
        assert page.total == 1

    def test_empty(self):
        assert parse_payment_page(None).items == []

    def test_voided_flag_reports_voided_state(self):
        p = Payment.from_dict(payment(1, 1, "2024-01-01", voided=True, state="UP_TO_DATE"))
        assert p.voided
        assert p.state == PaymentState.VOIDED.value

    def test_pending_passes_through(self):
        p = Payment.from_dict(payment(1, 1, "2024-01-01", paymentState="PENDING"))
        assert p.state == "PENDING"
        assert not p.voided


class TestSortPayments:

    def test_newest_first_then_higher_id(self):
        items = [
            Payment(id=1, client_id=1, amount=1, payment_date=D(2024, 1, 5)),
            Payment(id=7, client_id=1, amount=1, payment_date=D(2024, 1, 5)),
            Payment(id=3, client_id=1, amount=1, payment_date=D(2024, 2, 1)),
            Payment(id=9, client_id=1, amount=1, payment_date=None),
            Payment(id=2, client_id=1, amount=1, payment_date=D(2023, 12, 31)),
        ]
        assert [p.id for p in sort_payments(items)] == [3, 7, 1, 2, 9]

    def test_order_property_holds_pairwise(self):
        items = sort_payments(
            Payment(id=i, client_id=1, amount=1, payment_date=D(2024, 1, 1 + (i * 7) % 5)) for i in range(1, 15)
        )
        for a, b in zip(items, items[1:]):
            assert a.payment_date > b.payment_date or (a.payment_date == b.payment_date and a.id > b.id)


# ===================================================================
# load_payments
# ===================================================================

class TestLoadPayments:

    def test_no_matching_clients_makes_no_request(self, session, http):
        page = load_payments(session, PaymentFilters(client_ids=()))
        assert page.items == []
        assert page.total == 0
        http.request.assert_not_called()

    def test_unfiltered_single_request(self, session, http, make_response):
        http.request.return_value = make_response(200, {
            "content": [payment(1, 1, "2024-01-01"), payment(2, 2, "2024-03-01")],
            "totalElements": 40,
        })

        page = load_payments(session, PaymentFilters(state="EXPIRED"))

        assert [p.id for p in page.items] == [2, 1]
        assert page.total == 40
        params = http.request.call_args.kwargs["params"]
        assert "clientId" not in params
        assert params["state"] == "EXPIRED"
        assert params["page"] == 0

    def test_single_client_sends_client_id(self, session, http, make_response):
        http.request.return_value = make_response(200, [payment(1, 4, "2024-01-01")])
        load_payments(session, PaymentFilters(client_ids=(4,)))
        assert http.request.call_args.kwargs["params"]["clientId"] == 4

    def test_fan_out_merges_and_sorts(self, session, http, make_response):
        rows = {
            1: [payment(10, 1, "2024-01-10"), payment(11, 1, "2024-03-01")],
            2: [payment(20, 2, "2024-02-01")],
        }

        def fake(method, url, headers=None, params=None, json=None):
            return make_response(200, rows[params["clientId"]])

        http.request.side_effect = fake
        page = load_payments(session, PaymentFilters(client_ids=(1, 2), date_from=D(2024, 1, 1)))

        assert [p.id for p in page.items] == [11, 20, 10]
        assert page.total == 3
        assert http.request.call_count == 2
        for call in http.request.call_args_list:
            assert call.kwargs["params"]["from"] == "2024-01-01"

    def test_fan_out_partial_failure_keeps_the_rest(self, session, http, make_response):
        def fake(method, url, headers=None, params=None, json=None):
            if params["clientId"] == 2:
                return make_response(500, text="boom")
            return make_response(200, [payment(10, 1, "2024-01-10")])

        http.request.side_effect = fake
        page = load_payments(session, PaymentFilters(client_ids=(1, 2)))

        assert [p.id for p in page.items] == [10]

    def test_fan_out_network_failure_keeps_the_rest(self, session, http, make_response):
        def fake(method, url, headers=None, params=None, json=None):
            if params["clientId"] == 2:
                raise requests.ConnectionError("reset")
            return make_response(200, [payment(10, 1, "2024-01-10")])

        http.request.side_effect = fake
        page = load_payments(session, PaymentFilters(client_ids=(1, 2, 3)))

        assert sorted(p.id for p in page.items) == [10, 10]


# ===================================================================
# register_payment
# ===================================================================

class TestRegisterPayment:

    def test_negative_amount_is_rejected_locally(self, session, http):
        with pytest.raises(ValidationError):
            register_payment(session, 1, -5)
        http.request.assert_not_called()

    def test_non_numeric_amount_is_rejected_locally(self, session, http):
        with pytest.raises(ValidationError):
            register_payment(session, 1, "ten")
        http.request.assert_not_called()

    def test_body(self, session, http, make_response):
        http.request.return_value = make_response(201, payment(5, 1, "2024-01-10", amount=150.5))

        p = register_payment(session, 1, "150.5", D(2024, 1, 10), PaymentDuration.FIFTEEN_DAYS, PaymentMethod.DEBIT)

        args, kwargs = http.request.call_args
        assert args == ("POST", "http://api.test/api/payments")
        assert kwargs["json"] == {
            "clientId": 1,
            "amount": 150.5,
            "paymentDate": "2024-01-10",
            "duration": "FIFTEEN_DAYS",
            "durationDays": 15,
            "method": "DEBIT",
        }
        assert p.id == 5

    def test_second_payment_in_period_is_a_conflict(self, session, http, make_response):
        http.request.return_value = make_response(409, text="Ya existe un pago válido para este período")
        with pytest.raises(ConflictError):
            register_payment(session, 1, 100)


# ===================================================================
# Void flow
# ===================================================================

class TestPaymentVoidFlow:

    def test_decline_sends_nothing(self, session, http):
        reload = MagicMock()
        flow = PaymentVoidFlow(session, 5, reload)

        assert not flow.begin(confirm=lambda: False)
        assert flow.state is VoidState.PRESENTED
        http.request.assert_not_called()
        reload.assert_not_called()

    def test_confirm_only_moves_to_submitted(self, session, http):
        flow = PaymentVoidFlow(session, 5, MagicMock())

        assert flow.begin(confirm=lambda: True)
        assert flow.state is VoidState.SUBMITTED
        http.request.assert_not_called()

    def test_success_voids_and_reloads(self, session, http, make_response):
        http.request.return_value = make_response(200)
        reload = MagicMock()
        flow = PaymentVoidFlow(session, 5, reload)
        flow.begin(confirm=lambda: True)

        flow.submit("  duplicated ")
        assert flow.succeeded() is VoidState.VOIDED

        args, kwargs = http.request.call_args
        assert args == ("POST", "http://api.test/api/payments/5/void")
        assert kwargs["params"] == {"reason": "duplicated"}
        reload.assert_called_once()

    def test_failure_returns_to_presented_with_server_text(self, session, http, make_response):
        http.request.return_value = make_response(400, text="Payment already voided")
        reload = MagicMock()
        flow = PaymentVoidFlow(session, 5, reload)
        flow.begin(confirm=lambda: True)

        with pytest.raises(ApiError) as exc:
            flow.submit()
        assert flow.failed(exc.value) is VoidState.PRESENTED
        assert flow.error == "Payment already voided"
        reload.assert_not_called()

    def test_network_failure_returns_to_presented(self, session, http):
        http.request.side_effect = requests.ConnectionError("down")
        flow = PaymentVoidFlow(session, 5, MagicMock())
        flow.begin(confirm=lambda: True)

        with pytest.raises(NetworkError) as exc:
            flow.submit()
        assert flow.failed(exc.value) is VoidState.PRESENTED
        assert flow.error == "Network error"

    def test_voided_flow_does_not_start_again(self, session, http, make_response):
        http.request.return_value = make_response(200)
        flow = PaymentVoidFlow(session, 5, MagicMock())
        flow.begin(confirm=lambda: True)
        flow.submit()
        flow.succeeded()
        confirm = MagicMock(return_value=True)

        assert not flow.begin(confirm=confirm)
        assert flow.state is VoidState.VOIDED
        confirm.assert_not_called()
        assert http.request.call_count == 1


class TestVoidOnWorker:
    """The void request runs inside a pool worker; its outcome comes back as signals."""

    def run_worker(self, flow, reason=None):
        done, errors = [], []
        w = ReportWorker(flow.submit, reason)
        w.signals.finished.connect(done.append)
        w.signals.error.connect(errors.append)
        w.run()
        return done, errors

    def test_confirm_step_does_not_touch_the_network(self, session, http, make_response):
        http.request.return_value = make_response(200)
        flow = PaymentVoidFlow(session, 5, MagicMock())

        flow.begin(confirm=lambda: True)
        http.request.assert_not_called()

        done, errors = self.run_worker(flow, "typo")
        assert done == [None] and errors == []
        assert http.request.call_count == 1

    def test_expired_session_reaches_the_error_signal(self, session, http, on_unauthorized, make_response):
        http.request.return_value = make_response(401, text="expired")
        flow = PaymentVoidFlow(session, 5, MagicMock())
        flow.begin(confirm=lambda: True)

        done, errors = self.run_worker(flow)

        assert done == []
        assert len(errors) == 1 and isinstance(errors[0], SessionExpiredError)
        on_unauthorized.assert_called_once()
        assert flow.failed(errors[0]) is VoidState.PRESENTED
