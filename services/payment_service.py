import concurrent.futures
import datetime
import logging
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence

import config
from core.errors import ValidationError
from core.session import ApiSession, read_json
from core.utils import EPOCH, parse_date
from models.filters import PaymentFilters
from models.payment import Payment, PaymentDuration, PaymentMethod, PaymentPage

logger = logging.getLogger(__name__)


# --- LOADING & AGGREGATION ---

def parse_payment_page(data: Any) -> PaymentPage:
    """
    Accepts either a bare list or a page envelope {content: [...], totalElements: n}.
    The total falls back to the number of rows when the envelope has none.
    """
    if isinstance(data, dict):
        rows = data.get("content") or []
        total = data.get("totalElements")
    else:
        rows = data or []
        total = None

    items = [Payment.from_dict(d) for d in rows]
    return PaymentPage(items=items, total=int(total) if total is not None else len(items))


def payment_sort_key(p: Payment):
    return (p.payment_date or EPOCH, p.id if p.id is not None else 0)


def sort_payments(payments: Iterable[Payment]) -> List[Payment]:
    """
    Newest first: payment_date descending (missing date counts as 1970-01-01),
    then id descending so the most recently created of a same-day pair comes first.
    """
    return sorted(payments, key=payment_sort_key, reverse=True)


def _fetch_client_payments(session: ApiSession, filters: PaymentFilters, client_id: int) -> List[Payment]:
    response = session.send(config.PAYMENTS_PATH, params=filters.to_params(client_id),
                            fallback=f"Could not load payments for client {client_id}")
    return parse_payment_page(read_json(response, default=[])).items


def _fetch_many(session: ApiSession, filters: PaymentFilters, client_ids: Sequence[int]) -> List[Payment]:
    """
    One request per client, all in flight at once, joined when every one has settled.
    A failed request contributes no rows instead of failing the whole load.
    """
    workers = max(1, min(config.MAX_FAN_OUT, len(client_ids)))
    with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as pool:
        futures = [pool.submit(_fetch_client_payments, session, filters, cid) for cid in client_ids]
        concurrent.futures.wait(futures)

    items: List[Payment] = []
    for cid, fut in zip(client_ids, futures):
        exc = fut.exception()
        if exc is not None:
            logger.warning("Skipping payments of client %s: %s", cid, exc)
            continue
        items.extend(fut.result())
    return items


def load_payments(session: ApiSession, filters: PaymentFilters) -> PaymentPage:
    """
    Loads payments for the given filters, newest first.

    - client_ids == ()  -> empty page, no request (a search that matched nobody).
    - several client_ids -> concurrent per-client requests, merged.
    - zero or one id     -> a single paginated request.

    Raises:
        NetworkError, ApiError: Only on the single-request path.
    """
    if filters.matches_nothing:
        return PaymentPage(items=[], total=0)

    ids = filters.client_ids or ()
    if len(ids) > 1:
        items = _fetch_many(session, filters, ids)
        page = PaymentPage(items=items, total=len(items))
    else:
        response = session.send(config.PAYMENTS_PATH, params=filters.to_params(ids[0] if ids else None),
                                fallback="Could not load payments")
        page = parse_payment_page(read_json(response, default=[]))

    page.items = sort_payments(page.items)
    logger.info("Loaded %d payments (clients=%s)", len(page.items), list(ids) if ids else "all")
    return page


# --- REGISTER & VOID ---

def register_payment(
    session: ApiSession,
    client_id: int,
    amount: float,
    payment_date: Optional[datetime.date] = None,
    duration: PaymentDuration = PaymentDuration.ONE_MONTH,
    method: PaymentMethod = PaymentMethod.CASH,
) -> Payment:
    """
    Registers a payment for a client.

    Raises:
        ValidationError: Missing client or negative / non-numeric amount (nothing is sent).
        ConflictError: The client already has a valid payment for this period.
    """
    if client_id is None:
        raise ValidationError("Select a client first.")
    try:
        amount = float(amount)
    except (TypeError, ValueError):
        raise ValidationError("Amount must be a number.")
    if amount < 0:
        raise ValidationError("Amount can't be negative.")

    body: Dict[str, Any] = {
        "clientId": client_id,
        "amount": round(amount, 2),
        "paymentDate": (parse_date(payment_date) or datetime.date.today()).isoformat(),
        "duration": duration.name,
        "durationDays": duration.days,
        "method": PaymentMethod(method).value,
    }
    response = session.send(config.PAYMENTS_PATH, method="POST", json=body,
                            fallback="Could not register the payment")
    data = read_json(response, default=None) or body
    logger.info("Registered payment of %.2f for client %s", amount, client_id)
    return Payment.from_dict(data)


def void_payment(session: ApiSession, payment_id: int, reason: Optional[str] = None) -> None:
    params = {"reason": reason.strip()} if reason and reason.strip() else None
    session.send(f"{config.PAYMENTS_PATH}/{payment_id}/void", method="POST", params=params,
                 fallback="Could not void the payment")
    logger.info("Voided payment %s", payment_id)


class VoidState(str, Enum):
    PRESENTED = "PRESENTED"
    SUBMITTED = "SUBMITTED"
    VOIDED = "VOIDED"


class PaymentVoidFlow:
    """
    Drives the void action for one payment row.

    PRESENTED --confirm--> SUBMITTED --success--> VOIDED (reload with current filters)
                                     --failure--> PRESENTED (error holds the server text)
    Declining the confirmation stays in PRESENTED and sends nothing.

    begin() and the succeeded()/failed() transitions run on the GUI thread;
    submit() is the network call and runs on a worker.
    """
    def __init__(self, session: ApiSession, payment_id: int, reload: Callable[[], None]):
        self.session = session
        self.payment_id = payment_id
        self.reload = reload
        self.state = VoidState.PRESENTED
        self.error: Optional[str] = None

    def begin(self, confirm: Callable[[], bool]) -> bool:
        """Returns True when the request should be sent."""
        if self.state is not VoidState.PRESENTED:
            return False
        if not confirm():
            return False
        self.state = VoidState.SUBMITTED
        self.error = None
        return True

    def submit(self, reason: Optional[str] = None) -> None:
        """
        Raises:
            ApiError, NetworkError: Passed on to the worker's error signal.
        """
        void_payment(self.session, self.payment_id, reason)

    def succeeded(self, _result: Any = None) -> VoidState:
        self.state = VoidState.VOIDED
        self.reload()
        return self.state

    def failed(self, exc: Exception) -> VoidState:
        self.state = VoidState.PRESENTED
        self.error = str(exc)
        logger.warning("Void of payment %s failed: %s", self.payment_id, exc)
        return self.state
