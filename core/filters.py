"""
Turns raw UI input (combo texts, search boxes, date pickers) into the
normalized filter objects sent to the backend.

Status words are accepted in Spanish and English, with or without accents,
because the backend and older exports use both.
"""
import logging
import re
from typing import Iterable, List, Mapping, Optional

from core.utils import DateLike, parse_date, strip_accents, validate_date_range
from models.client import Client
from models.filters import ClientFilters, PaymentFilters
from models.payment import PaymentState

logger = logging.getLogger(__name__)

NO_CONSTRAINT = frozenset({"", "ALL", "TODOS", "TODAS", "ANY"})

ACTIVE_LOOKUP = {
    "ACTIVO": "true",
    "ACTIVOS": "true",
    "ACTIVE": "true",
    "SI": "true",
    "YES": "true",
    "TRUE": "true",
    "INACTIVO": "false",
    "INACTIVOS": "false",
    "INACTIVE": "false",
    "NO": "false",
    "FALSE": "false",
}

PAYMENT_STATE_LOOKUP = {
    "AL DIA": PaymentState.UP_TO_DATE.value,
    "UP TO DATE": PaymentState.UP_TO_DATE.value,
    "UP-TO-DATE": PaymentState.UP_TO_DATE.value,
    "VENCIDO": PaymentState.EXPIRED.value,
    "VENCIDOS": PaymentState.EXPIRED.value,
    "EXPIRADO": PaymentState.EXPIRED.value,
    "OVERDUE": PaymentState.EXPIRED.value,
    "ANULADO": PaymentState.VOIDED.value,
    "ANULADOS": PaymentState.VOIDED.value,
    "VOID": PaymentState.VOIDED.value,
}

# Values already in backend form pass straight through.
CANONICAL_PAYMENT_STATES = frozenset({
    PaymentState.UP_TO_DATE.value,
    PaymentState.EXPIRED.value,
    PaymentState.VOIDED.value,
})

_PAYMENT_PREFIX = re.compile(r"^(PAGO|PAYMENT)\s*:\s*")
_LEADING_DIGITS = re.compile(r"^\d+")


def normalize_text(text: Optional[str]) -> str:
    """Trim, uppercase and drop diacritics: ' al día ' -> 'AL DIA'."""
    if not text:
        return ""
    return strip_accents(text.strip()).upper()


def resolve_active(text: Optional[str]) -> Optional[str]:
    """Returns 'true' / 'false', or None when the input means 'no constraint' or is unknown."""
    return ACTIVE_LOOKUP.get(normalize_text(text))


def resolve_payment_state(text: Optional[str]) -> Optional[str]:
    """
    Maps a payment-status label to UP_TO_DATE / EXPIRED / VOIDED.

    'Pago: Al día' -> 'UP_TO_DATE', 'Vencido' -> 'EXPIRED', 'Todos' -> None.
    Unknown labels also give None so they never narrow the query by accident.
    """
    key = _PAYMENT_PREFIX.sub("", normalize_text(text)).strip()
    if key in NO_CONSTRAINT:
        return None
    if key in CANONICAL_PAYMENT_STATES:
        return key
    state = PAYMENT_STATE_LOOKUP.get(key)
    if state is None:
        logger.debug("Unrecognized payment status %r ignored", text)
    return state


def resolve_client_filters(raw: Mapping[str, Optional[str]]) -> ClientFilters:
    """
    Builds ClientFilters from raw inputs keyed 'q', 'active' and 'payment'.
    Missing or blank inputs produce no constraint.
    """
    q = (raw.get("q") or "").strip()
    return ClientFilters(
        q=raw.get("q") if q else None,
        active=resolve_active(raw.get("active")),
        payment=resolve_payment_state(raw.get("payment")),
    )


def resolve_client_ids_from_query(text: Optional[str], cached_clients: Iterable[Client]) -> List[int]:
    """
    Resolves free text to client ids.

    - Text starting with digits is an explicit id: '7 anything' -> [7], even if
      client 7 isn't cached.
    - Otherwise every cached client whose full name or email contains the text
      (case-insensitive), in cache order.
    """
    query = (text or "").strip()
    if not query:
        return []

    m = _LEADING_DIGITS.match(query)
    if m:
        return [int(m.group())]

    needle = query.lower()
    return [
        c.id for c in cached_clients
        if c.id is not None and (needle in c.full_name.lower() or needle in (c.email or "").lower())
    ]


def resolve_payment_filters(
    client_text: Optional[str],
    date_from: DateLike,
    date_to: DateLike,
    state_text: Optional[str],
    cached_clients: Iterable[Client],
    **page: int,
) -> PaymentFilters:
    """
    Builds PaymentFilters from the payments page inputs.

    A non-empty client search that matches nobody yields client_ids=(),
    which callers must treat as "no results" and not as "no filter".

    Raises:
        ValidationError: If the date range is reversed.
    """
    validate_date_range(date_from, date_to)

    client_ids = None
    if (client_text or "").strip():
        client_ids = tuple(resolve_client_ids_from_query(client_text, cached_clients))
        if not client_ids:
            logger.info("Client search %r matched no cached clients", client_text)

    return PaymentFilters(
        client_ids=client_ids,
        date_from=parse_date(date_from),
        date_to=parse_date(date_to),
        state=resolve_payment_state(state_text),
        **page,
    )
