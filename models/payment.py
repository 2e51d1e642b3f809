import datetime
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from core.utils import parse_date


class PaymentState(str, Enum):
    PENDING = "PENDING"
    UP_TO_DATE = "UP_TO_DATE"
    EXPIRED = "EXPIRED"
    VOIDED = "VOIDED"


class PaymentMethod(str, Enum):
    CASH = "CASH"
    DEBIT = "DEBIT"
    CREDIT = "CREDIT"
    TRANSFER = "TRANSFER"
    OTHER = "OTHER"


class PaymentDuration(Enum):
    """Billing periods accepted when registering a payment."""
    FIFTEEN_DAYS = 15
    ONE_MONTH = 30

    @property
    def days(self) -> int:
        return self.value


@dataclass
class Payment:
    """
    A single payment as returned by GET /api/payments.
    Some endpoints denormalize the client's name and email onto the row.
    """
    id: Optional[int]
    client_id: Optional[int]
    amount: float
    payment_date: Optional[datetime.date] = None
    expiration_date: Optional[datetime.date] = None
    method: Optional[str] = None
    duration_days: Optional[int] = None
    voided: bool = False
    state: Optional[str] = None
    client_name: Optional[str] = None
    client_email: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Payment":
        state = data.get("state") or data.get("paymentState")
        voided = bool(data.get("voided")) or state == PaymentState.VOIDED.value
        if voided:
            state = PaymentState.VOIDED.value

        raw_id = data.get("id")
        raw_client = data.get("clientId")
        duration = data.get("durationDays")
        return cls(
            id=int(raw_id) if raw_id is not None else None,
            client_id=int(raw_client) if raw_client is not None else None,
            amount=float(data.get("amount") or 0),
            payment_date=parse_date(data.get("paymentDate")),
            expiration_date=parse_date(data.get("expirationDate")),
            method=data.get("method"),
            duration_days=int(duration) if duration is not None else None,
            voided=voided,
            state=state,
            client_name=data.get("clientName"),
            client_email=data.get("clientEmail"),
        )


@dataclass
class PaymentPage:
    """Normalized result of a payments load: rows plus the backend's total count."""
    items: List[Payment] = field(default_factory=list)
    total: int = 0
