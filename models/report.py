import datetime
from dataclasses import dataclass
from typing import Any, Dict, Optional

from core.utils import parse_date, parse_datetime


@dataclass
class ExpiringClient:
    """A client whose last valid payment expires within the next 7 days."""
    id: int
    first_name: str
    last_name: str
    email: str
    active: bool
    expiration_date: Optional[datetime.date]

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExpiringClient":
        return cls(
            id=int(data["id"]),
            first_name=data.get("firstName") or "",
            last_name=data.get("lastName") or "",
            email=data.get("email") or "",
            active=bool(data.get("active", True)),
            expiration_date=parse_date(data.get("expirationDate")),
        )


@dataclass
class OverdueClient(ExpiringClient):
    """A client whose last valid (non-voided) payment has already expired."""
    reminder_sent: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OverdueClient":
        base = ExpiringClient.from_dict(data)
        return cls(**base.__dict__, reminder_sent=bool(data.get("reminderSent")))


@dataclass
class DashboardStats:
    active_clients: int = 0
    expired_payments: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DashboardStats":
        return cls(
            active_clients=int(data.get("activeClients") or 0),
            expired_payments=int(data.get("expiredPayments") or 0),
        )


@dataclass
class Activity:
    """Entry of the dashboard's recent activity feed (new client, payment, void...)."""
    type: str
    title: str
    description: str
    timestamp: Optional[datetime.datetime]
    related_id: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Activity":
        related = data.get("relatedId")
        return cls(
            type=data.get("type") or "",
            title=data.get("title") or "",
            description=data.get("description") or "",
            timestamp=parse_datetime(data.get("timestamp")),
            related_id=int(related) if related is not None else None,
        )
