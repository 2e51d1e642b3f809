import datetime
from dataclasses import dataclass
from typing import Any, Dict, Optional

from core.utils import parse_date, parse_datetime


@dataclass
class Client:
    """
    Represents a gym client (member) as returned by the backend.
    """
    id: Optional[int]
    first_name: str
    last_name: str
    email: str
    phone: str = ""
    active: bool = True
    start_date: Optional[datetime.date] = None
    paused_from: Optional[datetime.date] = None  # Inclusive
    paused_to: Optional[datetime.date] = None    # Inclusive
    pause_reason: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime.datetime] = None
    updated_at: Optional[datetime.datetime] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Client":
        """
        Builds a Client from backend JSON (camelCase).
        Older endpoints send 'telephone', 'isActive' and the email nested under 'user'.
        """
        email = data.get("email")
        if not email and isinstance(data.get("user"), dict):
            email = data["user"].get("email")

        active = data.get("active")
        if active is None:
            active = data.get("isActive", True)

        raw_id = data.get("id")
        return cls(
            id=int(raw_id) if raw_id is not None else None,
            first_name=data.get("firstName") or "",
            last_name=data.get("lastName") or "",
            email=email or "",
            phone=data.get("phone") or data.get("telephone") or "",
            active=bool(active),
            start_date=parse_date(data.get("startDate")),
            paused_from=parse_date(data.get("pausedFrom")),
            paused_to=parse_date(data.get("pausedTo")),
            pause_reason=data.get("pauseReason"),
            notes=data.get("notes"),
            created_at=parse_datetime(data.get("createdAt")),
            updated_at=parse_datetime(data.get("updatedAt")),
        )

    def to_payload(self) -> Dict[str, Any]:
        """Body for POST / PUT /api/clients. Pause fields are managed by their own endpoints."""
        payload: Dict[str, Any] = {
            "firstName": self.first_name,
            "lastName": self.last_name,
            "email": self.email,
            "phone": self.phone or None,
            "active": self.active,
            "notes": self.notes or None,
        }
        if self.id is not None:
            payload["id"] = self.id
        if self.start_date:
            payload["startDate"] = self.start_date.isoformat()
        return payload
