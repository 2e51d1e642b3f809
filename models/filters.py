import datetime
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

import config


@dataclass(frozen=True)
class ClientFilters:
    """Normalized query for GET /api/clients. None means 'no constraint'."""
    q: Optional[str] = None
    active: Optional[str] = None   # "true" / "false"
    payment: Optional[str] = None  # PaymentState value

    def to_params(self) -> Dict[str, str]:
        params = {"q": self.q, "active": self.active, "payment": self.payment}
        return {k: v for k, v in params.items() if v is not None}


@dataclass(frozen=True)
class PaymentFilters:
    """
    Normalized query for GET /api/payments.

    client_ids:
        None -> no client constraint.
        ()   -> a search matched nobody; the result is empty and no request is made.
    """
    client_ids: Optional[Tuple[int, ...]] = None
    date_from: Optional[datetime.date] = None
    date_to: Optional[datetime.date] = None
    state: Optional[str] = None
    page: int = 0
    size: int = config.PAYMENTS_PAGE_SIZE

    @property
    def matches_nothing(self) -> bool:
        return self.client_ids is not None and len(self.client_ids) == 0

    def to_params(self, client_id: Optional[int] = None) -> Dict[str, Any]:
        """Shared constraints (date range, state, page size) plus an optional single client id."""
        params: Dict[str, Any] = {"page": self.page, "size": self.size}
        if client_id is not None:
            params["clientId"] = client_id
        if self.date_from:
            params["from"] = self.date_from.isoformat()
        if self.date_to:
            params["to"] = self.date_to.isoformat()
        if self.state:
            params["state"] = self.state
        return params
