import datetime
from enum import Enum
from typing import Optional, Union

from core.utils import parse_date
from models.client import Client


class MembershipStatus(str, Enum):
    ACTIVE = "ACTIVE"
    PAUSED = "PAUSED"
    INACTIVE = "INACTIVE"


def is_currently_paused(client: Client, as_of: Optional[Union[datetime.date, datetime.datetime]] = None) -> bool:
    """
    True if as_of (default: today) falls inside [paused_from, paused_to], both inclusive.
    Only the date part is compared. A reversed window contains no dates.
    The 'active' flag plays no part here.
    """
    start = parse_date(client.paused_from)
    end = parse_date(client.paused_to)
    if start is None or end is None:
        return False

    day = parse_date(as_of) if as_of is not None else datetime.date.today()
    return start <= day <= end


def derived_status(client: Client, as_of: Optional[Union[datetime.date, datetime.datetime]] = None) -> MembershipStatus:
    """INACTIVE beats PAUSED, PAUSED beats ACTIVE."""
    if not client.active:
        return MembershipStatus.INACTIVE
    if is_currently_paused(client, as_of):
        return MembershipStatus.PAUSED
    return MembershipStatus.ACTIVE
