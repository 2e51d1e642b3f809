import datetime
import unicodedata
from typing import Optional, Union

from core.errors import ValidationError

DateLike = Union[datetime.date, datetime.datetime, str, None]

EPOCH = datetime.date(1970, 1, 1)


def parse_date(value: DateLike) -> Optional[datetime.date]:
    """
    Reduces a backend date value to a plain date (local midnight, time discarded).
    Accepts date objects, datetimes and ISO strings like '2024-03-01' or
    '2024-03-01T10:15:00'. Returns None for empty or unparseable values.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime.datetime):
        if value.tzinfo is not None:
            value = value.astimezone()
        return value.date()
    if isinstance(value, datetime.date):
        return value
    try:
        return datetime.date.fromisoformat(str(value).strip()[:10])
    except ValueError:
        return None


def parse_datetime(value: DateLike) -> Optional[datetime.datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime.datetime):
        return value
    if isinstance(value, datetime.date):
        return datetime.datetime(value.year, value.month, value.day)
    text = str(value).strip().replace("Z", "+00:00")
    try:
        return datetime.datetime.fromisoformat(text)
    except ValueError:
        d = parse_date(text)
        return datetime.datetime(d.year, d.month, d.day) if d else None


def format_date(value: DateLike) -> str:
    """Formats for query strings and display ('YYYY-MM-DD'); '-' when missing."""
    d = parse_date(value)
    return d.isoformat() if d else "-"


def _utc_midnight(text: str) -> datetime.datetime:
    try:
        d = datetime.datetime.strptime(text.strip(), "%Y-%m-%d")
    except (AttributeError, ValueError):
        raise ValidationError(f"Invalid date: {text!r} (expected YYYY-MM-DD)")
    return d.replace(tzinfo=datetime.timezone.utc)


def pause_duration_days(date_from: str, date_to: str) -> int:
    """
    Inclusive number of days in a pause window.
    Both ends are parsed at UTC midnight so DST changes can't shift the count.
    Example: '2024-03-01' -> '2024-03-07' is 7 days.

    Raises:
        ValidationError: If a date is malformed or date_to is before date_from.
    """
    start = _utc_midnight(date_from)
    end = _utc_midnight(date_to)
    if end < start:
        raise ValidationError("The end date can't be before the start date.")
    return (end - start).days + 1


def validate_date_range(date_from: DateLike, date_to: DateLike) -> None:
    """Raises ValidationError if both ends are set and the range is reversed."""
    start, end = parse_date(date_from), parse_date(date_to)
    if start and end and end < start:
        raise ValidationError("'To' date must be on or after 'From' date.")


def strip_accents(text: str) -> str:
    """'Vencido' stays, 'Al día' -> 'Al dia'."""
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(ch for ch in decomposed if unicodedata.category(ch) != "Mn")


def days_until(end_date: datetime.date) -> int:
    """
    Calculates the number of days remaining until end_date.
    Returns negative numbers if the date has passed.
    """
    return (end_date - datetime.date.today()).days
