import datetime
import logging
from typing import List, Optional

import config
from core.session import ApiSession, read_json
from core.utils import DateLike, days_until, format_date, validate_date_range
from core.errors import ApiError, NetworkError, ValidationError
from models.report import Activity, DashboardStats, ExpiringClient, OverdueClient

logger = logging.getLogger(__name__)


# --- BACKEND REPORTS ---

def expiring_report(session: ApiSession) -> List[ExpiringClient]:
    """Clients whose last valid payment expires within the next 7 days."""
    response = session.send(f"{config.REPORTS_PATH}/expiring", fallback="Could not load the expiring report")
    return [ExpiringClient.from_dict(d) for d in read_json(response, default=[]) or []]


def overdue_report(session: ApiSession) -> List[OverdueClient]:
    """Clients whose last valid payment is already expired."""
    response = session.send(f"{config.REPORTS_PATH}/overdue", fallback="Could not load the overdue report")
    return [OverdueClient.from_dict(d) for d in read_json(response, default=[]) or []]


def cashflow(session: ApiSession, date_from: DateLike, date_to: DateLike) -> float:
    """
    Total collected between two dates (inclusive).

    Raises:
        ValidationError: Missing dates or a reversed range (nothing is sent).
    """
    if not date_from or not date_to:
        raise ValidationError("Please select a date range.")
    validate_date_range(date_from, date_to)

    response = session.send(
        f"{config.REPORTS_PATH}/cashflow",
        params={"from": format_date(date_from), "to": format_date(date_to)},
        fallback="Could not load the cashflow report",
    )
    return float(read_json(response, default=0) or 0)


def dashboard_stats(session: ApiSession) -> DashboardStats:
    response = session.send(f"{config.DASHBOARD_PATH}/stats", fallback="Could not load dashboard stats")
    return DashboardStats.from_dict(read_json(response, default={}) or {})


def recent_activities(session: ApiSession, limit: int = 10) -> List[Activity]:
    response = session.send(f"{config.DASHBOARD_PATH}/activities", params={"limit": limit},
                            fallback="Could not load recent activity")
    return [Activity.from_dict(d) for d in read_json(response, default=[]) or []]


# --- BRIEF ---

def generate_brief(
    stats: DashboardStats,
    expiring: List[ExpiringClient],
    overdue: List[OverdueClient],
    target_date: Optional[datetime.date] = None,
    activities: Optional[List[Activity]] = None,
) -> str:
    """
    Builds the markdown briefing shown from the dashboard.

    Args:
        stats (DashboardStats): Active client and expired payment counters.
        expiring (list): Rows of the expiring report.
        overdue (list): Rows of the overdue report.
        target_date (datetime.date, optional): Date printed in the header. Defaults to today.
        activities (list, optional): Recent activity feed appended at the end.

    Returns:
        str: Markdown text.
    """
    if not target_date:
        target_date = datetime.date.today()

    lines = []
    lines.append(f"📅 **DAILY BRIEFING** ({target_date.strftime('%B %d, %Y')})")
    lines.append("-" * 40)
    lines.append("")
    lines.append(f"🟢 **Active clients:** {stats.active_clients}")
    lines.append(f"🔴 **Expired payments:** {stats.expired_payments}")
    lines.append("")

    if not expiring:
        lines.append("✅ **Expiring soon:** Nobody's payment expires this week.")
    else:
        lines.append(f"⏳ **Expiring soon:** {len(expiring)} client(s) in the next 7 days.")
        for c in sorted(expiring, key=lambda c: c.expiration_date or target_date):
            left = days_until(c.expiration_date) if c.expiration_date else None
            when = "today" if left == 0 else (f"in {left} day(s)" if left is not None else "date unknown")
            lines.append(f" • {c.full_name} ({c.email}) expires {when}")
    lines.append("")

    if overdue:
        pending = [c for c in overdue if not c.reminder_sent]
        lines.append(f"⚠️ **Overdue:** {len(overdue)} client(s), {len(pending)} without a reminder.")
        for c in overdue:
            mark = "" if c.reminder_sent else " (no reminder sent)"
            lines.append(f" • {c.full_name}: expired {format_date(c.expiration_date)}{mark}")
    else:
        lines.append("👍 **Overdue:** None.")

    if activities:
        lines.append("")
        lines.append("🕒 **Recent activity:**")
        for a in activities:
            when = a.timestamp.strftime("%Y-%m-%d %H:%M") if a.timestamp else "-"
            lines.append(f" • [{when}] {a.title}: {a.description}")

    lines.append("")
    lines.append("-" * 40)
    lines.append("End of Report.")

    return "\n".join(lines)


def build_brief(session: ApiSession, target_date: Optional[datetime.date] = None) -> str:
    """
    Fetches stats, both reports and the activity feed, then renders the brief.
    A failing activity feed leaves that section out instead of failing the brief.
    """
    stats = dashboard_stats(session)
    expiring = expiring_report(session)
    overdue = overdue_report(session)
    try:
        activities = recent_activities(session)
    except (ApiError, NetworkError) as e:
        logger.warning("Brief without activity feed: %s", e)
        activities = []
    return generate_brief(stats, expiring, overdue, target_date, activities)
