"""
Rendering helpers shared by the dashboard, inbox, calendar and résumé views.
"""

from datetime import date, datetime
from typing import Optional

STATUS_PENDING = "Pending"
STATUS_SUCCESS = "Success"
STATUS_FAILED = "Failed"
APPLICANT_STATUSES = (STATUS_PENDING, STATUS_SUCCESS, STATUS_FAILED)

# Badge colors used by the applicant table
STATUS_BADGE_COLORS = {
    STATUS_SUCCESS: "success",
    STATUS_PENDING: "primary",
    STATUS_FAILED: "error",
}

# Calendar colors per notification type, anything else renders as "success"
EVENT_COLORS = {
    "Interview": "danger",
    "Meeting": "primary",
    "Reminder": "warning",
}

DAY_IN_SECONDS = 86400


def badge_color(status: Optional[str]) -> str:
    return STATUS_BADGE_COLORS.get(status, "light")


def event_color(notification_type: Optional[str]) -> str:
    return EVENT_COLORS.get(notification_type, "success")


def full_name(first_name: Optional[str], last_name: Optional[str], default: str = "N/A") -> str:
    return f"{first_name or default} {last_name or ''}".strip()


def format_short_date(value: datetime) -> str:
    """Jan 5, 2025"""
    return f"{value:%b} {value.day}, {value.year}"


def format_numeric_date(value: datetime) -> str:
    """1/5/2025"""
    return f"{value.month}/{value.day}/{value.year}"


def format_time_ago(timestamp: Optional[datetime], now: Optional[datetime] = None, short: bool = False) -> str:
    """
    Render how long ago something happened.

    Under a day old this is "<n> seconds|minutes|hours ago" (or the
    "sec|min|hr ago" short form), older timestamps fall back to a date.
    """
    if not isinstance(timestamp, datetime):
        return "N/A" if short else "Unknown time"

    now = now or datetime.utcnow()
    diff = int((now - timestamp).total_seconds())

    if diff < 60:
        return f"{diff} sec ago" if short else f"{diff} seconds ago"
    if diff < 3600:
        return f"{diff // 60} min ago" if short else f"{diff // 60} minutes ago"
    if diff < DAY_IN_SECONDS:
        return f"{diff // 3600} hr ago" if short else f"{diff // 3600} hours ago"

    return format_numeric_date(timestamp) if short else format_short_date(timestamp)


def format_scheduled_date(value: Optional[str]) -> str:
    """Turn a stored YYYY-MM-DD into "January 5, 2025"."""
    if not value or value == "Not set":
        return "Not set"

    try:
        parsed = date.fromisoformat(value)
    except ValueError:
        return value

    return f"{parsed:%B} {parsed.day}, {parsed.year}"


def success_rate(success: int, total: int) -> str:
    if total <= 0:
        return "0%"
    return f"{success / total * 100:.1f}%"


def percentage(part: int, total: int) -> float:
    if total <= 0:
        return 0.0
    return round(part / total * 100, 1)
