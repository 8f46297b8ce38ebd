"""Time utilities."""
from datetime import date, datetime, timedelta, timezone


def utc_now() -> datetime:
    """Get current UTC time."""
    return datetime.now(timezone.utc)


def utc_today() -> date:
    """Get current UTC calendar day."""
    return utc_now().date()


def days_from_now(days: int) -> datetime:
    """Get UTC time ``days`` days from now."""
    return utc_now() + timedelta(days=days)


def parse_iso_timestamp(value: object) -> datetime | None:
    """Parse ISO timestamp string to datetime."""
    if not isinstance(value, str):
        return None
    raw = value.strip()
    if not raw:
        return None
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(raw)
    except ValueError:
        return None
