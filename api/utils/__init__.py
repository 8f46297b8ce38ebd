"""Utility modules."""
from api.utils.time_utils import days_from_now, parse_iso_timestamp, utc_now, utc_today
from api.utils.validation import normalize_username, validate_id

__all__ = [
    "days_from_now",
    "parse_iso_timestamp",
    "utc_now",
    "utc_today",
    "normalize_username",
    "validate_id",
]
