"""Application configuration and constants."""
import os
from pathlib import Path


def _parse_int_env(name: str, default: int) -> int:
    """Parse integer from environment variable."""
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


# Database
DB_DIR = Path(os.environ.get("DB_DIR", Path.cwd() / "data"))
DB_DIR.mkdir(parents=True, exist_ok=True)
DATABASE_URL = os.environ.get(
    "DATABASE_URL", f"sqlite:///{DB_DIR / 'quizzes.db'}"
)
SQLITE_BUSY_TIMEOUT_MS = _parse_int_env("SQLITE_BUSY_TIMEOUT_MS", 5000)

# Listing limits
REPORTS_LIST_LIMIT = _parse_int_env("REPORTS_LIST_LIMIT", 100)

# Spaced repetition (SM-2)
REVIEW_DEFAULT_EASINESS = 2.5
REVIEW_MIN_EASINESS = 1.3
