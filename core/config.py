"""Client configuration for the quiz-taking window."""
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


API_URL = os.environ.get("QUIZ_API_URL", "http://127.0.0.1:8000").rstrip("/")
USERNAME = os.environ.get("QUIZ_USERNAME")

# Reports that could not be saved are kept here until flush-pending runs
PENDING_PATH = Path(
    os.environ.get(
        "QUIZ_PENDING_PATH", Path.home() / ".quiz-session" / "pending_submissions.json"
    )
)

# Timing
TICK_SECONDS = 1.0
INIT_GRACE_SECONDS = _parse_int_env("QUIZ_INIT_GRACE_MS", 1000) / 1000
FULLSCREEN_SUPPRESSION_SECONDS = (
    _parse_int_env("QUIZ_FULLSCREEN_SUPPRESSION_MS", 100) / 1000
)

# Network
REQUEST_TIMEOUT = _parse_int_env("QUIZ_REQUEST_TIMEOUT", 10)
BEACON_TIMEOUT = _parse_int_env("QUIZ_BEACON_TIMEOUT", 3)
FETCH_RETRIES = 3
FETCH_RETRY_DELAY = 2.0
