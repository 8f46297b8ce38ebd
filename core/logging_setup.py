from __future__ import annotations
import logging
import os


def _resolve_level(level: int | str | None) -> int:
    if level is None:
        level = os.environ.get("QUIZ_LOG_LEVEL", "INFO")
    if isinstance(level, str):
        value = logging.getLevelName(level.upper())
        return value if isinstance(value, int) else logging.INFO
    return level


def setup_console_logging(level: int | str | None = None) -> None:
    """
    Call once per process (quiz window, CLI, API server).

    ``level`` falls back to ``QUIZ_LOG_LEVEL`` and then INFO.
    """
    resolved = _resolve_level(level)
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter(
                "[%(asctime)s] %(levelname)s %(threadName)s %(name)s: %(message)s",
                datefmt="%H:%M:%S",
            )
        )
        root.addHandler(handler)
    root.setLevel(resolved)
    # connection pool chatter drowns out delivery logs
    logging.getLogger("urllib3").setLevel(max(resolved, logging.WARNING))
