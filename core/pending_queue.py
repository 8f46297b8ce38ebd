"""
Durable local queue for reports the server did not accept.

The JSON helpers are kept here rather than imported from ``api.utils`` so the
quiz window installs and runs without the server's FastAPI stack.
"""
import json
import logging
import threading
from datetime import datetime, timezone
from pathlib import Path

log = logging.getLogger(__name__)


def _read_json_file(path: Path, default: object) -> object:
    if not path.exists():
        return default
    return json.loads(path.read_text(encoding="utf-8"))


def _write_json_file(path: Path, payload: object) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    tmp_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8"
    )
    tmp_path.replace(path)


class PendingQueue:
    """JSON-file list of report payloads waiting for a retry.

    A file that does not parse as a list is moved aside to
    ``<name>.corrupt-<timestamp>`` before anything new is written, so its
    reports can still be recovered by hand. Read errors propagate from
    ``append`` and ``remove``; only ``load`` turns them into an empty list.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()

    def load(self) -> list[dict[str, object]]:
        with self._lock:
            try:
                return self._load_unlocked()
            except OSError as exc:
                log.warning("Pending queue %s is unreadable: %s", self.path, exc)
                return []

    def _load_unlocked(self) -> list[dict[str, object]]:
        try:
            data = _read_json_file(self.path, [])
        except json.JSONDecodeError as exc:
            self._quarantine(f"invalid JSON ({exc})")
            return []
        if not isinstance(data, list):
            self._quarantine(f"expected a list, got {type(data).__name__}")
            return []
        return [item for item in data if isinstance(item, dict)]

    def _quarantine(self, problem: str) -> Path:
        stamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S%f")
        target = self.path.with_name(f"{self.path.name}.corrupt-{stamp}")
        self.path.replace(target)
        log.error(
            "Pending queue %s is corrupt: %s; moved it to %s", self.path, problem, target
        )
        return target

    def append(self, payload: dict[str, object]) -> None:
        with self._lock:
            entries = self._load_unlocked()
            entries.append(payload)
            _write_json_file(self.path, entries)
        log.info("Queued report for later retry (%d pending)", len(entries))

    def remove(self, done: list[dict[str, object]]) -> None:
        """Drop the given entries, keeping anything appended meanwhile."""
        if not done:
            return
        with self._lock:
            remaining = self._load_unlocked()
            for payload in done:
                if payload in remaining:
                    remaining.remove(payload)
            _write_json_file(self.path, remaining)

    def __len__(self) -> int:
        return len(self.load())
