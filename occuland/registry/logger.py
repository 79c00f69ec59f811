"""JSONL event logger - append-only journal of registry events"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from ..config import get


class EventLogger:
    """Append-only event journal with optional JSONL file output.

    Every event is kept in memory so tests and embedding code can query
    it with ``events()``. When an output file is configured each event is
    also appended to it as one JSON line.

    All events include a monotonic 'sequence' field for ordering.
    """

    output_path: Path | None
    _events: list[dict[str, Any]]
    _sequence: int

    def __init__(self, output_file: str | None = None) -> None:
        """Initialize the event logger.

        Args:
            output_file: JSONL file path. Defaults to logging.output_file
                from config; None keeps events in memory only.
        """
        resolved = output_file or get("logging.output_file")
        self.output_path = Path(resolved) if isinstance(resolved, str) else None
        self._events = []
        self._sequence = 0

        if self.output_path is not None:
            self.output_path.parent.mkdir(parents=True, exist_ok=True)
            # Clear existing log on init (new registry instance)
            self.output_path.write_text("")

    def log(self, event_type: str, data: dict[str, Any]) -> dict[str, Any]:
        """Record an event and return the stored entry."""
        self._sequence += 1
        event: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "sequence": self._sequence,
            "event_type": event_type,
            **data,
        }
        self._events.append(event)
        if self.output_path is not None:
            with open(self.output_path, "a") as f:
                f.write(json.dumps(event) + "\n")
        return event

    def events(self, event_type: str | None = None) -> list[dict[str, Any]]:
        """Return recorded events, optionally filtered by type."""
        if event_type is None:
            return list(self._events)
        return [e for e in self._events if e["event_type"] == event_type]

    def read_file(self) -> list[dict[str, Any]]:
        """Read the JSONL output file back. Empty when no file is configured."""
        if self.output_path is None or not self.output_path.exists():
            return []
        with open(self.output_path) as f:
            return [json.loads(line) for line in f if line.strip()]

    @property
    def sequence(self) -> int:
        """Number of events logged so far."""
        return self._sequence


# One journal per configured output file, so registries created in the same
# process share it instead of truncating each other's events
_shared_loggers: dict[Path, EventLogger] = {}


def get_event_logger(output_file: str | None = None) -> EventLogger:
    """Return the journal for a file, creating (and truncating) it once.

    Without an output file (argument or logging.output_file) every call
    gets a fresh in-memory journal.
    """
    resolved = output_file or get("logging.output_file")
    if not isinstance(resolved, str):
        return EventLogger()
    path = Path(resolved).resolve()
    if path not in _shared_loggers:
        _shared_loggers[path] = EventLogger(str(path))
    return _shared_loggers[path]


def reset_event_loggers() -> None:
    """Forget shared journals so the next registry starts a new file."""
    _shared_loggers.clear()
