"""Per-session record of forecast runs.

Events go to one JSONL file per UTC day; raw provider payloads, when enabled,
get one pretty-printed JSON file each. Both are redacted before writing.
"""

from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from .exceptions import JournalError
from .redaction import sanitize_for_logging, sanitize_text


def _json_default(value: Any) -> Any:
    if isinstance(value, datetime):
        aware = value if value.tzinfo is not None else value.replace(tzinfo=UTC)
        return aware.astimezone(UTC).isoformat()
    if isinstance(value, (set, frozenset)):
        return sorted(value)
    if isinstance(value, Path):
        return str(value)
    # Settings URLs and similar types stringify cleanly; anything else is a bug.
    if type(value).__str__ is not object.__str__:
        return sanitize_text(str(value))
    raise TypeError(f"cannot journal value of type {type(value).__name__}")


def _snapshot_stem(name: str) -> str:
    return "".join(ch if ch.isalnum() or ch in "-_" else "_" for ch in name)


class JournalWriter:
    """Appends forecast events and stores raw payload snapshots for one session."""

    def __init__(self, journal_dir: Path, raw_payload_dir: Path, session_id: str) -> None:
        self.journal_dir = journal_dir
        self.raw_payload_dir = raw_payload_dir
        self.session_id = session_id
        try:
            for directory in (journal_dir, raw_payload_dir):
                directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise JournalError(f"Cannot create journal directories: {exc}") from exc
        self.events_path = journal_dir / f"{datetime.now(UTC):%Y%m%d}.jsonl"

    def write_event(
        self,
        event_type: str,
        payload: dict[str, Any],
        metadata: dict[str, Any] | None = None,
    ) -> None:
        """Append one ``forecast_*`` event line."""
        record = {
            "ts": datetime.now(UTC).isoformat(),
            "event_type": event_type,
            "session_id": self.session_id,
            "payload": sanitize_for_logging(payload),
            "metadata": sanitize_for_logging(metadata or {}),
        }
        try:
            line = json.dumps(record, default=_json_default)
            with self.events_path.open("a", encoding="utf-8") as fh:
                fh.write(line + "\n")
        except (OSError, TypeError, ValueError) as exc:
            raise JournalError(f"Cannot append {event_type} event: {exc}") from exc

    def write_raw_snapshot(self, name: str, payload: Any) -> Path:
        """Store a provider payload as-received (minus credentials)."""
        stamp = datetime.now(UTC).strftime("%Y%m%dT%H%M%SZ")
        path = self.raw_payload_dir / f"{stamp}_{self.session_id}_{_snapshot_stem(name)}.json"
        try:
            text = json.dumps(
                sanitize_for_logging(payload),
                ensure_ascii=False,
                indent=2,
                default=_json_default,
            )
            path.write_text(text + "\n", encoding="utf-8")
        except (OSError, TypeError, ValueError) as exc:
            raise JournalError(f"Cannot write raw payload snapshot: {exc}") from exc
        return path
