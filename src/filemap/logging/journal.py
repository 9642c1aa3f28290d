"""Structured JSONL journal of file map mutations."""

from __future__ import annotations

import json
from collections.abc import Sequence
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import Protocol

from filemap import constants as H
from filemap.models import FileMetaData


@dataclass(slots=True, frozen=True)
class ChangeEvent:
    """One record change applied to the file map."""

    timestamp: str
    operation: str
    path: str
    ok: bool
    metadata: dict[str, object]


class ChangeJournal(Protocol):
    """Sink for the events of each mutation call."""

    def write_batch(self, events: Sequence[ChangeEvent]) -> None:
        """Record the events of one mutation call together."""


def utc_timestamp() -> str:
    """Return an ISO-8601 UTC timestamp."""
    return datetime.now(tz=UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def summarize_metadata(metadata: FileMetaData | None) -> dict[str, object]:
    """Summarize a record without writing module names or hashes verbatim."""
    if metadata is None:
        return {}
    dependencies = metadata[H.DEPENDENCIES]
    mtime = metadata[H.MTIME]
    size = metadata[H.SIZE]
    return {
        "dependency_count": (
            len(dependencies.split(H.DEPENDENCY_DELIM))
            if isinstance(dependencies, str) and dependencies
            else 0
        ),
        "module_name_present": bool(metadata[H.ID]),
        "mtime": mtime if isinstance(mtime, (int, float)) else None,
        "sha1_present": bool(metadata[H.SHA1]),
        "size": size if isinstance(size, int) else None,
        "symlink": metadata[H.SYMLINK] != 0,
    }


class JsonlChangeJournal:
    """Append-only JSONL change journal, one line per event."""

    def __init__(self, path: Path) -> None:
        self._path = path
        self._path.parent.mkdir(parents=True, exist_ok=True)

    @property
    def path(self) -> Path:
        """Return on-disk JSONL path."""
        return self._path

    def write_batch(self, events: Sequence[ChangeEvent]) -> None:
        """Write every event of one mutation call with a single append."""
        if not events:
            return
        lines = "".join(json.dumps(asdict(event), sort_keys=True) + "\n" for event in events)
        with self._path.open("a", encoding="utf-8") as handle:
            handle.write(lines)
