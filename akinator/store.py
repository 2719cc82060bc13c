"""
Session persistence with expiry.

Each entry wraps a SessionRecord with an absolute expiry (epoch ms):

    {"<session id>": {"data": {...}, "expiry": 1718000000000}}

Expired entries, and entries without a numeric expiry, read as absent and
are dropped on the next write. Every write refreshes the expiry from its own
write time.

The file store reads and rewrites the whole document per operation with no
locking, so concurrent writers to different ids can lose updates
(last writer wins on the whole file).
"""

from __future__ import annotations

import json
import logging
import time
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from akinator.models import SessionRecord

logger = logging.getLogger(__name__)

DEFAULT_TTL_MS = 10 * 60 * 1000
CACHE_FILENAME = "akinator.json"

Clock = Callable[[], int]


def now_ms() -> int:
    return int(time.time() * 1000)


class SessionStore(ABC):
    """Key-value store of session records keyed by session id."""

    def __init__(self, ttl_ms: int = DEFAULT_TTL_MS, clock: Optional[Clock] = None):
        self.ttl_ms = ttl_ms
        self.clock = clock or now_ms

    @abstractmethod
    def put(self, session_id: str, record: SessionRecord) -> None:
        """Upsert a record and reset its expiry to now + TTL."""
        pass

    @abstractmethod
    def get(self, session_id: str) -> Optional[SessionRecord]:
        """Return the record, or None if absent or expired."""
        pass

    @abstractmethod
    def delete(self, session_id: str) -> None:
        """Remove a record. Missing ids are ignored."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove all persisted state."""
        pass

    def _entry(self, record: SessionRecord) -> Dict[str, Any]:
        return {"data": record.to_dict(), "expiry": self.clock() + self.ttl_ms}

    def _is_live(self, entry: Any, now: int) -> bool:
        if not isinstance(entry, dict):
            return False
        expiry = entry.get("expiry")
        if isinstance(expiry, bool) or not isinstance(expiry, (int, float)):
            return False
        return expiry > now

    def _prune(self, entries: Dict[str, Any]) -> None:
        """Drop expired or malformed entries in place."""
        now = self.clock()
        for session_id in [k for k, v in entries.items() if not self._is_live(v, now)]:
            del entries[session_id]

    def _unwrap(self, session_id: str, entry: Any) -> Optional[SessionRecord]:
        if not self._is_live(entry, self.clock()):
            return None
        try:
            return SessionRecord.from_dict(entry["data"])
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Discarding malformed cache entry {session_id}: {e}")
            return None


class MemorySessionStore(SessionStore):
    """In-process store, mostly for tests and embedding."""

    def __init__(self, ttl_ms: int = DEFAULT_TTL_MS, clock: Optional[Clock] = None):
        super().__init__(ttl_ms=ttl_ms, clock=clock)
        self._entries: Dict[str, Dict[str, Any]] = {}

    def put(self, session_id: str, record: SessionRecord) -> None:
        self._prune(self._entries)
        self._entries[session_id] = self._entry(record)

    def get(self, session_id: str) -> Optional[SessionRecord]:
        return self._unwrap(session_id, self._entries.get(session_id))

    def delete(self, session_id: str) -> None:
        self._entries.pop(session_id, None)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


class FileSessionStore(SessionStore):
    """
    JSON file store shared by every controller pointing at the same directory.

    Usage:
        store = FileSessionStore(cache_dir="cache")
        store.put(session_id, record)
        record = store.get(session_id)

    I/O failures never propagate: reads degrade to an empty store and
    writes are dropped, both logged.
    """

    def __init__(
        self,
        cache_dir: str | Path | None = None,
        ttl_ms: int = DEFAULT_TTL_MS,
        clock: Optional[Clock] = None,
    ):
        super().__init__(ttl_ms=ttl_ms, clock=clock)
        if cache_dir is None:
            cache_dir = Path.cwd() / "cache"
        self.cache_dir = Path(cache_dir)
        self.cache_file = self.cache_dir / CACHE_FILENAME

    def put(self, session_id: str, record: SessionRecord) -> None:
        entries = self._load()
        self._prune(entries)
        entries[session_id] = self._entry(record)
        self._save(entries)

    def get(self, session_id: str) -> Optional[SessionRecord]:
        return self._unwrap(session_id, self._load().get(session_id))

    def delete(self, session_id: str) -> None:
        entries = self._load()
        if entries.pop(session_id, None) is None:
            return
        self._save(entries)

    def clear(self) -> None:
        try:
            self.cache_file.unlink(missing_ok=True)
        except OSError as e:
            logger.warning(f"Error clearing session cache {self.cache_file}: {e}")

    def _load(self) -> Dict[str, Any]:
        try:
            with open(self.cache_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.warning(f"Error loading session cache {self.cache_file}: {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"Session cache {self.cache_file} is not a JSON object, ignoring it")
            return {}
        return data

    def _save(self, entries: Dict[str, Any]) -> None:
        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
            with open(self.cache_file, "w", encoding="utf-8") as f:
                json.dump(entries, f, indent=2)
        except OSError as e:
            logger.warning(f"Error saving session cache {self.cache_file}: {e}")
