# =============================================================================
# File: activity_log.py
# Date: 2026-10-18
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

"""Bounded in-memory log of completed translations.

Entries older than the retention window, and the oldest entries beyond
``max_entries``, are dropped lazily on every record/recent/stats call.
"""

import time
from collections import deque
from dataclasses import asdict, dataclass
from threading import Lock
from typing import Any, Callable, Deque, Dict, List, Optional


@dataclass(frozen=True)
class ActivityLogEntry:
    timestamp: int  # epoch milliseconds
    source_lang: str
    target_lang: str
    source: str
    translated: str

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["from"] = data.pop("source_lang")
        data["to"] = data.pop("target_lang")
        return data


class ActivityLog:
    def __init__(
        self,
        retention_seconds: float = 20 * 60,
        max_entries: int = 1000,
        excerpt_chars: int = 500,
        clock: Callable[[], float] = time.time,
    ):
        self.retention_ms = int(retention_seconds * 1000)
        self.max_entries = max_entries
        self.excerpt_chars = excerpt_chars
        self._clock = clock
        self._entries: Deque[ActivityLogEntry] = deque()
        self._lock = Lock()

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    def _evict(self, now_ms: int) -> None:
        cutoff = now_ms - self.retention_ms
        while self._entries and self._entries[0].timestamp < cutoff:
            self._entries.popleft()
        while len(self._entries) > self.max_entries:
            self._entries.popleft()

    def record(
        self,
        source_lang: str,
        target_lang: str,
        source: Optional[str],
        translated: Optional[str],
    ) -> ActivityLogEntry:
        now = self._now_ms()
        entry = ActivityLogEntry(
            timestamp=now,
            source_lang=source_lang,
            target_lang=target_lang,
            source=(source or "")[: self.excerpt_chars],
            translated=(translated or "")[: self.excerpt_chars],
        )
        with self._lock:
            # Keep insertion order monotonic even if the clock steps back.
            if self._entries and self._entries[-1].timestamp > now:
                entry = ActivityLogEntry(
                    self._entries[-1].timestamp,
                    entry.source_lang,
                    entry.target_lang,
                    entry.source,
                    entry.translated,
                )
            self._entries.append(entry)
            self._evict(now)
        return entry

    def recent(self, limit: int = 100) -> List[ActivityLogEntry]:
        """Most recent ``limit`` entries, oldest first."""
        with self._lock:
            self._evict(self._now_ms())
            if limit <= 0:
                return []
            entries = list(self._entries)
        return entries[-limit:]

    def stats(self) -> Dict[str, Optional[int]]:
        now = self._now_ms()
        with self._lock:
            self._evict(now)
            last_minute = sum(1 for e in self._entries if now - e.timestamp < 60_000)
            return {
                "total_entries": len(self._entries),
                "last_minute_count": last_minute,
                "oldest_timestamp": self._entries[0].timestamp if self._entries else None,
                "newest_timestamp": self._entries[-1].timestamp if self._entries else None,
            }

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
