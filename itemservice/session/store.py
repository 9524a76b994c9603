"""Session storage interface and the in-process default implementation."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from threading import Lock
from typing import Any
from typing import Protocol
import logging
import time

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionMetadata:
    """Timestamps (seconds from the store clock) and state of one session."""

    created_at: float
    last_accessed_at: float
    is_new: bool


class SessionStore(Protocol):
    """Key-value session storage keyed by an opaque session token."""

    @property
    def idle_timeout_seconds(self) -> float: ...

    def get(self, token: str) -> Any | None: ...

    def set(self, token: str, value: Any) -> None: ...

    def remove(self, token: str) -> None: ...

    def describe(self, token: str) -> SessionMetadata | None: ...


@dataclass
class _SessionEntry:
    value: Any
    created_at: float
    last_accessed: float
    is_new: bool = True


class InMemorySessionStore:
    """Process-local session map that forgets sessions idle longer than the timeout.

    Idle entries are dropped when read, and all idle entries are purged
    whenever a new session is stored.
    """

    def __init__(
        self,
        *,
        idle_timeout_seconds: float = 1800.0,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if idle_timeout_seconds <= 0:
            raise ValueError("idle_timeout_seconds must be positive")
        self._idle_timeout_seconds = idle_timeout_seconds
        self._clock = clock
        self._entries: dict[str, _SessionEntry] = {}
        self._lock = Lock()

    @property
    def idle_timeout_seconds(self) -> float:
        return self._idle_timeout_seconds

    def get(self, token: str) -> Any | None:
        now = self._clock()
        with self._lock:
            entry = self._live_entry(token, now)
            if entry is None:
                return None
            entry.last_accessed = now
            entry.is_new = False
            return entry.value

    def set(self, token: str, value: Any) -> None:
        now = self._clock()
        with self._lock:
            self._purge_idle(now)
            self._entries[token] = _SessionEntry(value=value, created_at=now, last_accessed=now)

    def remove(self, token: str) -> None:
        with self._lock:
            self._entries.pop(token, None)

    def describe(self, token: str) -> SessionMetadata | None:
        """Return the session's timestamps without refreshing its idle window."""
        with self._lock:
            entry = self._live_entry(token, self._clock())
            if entry is None:
                return None
            return SessionMetadata(
                created_at=entry.created_at,
                last_accessed_at=entry.last_accessed,
                is_new=entry.is_new,
            )

    def _is_idle(self, entry: _SessionEntry, now: float) -> bool:
        return now - entry.last_accessed > self._idle_timeout_seconds

    def _live_entry(self, token: str, now: float) -> _SessionEntry | None:
        entry = self._entries.get(token)
        if entry is None:
            return None
        if self._is_idle(entry, now):
            del self._entries[token]
            logger.info("Session expired after idle timeout")
            return None
        return entry

    def _purge_idle(self, now: float) -> None:
        expired = [token for token, entry in self._entries.items() if self._is_idle(entry, now)]
        for token in expired:
            del self._entries[token]
        if expired:
            logger.info("Purged %d idle sessions", len(expired))

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
