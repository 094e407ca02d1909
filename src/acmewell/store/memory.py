"""In-memory challenge store.

Suitable for single-process deployments and tests.  Entries do not
survive a restart and are not shared between workers.
"""

from __future__ import annotations

import threading

from acmewell.store.base import ChallengeStore


class InMemoryChallengeStore(ChallengeStore):
    """Thread-safe dict-backed store."""

    def __init__(self) -> None:
        self._entries: dict[str, str] = {}
        self._lock = threading.Lock()

    def get(self, token: str) -> str | None:
        with self._lock:
            return self._entries.get(token)

    def put(self, token: str, snapshot: str) -> None:
        with self._lock:
            self._entries[token] = snapshot

    def delete(self, token: str) -> None:
        with self._lock:
            self._entries.pop(token, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, token: object) -> bool:
        with self._lock:
            return token in self._entries
