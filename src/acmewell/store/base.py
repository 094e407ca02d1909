"""Abstract base class for challenge stores.

A challenge store maps challenge tokens to serialized challenge
snapshots (JSON strings).  Implementations must be safe for
concurrent use from the request path and any number of poller
threads, and must give read-your-writes visibility per token.

``delete`` must be idempotent: removing a token that is not present
is not an error.
"""

from __future__ import annotations

import abc


class ChallengeStore(abc.ABC):
    """Base class for all challenge store backends."""

    @abc.abstractmethod
    def get(self, token: str) -> str | None:
        """Return the snapshot stored for *token*, or ``None``."""

    @abc.abstractmethod
    def put(self, token: str, snapshot: str) -> None:
        """Store *snapshot* under *token*, replacing any previous value."""

    @abc.abstractmethod
    def delete(self, token: str) -> None:
        """Remove *token*.  Must not raise when the token is absent."""
