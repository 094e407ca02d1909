"""Redis-backed challenge store.

Every token is stored under ``prefix + token`` so challenge entries
can share a Redis database with unrelated data.  An optional TTL
bounds the lifetime of entries whose poller never finalized (e.g.
after an abrupt process shutdown).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from acmewell.store.base import ChallengeStore

if TYPE_CHECKING:
    import redis

log = logging.getLogger(__name__)

DEFAULT_PREFIX = "acmewell:"


class RedisChallengeStore(ChallengeStore):
    """Challenge store on top of a ``redis.Redis`` client.

    Parameters
    ----------
    redis_client:
        A connected :class:`redis.Redis` (or compatible) client.
    prefix:
        Namespace prepended to every token.
    ttl_seconds:
        Expiry applied on :meth:`put`.  ``None`` keeps entries until
        they are deleted.

    """

    def __init__(
        self,
        redis_client: redis.Redis,
        prefix: str = DEFAULT_PREFIX,
        ttl_seconds: int | None = None,
    ) -> None:
        self._redis = redis_client
        self._prefix = prefix
        self._ttl = ttl_seconds

    @property
    def prefix(self) -> str:
        return self._prefix

    def _key(self, token: str) -> str:
        return self._prefix + token

    def get(self, token: str) -> str | None:
        value = self._redis.get(self._key(token))
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    def put(self, token: str, snapshot: str) -> None:
        if self._ttl:
            self._redis.set(self._key(token), snapshot, ex=self._ttl)
        else:
            self._redis.set(self._key(token), snapshot)

    def delete(self, token: str) -> None:
        # DEL on a missing key returns 0
        removed = self._redis.delete(self._key(token))
        if not removed:
            log.debug("Challenge %s was already absent from Redis", token)
