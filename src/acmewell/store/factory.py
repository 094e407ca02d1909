"""Factory for the configured challenge store backend."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from acmewell.store.memory import InMemoryChallengeStore
from acmewell.store.redis_store import RedisChallengeStore

if TYPE_CHECKING:
    import redis

    from acmewell.config.settings import StoreSettings
    from acmewell.store.base import ChallengeStore

log = logging.getLogger(__name__)


def create_challenge_store(
    settings: StoreSettings,
    redis_client: redis.Redis | None = None,
) -> ChallengeStore:
    """Create the challenge store selected by ``settings.backend``.

    For the ``redis`` backend an existing *redis_client* is reused when
    given; otherwise one is built from ``settings.redis_url``.
    """
    if settings.backend == "redis":
        if redis_client is None:
            if not settings.redis_url:
                msg = "store.redis_url is required when store.backend is 'redis'"
                raise ValueError(msg)
            import redis  # noqa: PLC0415

            redis_client = redis.Redis.from_url(settings.redis_url)
        log.info("Using Redis challenge store (prefix=%r)", settings.prefix)
        return RedisChallengeStore(
            redis_client,
            prefix=settings.prefix,
            ttl_seconds=settings.ttl_seconds,
        )
    log.info("Using in-memory challenge store")
    return InMemoryChallengeStore()
