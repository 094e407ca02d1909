"""Pluggable challenge store backends.

Exports the abstract base class, the built-in backends, and the
settings-driven factory.
"""

from acmewell.store.base import ChallengeStore
from acmewell.store.factory import create_challenge_store
from acmewell.store.memory import InMemoryChallengeStore
from acmewell.store.redis_store import RedisChallengeStore

__all__ = [
    "ChallengeStore",
    "InMemoryChallengeStore",
    "RedisChallengeStore",
    "create_challenge_store",
]
