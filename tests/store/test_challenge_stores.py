"""Tests for the challenge store backends and their factory."""

from __future__ import annotations

import threading
from unittest.mock import MagicMock, patch

import pytest

from acmewell.config.settings import StoreSettings
from acmewell.store.base import ChallengeStore
from acmewell.store.factory import create_challenge_store
from acmewell.store.memory import InMemoryChallengeStore
from acmewell.store.redis_store import DEFAULT_PREFIX, RedisChallengeStore


def _settings(**overrides) -> StoreSettings:
    values = {"backend": "memory", "redis_url": None, "prefix": "acmewell:", "ttl_seconds": None}
    values.update(overrides)
    return StoreSettings(**values)


# ---------------------------------------------------------------------------
# Contract shared by every backend
# ---------------------------------------------------------------------------


@pytest.fixture(params=["memory", "redis"])
def store(request, fake_redis) -> ChallengeStore:
    if request.param == "memory":
        return InMemoryChallengeStore()
    return RedisChallengeStore(fake_redis)


class TestStoreContract:
    def test_get_missing_returns_none(self, store):
        assert store.get("nope") is None

    def test_put_then_get_reads_own_write(self, store):
        store.put("tok", '{"token": "tok"}')
        assert store.get("tok") == '{"token": "tok"}'

    def test_put_replaces_previous_value(self, store):
        store.put("tok", "first")
        store.put("tok", "second")
        assert store.get("tok") == "second"

    def test_delete_removes_entry(self, store):
        store.put("tok", "x")
        store.delete("tok")
        assert store.get("tok") is None

    def test_delete_twice_is_not_an_error(self, store):
        store.put("tok", "x")
        store.delete("tok")
        store.delete("tok")
        assert store.get("tok") is None

    def test_delete_never_stored_is_not_an_error(self, store):
        store.delete("ghost")

    def test_tokens_are_independent(self, store):
        store.put("a", "1")
        store.put("b", "2")
        store.delete("a")
        assert store.get("b") == "2"


# ---------------------------------------------------------------------------
# In-memory specifics
# ---------------------------------------------------------------------------


class TestInMemoryChallengeStore:
    def test_len_and_contains(self):
        store = InMemoryChallengeStore()
        store.put("a", "1")
        assert len(store) == 1
        assert "a" in store
        assert "b" not in store

    def test_concurrent_writers(self):
        store = InMemoryChallengeStore()

        def _writer(prefix: str) -> None:
            for i in range(200):
                store.put(f"{prefix}-{i}", "x")
                if i % 2:
                    store.delete(f"{prefix}-{i}")

        threads = [threading.Thread(target=_writer, args=(f"t{n}",)) for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(store) == 4 * 100


# ---------------------------------------------------------------------------
# Redis specifics
# ---------------------------------------------------------------------------


class TestRedisChallengeStore:
    def test_keys_are_namespaced(self, fake_redis):
        store = RedisChallengeStore(fake_redis)
        store.put("example.com-token", "snap")
        assert list(fake_redis.data) == [f"{DEFAULT_PREFIX}example.com-token"]

    def test_custom_prefix(self, fake_redis):
        store = RedisChallengeStore(fake_redis, prefix="rackacme:")
        store.put("tok", "snap")
        assert "rackacme:tok" in fake_redis.data
        assert store.prefix == "rackacme:"

    def test_bytes_are_decoded(self, fake_redis):
        store = RedisChallengeStore(fake_redis)
        fake_redis.data[f"{DEFAULT_PREFIX}tok"] = "snäp".encode()
        assert store.get("tok") == "snäp"

    def test_str_values_pass_through(self):
        redis_client = MagicMock()
        redis_client.get.return_value = "already-decoded"
        store = RedisChallengeStore(redis_client)
        assert store.get("tok") == "already-decoded"
        redis_client.get.assert_called_once_with(f"{DEFAULT_PREFIX}tok")

    def test_ttl_applied_on_put(self):
        redis_client = MagicMock()
        store = RedisChallengeStore(redis_client, ttl_seconds=300)
        store.put("tok", "snap")
        redis_client.set.assert_called_once_with(f"{DEFAULT_PREFIX}tok", "snap", ex=300)

    def test_no_ttl_by_default(self):
        redis_client = MagicMock()
        store = RedisChallengeStore(redis_client)
        store.put("tok", "snap")
        redis_client.set.assert_called_once_with(f"{DEFAULT_PREFIX}tok", "snap")

    def test_store_errors_propagate(self):
        redis_client = MagicMock()
        redis_client.get.side_effect = ConnectionError("redis down")
        store = RedisChallengeStore(redis_client)
        with pytest.raises(ConnectionError):
            store.get("tok")


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


class TestCreateChallengeStore:
    def test_memory_backend(self):
        assert isinstance(create_challenge_store(_settings()), InMemoryChallengeStore)

    def test_redis_backend_with_client(self, fake_redis):
        store = create_challenge_store(
            _settings(backend="redis", prefix="p:", ttl_seconds=60),
            fake_redis,
        )
        assert isinstance(store, RedisChallengeStore)
        store.put("tok", "x")
        assert fake_redis.expiry == {"p:tok": 60}

    def test_redis_backend_builds_client_from_url(self):
        with patch("redis.Redis.from_url") as from_url:
            store = create_challenge_store(
                _settings(backend="redis", redis_url="redis://cache:6379/2"),
            )
        from_url.assert_called_once_with("redis://cache:6379/2")
        assert isinstance(store, RedisChallengeStore)

    def test_redis_backend_without_url_or_client(self):
        with pytest.raises(ValueError, match="redis_url"):
            create_challenge_store(_settings(backend="redis"))
