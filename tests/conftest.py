"""Root conftest for the acmewell test suite."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import pytest

# ---------------------------------------------------------------------------
# Make ``src/`` importable without installing the package
# ---------------------------------------------------------------------------
_SRC = str(Path(__file__).resolve().parent.parent / "src")
if _SRC not in sys.path:
    sys.path.insert(0, _SRC)

from acmewell.client.base import ValidationClient  # noqa: E402
from acmewell.models.challenge import Authorization, Http01Challenge  # noqa: E402

# ---------------------------------------------------------------------------
# Test doubles
# ---------------------------------------------------------------------------


class ScriptedClient(ValidationClient):
    """Validation client whose ``poll_status`` answers come from a script.

    Each script item is either a status string or an exception instance
    to raise.  Once the script runs out every check returns ``pending``.
    """

    def __init__(self, statuses: list[Any] | None = None, proof: str = "abc123") -> None:
        self.statuses = list(statuses or [])
        self.proof = proof
        self.poll_calls: list[str] = []
        self.verification_requests: list[str] = []
        self.registrations: list[dict] = []
        self.csrs: list[Any] = []

    def authorize(self, **options: Any) -> Authorization:
        domain = options["domain"]
        challenge = Http01Challenge(
            token=f"{domain}-token",
            key_authorization=self.proof,
            content_type="text/plain",
            url=f"https://ca.example.test/chall/{domain}",
        )
        return Authorization(identifier=domain, challenges=(challenge,))

    def challenge_from_dict(self, data: dict[str, Any]) -> Http01Challenge:
        return Http01Challenge.from_dict(data)

    def request_verification(self, challenge: Http01Challenge) -> None:
        self.verification_requests.append(challenge.token)

    def poll_status(self, challenge: Http01Challenge) -> str:
        self.poll_calls.append(challenge.token)
        if not self.statuses:
            return "pending"
        item = self.statuses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    def register(self, **options: Any) -> dict:
        self.registrations.append(options)
        return {"status": "valid", **options}

    def new_certificate(self, csr: Any) -> str:
        self.csrs.append(csr)
        return "-----BEGIN CERTIFICATE-----\n..."


class FakeRedis:
    """Just enough of ``redis.Redis`` for the challenge store."""

    def __init__(self) -> None:
        self.data: dict[str, bytes] = {}
        self.expiry: dict[str, int] = {}

    def get(self, key: str) -> bytes | None:
        return self.data.get(key)

    def set(self, key: str, value: str, ex: int | None = None) -> bool:
        self.data[key] = value.encode("utf-8")
        if ex is not None:
            self.expiry[key] = ex
        return True

    def delete(self, *keys: str) -> int:
        removed = 0
        for key in keys:
            if self.data.pop(key, None) is not None:
                removed += 1
            self.expiry.pop(key, None)
        return removed


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def scripted_client():
    """Factory for :class:`ScriptedClient` instances."""
    return ScriptedClient


@pytest.fixture()
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture()
def challenge() -> Http01Challenge:
    return Http01Challenge(
        token="example.com-token",
        key_authorization="abc123",
        content_type="text/plain",
    )


@pytest.fixture()
def no_sleep() -> list[float]:
    """A recording sleep replacement; append-only list of requested delays."""
    return []
