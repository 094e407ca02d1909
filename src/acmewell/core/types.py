"""Enumerated types and fixed protocol constants for acmewell.

All enums inherit from ``StrEnum`` so their ``.value`` is a plain
string that JSON round-trips naturally and compares equal to the raw
status strings returned by ACME servers.
"""

from __future__ import annotations

from enum import StrEnum

# ---------------------------------------------------------------------------
# HTTP surface
# ---------------------------------------------------------------------------

CHALLENGE_PREFIX = "/.well-known/acme-challenge/"
"""Reserved path prefix intercepted by the middleware (RFC 8555 §8.3)."""

NOT_FOUND_BODY = b"Challenge not found"


# ---------------------------------------------------------------------------
# Challenge
# ---------------------------------------------------------------------------


class ChallengeStatus(StrEnum):
    PENDING = "pending"
    PROCESSING = "processing"
    VALID = "valid"
    INVALID = "invalid"
    EXPIRED = "expired"


class ChallengeType(StrEnum):
    HTTP_01 = "http-01"


# ---------------------------------------------------------------------------
# Poller
# ---------------------------------------------------------------------------


class PollState(StrEnum):
    POLLING = "polling"
    RESOLVED = "resolved"
    EXHAUSTED = "exhausted"
