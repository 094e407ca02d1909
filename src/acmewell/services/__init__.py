"""Background services for acmewell."""

from acmewell.services.poller import (
    PollAttempt,
    PollResult,
    VerificationPoller,
    backoff_delay,
)

__all__ = [
    "PollAttempt",
    "PollResult",
    "VerificationPoller",
    "backoff_delay",
]
