"""Background verification poller.

After the challenge proof has been served, a poller run watches the
challenge's status at the CA until it leaves ``pending`` or the
attempt budget is used up, then forgets the challenge:

1. the store entry for the token is deleted (idempotent);
2. the optional resolution hook is called with the challenge and the
   final status (``None`` when the budget ran out).

Attempt ``n`` (0-indexed) sleeps ``1 + n**2`` seconds before checking,
giving delays of 1, 2, 5, 10 and 17 seconds for the default budget of
five attempts.  A failed status check counts as ``pending``.

Runs execute on daemon threads.  At most one run per token is active
at a time; launching a token that is already being polled is a no-op.
There is no cancellation: a run ends at a terminal state or at process
exit.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

from acmewell.core.types import ChallengeStatus, PollState

if TYPE_CHECKING:
    from collections.abc import Callable

    from acmewell.client.base import ValidationClient
    from acmewell.models.challenge import Http01Challenge
    from acmewell.store.base import ChallengeStore

    ResolutionHook = Callable[[Http01Challenge, "str | None"], object]

log = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 5


def backoff_delay(attempt: int) -> int:
    """Seconds to wait before the 0-indexed *attempt*."""
    return 1 + attempt**2


@dataclass(frozen=True)
class PollAttempt:
    attempt: int
    delay: float
    status: str | None


@dataclass(frozen=True)
class PollResult:
    """Outcome of one poller run."""

    token: str
    state: PollState
    status: str | None
    attempts: tuple[PollAttempt, ...]


class VerificationPoller:
    """Runs bounded-retry status checks for served challenges.

    Parameters
    ----------
    challenge_store:
        Store whose entry is deleted when a run finishes.
    client:
        Validation client used for ``poll_status``.
    on_challenge:
        Optional ``(challenge, final_status)`` callback invoked once per
        run after the store entry is deleted.
    max_attempts:
        Number of status checks before giving up (default 5).
    sleep:
        Blocking sleep function; injectable so tests can record delays
        instead of waiting.
    join_timeout:
        Default number of seconds :meth:`join` waits for in-flight runs.

    """

    def __init__(
        self,
        challenge_store: ChallengeStore,
        client: ValidationClient,
        *,
        on_challenge: ResolutionHook | None = None,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        sleep: Callable[[float], None] = time.sleep,
        join_timeout: float = 40,
    ) -> None:
        if max_attempts < 1:
            msg = f"max_attempts must be at least 1 (got {max_attempts})"
            raise ValueError(msg)
        self._store = challenge_store
        self._client = client
        self._on_challenge = on_challenge
        self._max_attempts = max_attempts
        self._sleep = sleep
        self._join_timeout = join_timeout
        self._active: dict[str, threading.Thread] = {}
        self._lock = threading.Lock()
        self._idle = threading.Condition(self._lock)

    # -- introspection ------------------------------------------------------

    @property
    def max_attempts(self) -> int:
        return self._max_attempts

    @property
    def active_tokens(self) -> frozenset[str]:
        """Tokens with a run currently in flight."""
        with self._lock:
            return frozenset(self._active)

    def is_active(self, token: str) -> bool:
        with self._lock:
            return token in self._active

    # -- launching ----------------------------------------------------------

    def launch(self, challenge: Http01Challenge) -> bool:
        """Start a background run for *challenge* and return immediately.

        Returns ``False`` without starting anything when a run for the
        same token is already in flight.
        """
        token = challenge.token
        with self._lock:
            if token in self._active:
                log.debug("Poller already running for challenge %s, not relaunching", token)
                return False
            thread = threading.Thread(
                target=self._run_tracked,
                args=(challenge,),
                name=f"acmewell-poller-{token[:16]}",
                daemon=True,
            )
            self._active[token] = thread

        try:
            thread.start()
        except RuntimeError:
            self._release(token)
            raise
        log.debug("Poller launched for challenge %s", token)
        return True

    def _run_tracked(self, challenge: Http01Challenge) -> None:
        try:
            self.run(challenge)
        except Exception:
            log.exception("Poller for challenge %s crashed", challenge.token)
        finally:
            self._release(challenge.token)

    def _release(self, token: str) -> None:
        with self._idle:
            self._active.pop(token, None)
            if not self._active:
                self._idle.notify_all()

    # -- polling ------------------------------------------------------------

    def run(self, challenge: Http01Challenge) -> PollResult:
        """Poll *challenge* to a terminal state on the calling thread."""
        attempts: list[PollAttempt] = []
        final_status: str | None = None

        for n in range(self._max_attempts):
            delay = backoff_delay(n)
            self._sleep(delay)
            observed = self._check(challenge, n)
            attempts.append(PollAttempt(attempt=n, delay=delay, status=observed))
            if observed is not None and observed != ChallengeStatus.PENDING:
                final_status = observed
                break

        if final_status is None:
            state = PollState.EXHAUSTED
            log.warning(
                "Challenge %s still pending after %d attempts, giving up",
                challenge.token,
                len(attempts),
            )
        else:
            state = PollState.RESOLVED
            log.info(
                "Challenge %s resolved as %s after %d attempt(s)",
                challenge.token,
                final_status,
                len(attempts),
            )

        self._finalize(challenge, final_status)
        return PollResult(
            token=challenge.token,
            state=state,
            status=final_status,
            attempts=tuple(attempts),
        )

    def _check(self, challenge: Http01Challenge, attempt: int) -> str | None:
        try:
            return str(self._client.poll_status(challenge))
        except Exception:
            # Counts as pending for this attempt
            log.debug(
                "Status check %d for challenge %s failed",
                attempt + 1,
                challenge.token,
                exc_info=True,
            )
            return None

    def _finalize(self, challenge: Http01Challenge, final_status: str | None) -> None:
        try:
            self._store.delete(challenge.token)
        except Exception:
            log.exception("Failed to delete challenge %s from store", challenge.token)

        if self._on_challenge is None:
            return
        try:
            self._on_challenge(challenge, final_status)
        except Exception:
            log.exception("Resolution hook failed for challenge %s", challenge.token)

    # -- shutdown -----------------------------------------------------------

    def join(self, timeout: float | None = None) -> bool:
        """Wait for in-flight runs to finish.

        Returns ``True`` when no run is left in flight, ``False`` when
        the timeout expired first.  Runs still in flight keep going.
        """
        if timeout is None:
            timeout = self._join_timeout
        deadline = time.monotonic() + timeout
        with self._idle:
            while self._active:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    log.warning(
                        "Poller join timed out with %d run(s) in flight",
                        len(self._active),
                    )
                    return False
                self._idle.wait(timeout=remaining)
        return True
