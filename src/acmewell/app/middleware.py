"""WSGI middleware answering ACME HTTP-01 challenges.

:class:`AcmeChallengeMiddleware` wraps any WSGI application.  Requests
under ``/.well-known/acme-challenge/`` are answered from the challenge
store; everything else is handed to the wrapped application untouched.

Serving a proof launches a background :class:`VerificationPoller` run
that waits for the CA to finish validating, then deletes the store
entry and notifies the optional resolution hook.  The HTTP response
never waits on that run.

The middleware also fronts the validation client for the hosting
application: :meth:`authorize`, :meth:`register` and
:meth:`new_certificate`.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from acmewell.app.errors import NOT_FOUND, ConfigurationError
from acmewell.core.types import CHALLENGE_PREFIX
from acmewell.services.poller import VerificationPoller

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from acmewell.client.base import ValidationClient
    from acmewell.models.challenge import Http01Challenge
    from acmewell.services.poller import ResolutionHook
    from acmewell.store.base import ChallengeStore

log = logging.getLogger(__name__)

ENVIRON_KEY = "acmewell.middleware"


class AcmeChallengeMiddleware:
    """WSGI middleware serving HTTP-01 proofs from a challenge store.

    Parameters
    ----------
    app:
        The wrapped WSGI application.
    challenge_store:
        Required.  Shared store of serialized challenge snapshots.
    client:
        Required.  Adapter to the ACME CA.
    on_setup:
        Optional callable run once at the end of construction with the
        middleware as its only argument (e.g. to configure the client's
        directory URL or account key).
    on_challenge:
        Optional ``(challenge, final_status)`` callback, invoked by the
        poller when a run finishes.  Never called on the request path.
    poller:
        Optional pre-built poller.  Built from *challenge_store*,
        *client* and *on_challenge* when omitted.  A pre-built poller
        carries its own hook, so it cannot be combined with
        *on_challenge*.

    Raises
    ------
    ConfigurationError
        If *challenge_store* or *client* is ``None``, or if both
        *poller* and *on_challenge* are given.

    """

    def __init__(
        self,
        app,
        *,
        challenge_store: ChallengeStore | None,
        client: ValidationClient | None,
        on_setup: Callable[[AcmeChallengeMiddleware], object] | None = None,
        on_challenge: ResolutionHook | None = None,
        poller: VerificationPoller | None = None,
    ) -> None:
        if challenge_store is None:
            msg = "challenge_store is required"
            raise ConfigurationError(msg)
        if client is None:
            msg = "client is required"
            raise ConfigurationError(msg)
        if poller is not None and on_challenge is not None:
            msg = "on_challenge cannot be combined with a pre-built poller"
            raise ConfigurationError(msg)

        self.app = app
        self._store = challenge_store
        self._client = client
        self._poller = poller or VerificationPoller(
            challenge_store,
            client,
            on_challenge=on_challenge,
        )

        if on_setup is not None:
            on_setup(self)

    # -- collaborators ------------------------------------------------------

    @property
    def client(self) -> ValidationClient:
        return self._client

    @property
    def challenge_store(self) -> ChallengeStore:
        return self._store

    @property
    def poller(self) -> VerificationPoller:
        return self._poller

    # -- request path -------------------------------------------------------

    def handle_challenge(self, token: str) -> tuple[str, list[tuple[str, str]], bytes]:
        """Build the ``(status, headers, body)`` answer for *token*.

        Unknown tokens get the fixed 404.  Known tokens get their proof
        and a background poller run.
        """
        snapshot = self._store.get(token)
        if snapshot is None:
            log.info(
                "Challenge %s not found",
                token,
                extra={"token": token, "path": CHALLENGE_PREFIX + token},
            )
            status, headers, body = NOT_FOUND
            return status, list(headers), body

        challenge = self._client.challenge_from_dict(json.loads(snapshot))
        content = challenge.file_content
        if isinstance(content, str):
            content = content.encode("utf-8")

        self._poller.launch(challenge)
        log.info(
            "Served challenge %s",
            token,
            extra={"token": token, "path": CHALLENGE_PREFIX + token},
        )
        return "200 OK", [("Content-Type", challenge.content_type)], content

    def __call__(self, environ, start_response) -> Iterable[bytes]:
        environ[ENVIRON_KEY] = self
        path = environ.get("PATH_INFO", "")

        if path.startswith(CHALLENGE_PREFIX):
            token = path[len(CHALLENGE_PREFIX) :]
            status, headers, body = self.handle_challenge(token)
            start_response(status, headers)
            return [body]

        return self.app(environ, start_response)

    # -- application entry points -------------------------------------------

    def authorize(self, **options: Any) -> Http01Challenge:
        """Create an authorization and arm its HTTP-01 challenge.

        The challenge snapshot is stored before verification is
        requested so the CA can fetch the proof as soon as it is told
        to.  Client errors propagate unchanged.
        """
        authorization = self._client.authorize(**options)
        challenge = authorization.http01
        self._store.put(challenge.token, json.dumps(challenge.to_dict()))
        self._client.request_verification(challenge)
        log.info(
            "Requested verification for challenge %s",
            challenge.token,
            extra={"token": challenge.token},
        )
        return challenge

    def register(self, **options: Any) -> Any:  # noqa: ANN401
        return self._client.register(**options)

    def new_certificate(self, csr: Any) -> Any:  # noqa: ANN401
        """Request a certificate for *csr*, passed to the client as given."""
        return self._client.new_certificate(csr)

    # -- shutdown -----------------------------------------------------------

    def close(self, timeout: float | None = None) -> bool:
        """Wait for in-flight poller runs; see :meth:`VerificationPoller.join`."""
        return self._poller.join(timeout)
