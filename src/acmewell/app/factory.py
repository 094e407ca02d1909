"""Wiring helpers: build the middleware from settings.

Usage::

    from acmewell.app import init_flask_app
    from acmewell.config import AcmewellConfig

    cfg = AcmewellConfig(config_file="acmewell.yaml")
    acme = init_flask_app(app, client=MyAcmeClient(), settings=cfg.settings)
    acme.authorize(domain="example.com")
"""

from __future__ import annotations

import atexit
import logging
from typing import TYPE_CHECKING

from acmewell.app.middleware import AcmeChallengeMiddleware
from acmewell.config.settings import build_settings
from acmewell.hooks.loader import load_callable
from acmewell.logging import configure_logging
from acmewell.services.poller import VerificationPoller
from acmewell.store.factory import create_challenge_store

if TYPE_CHECKING:
    from collections.abc import Callable

    import redis
    from flask import Flask

    from acmewell.client.base import ValidationClient
    from acmewell.config.settings import AcmewellSettings
    from acmewell.services.poller import ResolutionHook
    from acmewell.store.base import ChallengeStore

log = logging.getLogger(__name__)

EXTENSION_KEY = "acmewell"


def create_middleware(  # noqa: PLR0913
    app,
    client: ValidationClient,
    *,
    settings: AcmewellSettings | None = None,
    challenge_store: ChallengeStore | None = None,
    redis_client: redis.Redis | None = None,
    on_setup: Callable[[AcmeChallengeMiddleware], object] | None = None,
    on_challenge: ResolutionHook | None = None,
) -> AcmeChallengeMiddleware:
    """Build an :class:`AcmeChallengeMiddleware` around *app*.

    Explicit arguments take precedence over *settings*: a given
    *challenge_store* is used as-is, and *on_setup* / *on_challenge*
    override the hook paths from ``settings.hooks``.
    """
    if settings is None:
        settings = build_settings({})

    if challenge_store is None:
        challenge_store = create_challenge_store(settings.store, redis_client)

    if on_setup is None and settings.hooks.on_setup:
        on_setup = load_callable(settings.hooks.on_setup)
    if on_challenge is None and settings.hooks.on_challenge:
        on_challenge = load_callable(settings.hooks.on_challenge)

    poller = VerificationPoller(
        challenge_store,
        client,
        on_challenge=on_challenge,
        max_attempts=settings.poller.max_attempts,
        join_timeout=settings.poller.join_timeout_seconds,
    )

    middleware = AcmeChallengeMiddleware(
        app,
        challenge_store=challenge_store,
        client=client,
        on_setup=on_setup,
        poller=poller,
    )
    log.info(
        "ACME challenge middleware ready (store=%s, max_attempts=%d)",
        type(challenge_store).__name__,
        settings.poller.max_attempts,
    )
    return middleware


def init_flask_app(
    flask_app: Flask,
    client: ValidationClient,
    *,
    settings: AcmewellSettings | None = None,
    configure_logs: bool = False,
    **kwargs,
) -> AcmeChallengeMiddleware:
    """Install the challenge middleware as the outermost WSGI layer of *flask_app*.

    The middleware is also registered as ``flask_app.extensions["acmewell"]``
    so views can call ``authorize`` / ``register`` / ``new_certificate``,
    and its poller is joined at interpreter exit.
    """
    if settings is None:
        settings = build_settings({})
    if configure_logs:
        configure_logging(settings.logging)

    middleware = create_middleware(
        flask_app.wsgi_app,
        client,
        settings=settings,
        **kwargs,
    )
    flask_app.wsgi_app = middleware  # type: ignore[method-assign]
    flask_app.extensions[EXTENSION_KEY] = middleware
    atexit.register(middleware.close)
    return middleware
