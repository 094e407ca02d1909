"""acmewell — answer ACME HTTP-01 challenges from inside any WSGI app.

Public API::

    from acmewell import AcmeChallengeMiddleware, InMemoryChallengeStore

    app.wsgi_app = AcmeChallengeMiddleware(
        app.wsgi_app,
        challenge_store=InMemoryChallengeStore(),
        client=my_client,
    )
"""

from acmewell.app import (
    AcmeChallengeMiddleware,
    ConfigurationError,
    create_middleware,
    init_flask_app,
)
from acmewell.client import ValidationClient, ValidationError
from acmewell.models import Authorization, Http01Challenge
from acmewell.store import ChallengeStore, InMemoryChallengeStore, RedisChallengeStore

__version__ = "0.1.0"

__all__ = [
    "AcmeChallengeMiddleware",
    "Authorization",
    "ChallengeStore",
    "ConfigurationError",
    "Http01Challenge",
    "InMemoryChallengeStore",
    "RedisChallengeStore",
    "ValidationClient",
    "ValidationError",
    "__version__",
    "create_middleware",
    "init_flask_app",
]
