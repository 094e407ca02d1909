"""WSGI / Flask integration for acmewell.

Public API::

    from acmewell.app import AcmeChallengeMiddleware, init_flask_app
"""

from acmewell.app.errors import ConfigurationError
from acmewell.app.factory import create_middleware, init_flask_app
from acmewell.app.middleware import AcmeChallengeMiddleware

__all__ = [
    "AcmeChallengeMiddleware",
    "ConfigurationError",
    "create_middleware",
    "init_flask_app",
]
