"""Logging subsystem for acmewell.

Public API::

    from acmewell.logging import configure_logging

    configure_logging(settings.logging)
"""

from acmewell.logging.setup import configure_logging

__all__ = ["configure_logging"]
