"""Pluggable ACME validation client contract.

Exports the abstract base class and the structured error type.
"""

from acmewell.client.base import ValidationClient, ValidationError

__all__ = [
    "ValidationClient",
    "ValidationError",
]
