"""Entity models for acmewell.

All models are frozen dataclasses.  Use :func:`dataclasses.replace`
for modifications (copy-on-write).
"""

from acmewell.models.challenge import Authorization, Http01Challenge

__all__ = [
    "Authorization",
    "Http01Challenge",
]
