"""Error types and fixed responses for the challenge middleware."""

from __future__ import annotations

from acmewell.core.types import NOT_FOUND_BODY


class ConfigurationError(ValueError):
    """Raised at construction when a required collaborator is missing."""


NOT_FOUND_STATUS = "404 Not Found"
NOT_FOUND_HEADERS: tuple[tuple[str, str], ...] = (("Content-Type", "text/plain"),)
NOT_FOUND = (NOT_FOUND_STATUS, NOT_FOUND_HEADERS, NOT_FOUND_BODY)
