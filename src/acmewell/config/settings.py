"""Typed, frozen dataclasses for every configuration section.

This module is the **single source of truth** for default values.
JSON Schema defaults exist only for documentation — these builders
are what the application actually reads.

Access pattern::

    from acmewell.config import AcmewellConfig

    cfg = AcmewellConfig(config_file="acmewell.yaml")
    print(cfg.settings.store.backend)
"""

from __future__ import annotations

from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class StoreSettings:
    """Challenge store backend selection."""

    backend: str
    redis_url: str | None
    prefix: str
    ttl_seconds: int | None


def _build_store(data: dict | None) -> StoreSettings:
    d = data or {}
    return StoreSettings(
        backend=d.get("backend", "memory"),
        redis_url=d.get("redis_url"),
        prefix=d.get("prefix", "acmewell:"),
        ttl_seconds=d.get("ttl_seconds"),
    )


# ---------------------------------------------------------------------------
# Poller
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PollerSettings:
    """Background verification poller."""

    max_attempts: int
    join_timeout_seconds: int


def _build_poller(data: dict | None) -> PollerSettings:
    d = data or {}
    return PollerSettings(
        max_attempts=d.get("max_attempts", 5),
        join_timeout_seconds=d.get("join_timeout_seconds", 40),
    )


# ---------------------------------------------------------------------------
# Hooks
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class HookSettings:
    """Dotted import paths of the optional setup / resolution hooks."""

    on_setup: str | None
    on_challenge: str | None


def _build_hooks(data: dict | None) -> HookSettings:
    d = data or {}
    return HookSettings(
        on_setup=d.get("on_setup"),
        on_challenge=d.get("on_challenge"),
    )


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LoggingSettings:
    """Application logging configuration (level, format)."""

    level: str
    format: str


def _build_logging(data: dict | None) -> LoggingSettings:
    d = data or {}
    return LoggingSettings(
        level=d.get("level", "INFO"),
        format=d.get("format", "json"),
    )


# ---------------------------------------------------------------------------
# Root settings aggregate
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AcmewellSettings:
    store: StoreSettings
    poller: PollerSettings
    hooks: HookSettings
    logging: LoggingSettings


def build_settings(data: dict) -> AcmewellSettings:
    """Build the full typed settings tree from raw config data.

    Called once during :class:`AcmewellConfig` initialization after
    schema validation and environment-variable resolution.  Also
    usable directly with an in-code dict (``build_settings({})``
    yields all defaults).
    """
    return AcmewellSettings(
        store=_build_store(data.get("store")),
        poller=_build_poller(data.get("poller")),
        hooks=_build_hooks(data.get("hooks")),
        logging=_build_logging(data.get("logging")),
    )
