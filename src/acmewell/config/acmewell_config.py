"""acmewell configuration loader.

Lifecycle::

    cfg = AcmewellConfig(config_file="/etc/acmewell/acmewell.yaml")
    cfg.settings.store.backend   # typed access
    cfg.get("store.redis_url")   # dynamic dot-path

The loaded settings tree is frozen; build it once at startup and pass
it to :func:`acmewell.app.factory.create_middleware`.
"""

from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml
from jsonschema import Draft202012Validator

from acmewell.config.settings import AcmewellSettings, build_settings

_SCHEMA_PATH = Path(__file__).parent / "schema.json"

_ENV_RE = re.compile(
    r"^\$\{([^}:]+?)(?::-(.*))?\}$",
    re.DOTALL,
)

_CALLABLE_PATH_RE = re.compile(
    r"^[a-zA-Z_][a-zA-Z0-9_]*(\.[a-zA-Z_][a-zA-Z0-9_]*)+$",
)

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Validation error collector
# ---------------------------------------------------------------------------


class ConfigValidationError(Exception):
    """Raised when schema or cross-field validation finds problems."""

    def __init__(self, errors: list[str]) -> None:
        """Store *errors* and build a human-readable message."""
        self.errors = errors
        body = "\n".join(f"  - {e}" for e in errors)
        super().__init__(f"Configuration validation failed:\n{body}")


# ---------------------------------------------------------------------------
# Environment variable resolution
# ---------------------------------------------------------------------------


def _resolve_value(value: str, path: str) -> str:
    """Replace ``${VAR}`` or ``${VAR:-default}`` with env var value."""
    match = _ENV_RE.match(value)
    if match is None:
        return value
    var_name = match.group(1)
    fallback = match.group(2)
    resolved = os.environ.get(var_name)
    if resolved is not None:
        return resolved
    if fallback is not None:
        return fallback
    raise ConfigValidationError(
        [
            f"Environment variable '${{{var_name}}}' referenced "
            f"at '{path}' is not set and has no default",
        ],
    )


def _resolve_env_vars(
    data: Any,  # noqa: ANN401
    path: str = "",
) -> None:
    """Walk *data* in-place and resolve ``${VAR}``/``${VAR:-default}`` strings."""
    if isinstance(data, dict):
        for key in data:
            child_path = f"{path}.{key}" if path else key
            if isinstance(data[key], str):
                data[key] = _resolve_value(data[key], child_path)
            elif isinstance(data[key], (dict, list)):
                _resolve_env_vars(data[key], child_path)
    elif isinstance(data, list):
        for idx, item in enumerate(data):
            child_path = f"{path}[{idx}]"
            if isinstance(item, str):
                data[idx] = _resolve_value(item, child_path)
            elif isinstance(item, (dict, list)):
                _resolve_env_vars(item, child_path)


# ---------------------------------------------------------------------------
# Config class
# ---------------------------------------------------------------------------


class AcmewellConfig:
    """Configuration for the acmewell middleware.

    The JSON schema is bundled at ``config/schema.json``; users supply
    only ``config_file``.  After construction the typed settings tree
    is available at :pyattr:`settings` and the raw dict via
    :pyattr:`data` / :pymeth:`get`.

    Raises
    ------
    ConfigValidationError
        If the file cannot be parsed, fails schema validation, or fails
        the cross-field checks.

    """

    def __init__(self, *, config_file: str | Path) -> None:
        self._source = Path(config_file)
        self._data = self._load()
        self._validate_schema()
        self.additional_checks()
        self._settings: AcmewellSettings = build_settings(self._data)

    # -- lifecycle ----------------------------------------------------------

    def _load(self) -> dict:
        """Load the config file then resolve ``${VAR}`` env-var references.

        Runs env-var resolution **before** schema validation so that
        substituted values (e.g. ``${LOG_LEVEL:-INFO}``) are checked
        against enum constraints in the schema.
        """
        try:
            with self._source.open(encoding="utf-8") as f:
                if self._source.suffix == ".json":
                    data = json.load(f)
                else:
                    data = yaml.safe_load(f)
        except OSError as exc:
            msg = f"Cannot read config file '{self._source}': {exc}"
            raise ConfigValidationError([msg]) from exc
        except (yaml.YAMLError, json.JSONDecodeError) as exc:
            msg = f"Cannot parse config file '{self._source}': {exc}"
            raise ConfigValidationError([msg]) from exc

        if data is None:
            data = {}
        if not isinstance(data, dict):
            msg = f"Config file '{self._source}' must contain a mapping at the top level"
            raise ConfigValidationError([msg])

        _resolve_env_vars(data)
        return data

    def _validate_schema(self) -> None:
        schema = json.loads(_SCHEMA_PATH.read_text(encoding="utf-8"))
        validator = Draft202012Validator(schema)
        errors = []
        found = sorted(
            validator.iter_errors(self._data),
            key=lambda e: [str(p) for p in e.path],
        )
        for err in found:
            location = ".".join(str(p) for p in err.path) or "<root>"
            errors.append(f"{location}: {err.message}")
        if errors:
            raise ConfigValidationError(errors)

    # -- typed access -------------------------------------------------------

    @property
    def settings(self) -> AcmewellSettings:
        """Fully-typed, frozen settings tree."""
        return self._settings

    @property
    def data(self) -> dict:
        return self._data

    def get(self, path: str, default: Any = None) -> Any:  # noqa: ANN401
        """Return the raw value at dotted *path*, or *default*."""
        node: Any = self._data
        for part in path.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    # -- cross-field validation ---------------------------------------------

    def additional_checks(self) -> None:
        """Semantic & cross-field validation, run after schema validation."""
        errors: list[str] = []

        store = self._data.get("store") or {}
        hooks = self._data.get("hooks") or {}

        # -- store --
        if store.get("backend") == "redis" and not store.get("redis_url"):
            errors.append("store.redis_url is required when store.backend is 'redis'")
        if store.get("backend", "memory") == "memory" and store.get("ttl_seconds"):
            log.warning(
                "Config warning: store.ttl_seconds has no effect with the memory backend",
            )

        # -- hooks --
        for name in ("on_setup", "on_challenge"):
            path = hooks.get(name)
            if path and not _CALLABLE_PATH_RE.match(path):
                errors.append(
                    f"hooks.{name} must be a dotted import path like "
                    f"'package.module.function' (got '{path}')",
                )

        if errors:
            raise ConfigValidationError(errors)

    def __repr__(self) -> str:
        """Return a developer-friendly representation."""
        return f"<AcmewellConfig config_file={self._source}>"
