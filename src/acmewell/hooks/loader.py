"""Load hook callables from dotted import paths.

Configuration names hooks as ``package.module.attribute``; the path
format is validated before touching :mod:`importlib`, and a broken
hook makes startup fail loudly.
"""

from __future__ import annotations

import importlib
import logging
import re
from typing import Any

log = logging.getLogger(__name__)

_CALLABLE_PATH_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*(\.[a-zA-Z_][a-zA-Z0-9_]*)+$")


class HookLoadError(Exception):
    """Raised when a configured hook cannot be imported or is not callable."""


def load_callable(path: str) -> Any:  # noqa: ANN401
    """Import and return the callable named by *path*.

    Raises
    ------
    HookLoadError
        On a malformed path, a failed import, a missing attribute, or
        an attribute that is not callable.

    """
    if not _CALLABLE_PATH_RE.match(path):
        msg = f"Invalid hook path '{path}': expected 'package.module.attribute'"
        raise HookLoadError(msg)

    module_path, _, attr_name = path.rpartition(".")
    try:
        module = importlib.import_module(module_path)
    except ImportError as exc:
        msg = f"Cannot import hook module '{module_path}': {exc}"
        raise HookLoadError(msg) from exc

    target = getattr(module, attr_name, None)
    if target is None:
        msg = f"Module '{module_path}' has no attribute '{attr_name}'"
        raise HookLoadError(msg)
    if not callable(target):
        msg = f"Hook '{path}' is not callable"
        raise HookLoadError(msg)

    log.debug("Loaded hook %s", path)
    return target
