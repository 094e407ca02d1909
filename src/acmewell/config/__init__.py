"""Configuration subsystem for acmewell.

Public API::

    from acmewell.config import AcmewellConfig, build_settings

    cfg = AcmewellConfig(config_file="acmewell.yaml")
    cfg.settings.poller.max_attempts        # typed access
    defaults = build_settings({})           # in-code configuration
"""

from acmewell.config.acmewell_config import (
    AcmewellConfig,
    ConfigValidationError,
)
from acmewell.config.settings import (
    AcmewellSettings,
    HookSettings,
    LoggingSettings,
    PollerSettings,
    StoreSettings,
    build_settings,
)

__all__ = [
    "AcmewellConfig",
    "AcmewellSettings",
    "ConfigValidationError",
    "HookSettings",
    "LoggingSettings",
    "PollerSettings",
    "StoreSettings",
    "build_settings",
]
