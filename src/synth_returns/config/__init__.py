"""Convenience exports for the configuration package."""

from .constants import *  # noqa: F401,F403
from .loader import ConfigError, load_bootstrap_config, load_config, resolve_config_path, save_config
from .logging_conf import JSONFormatter, RunContextFilter, configure_logging, run_context
from .schemas import BootstrapConfig
from .settings import ENV_PREFIX, Settings, get_settings, reset_settings_cache

__all__ = [
    "JSONFormatter",
    "RunContextFilter",
    "configure_logging",
    "run_context",
    "BootstrapConfig",
    "ENV_PREFIX",
    "Settings",
    "get_settings",
    "reset_settings_cache",
    "load_bootstrap_config",
    "load_config",
    "resolve_config_path",
    "save_config",
    "ConfigError",
]
