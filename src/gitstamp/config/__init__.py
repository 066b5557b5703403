"""Configuration models and loaders for gitstamp."""

from .loader import ConfigError, DEFAULT_CONFIG_PATH, PROFILE_ENV_VAR, dump_example_config, load_config, resolve_settings
from .models import (
    GitStampConfig,
    LoggingConfig,
    ManifestShape,
    NamingMode,
    OutputConfig,
    ProfileConfig,
    RedactionStrategy,
    RemoteConfig,
    StampSettings,
)

__all__ = [
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "GitStampConfig",
    "LoggingConfig",
    "ManifestShape",
    "NamingMode",
    "OutputConfig",
    "PROFILE_ENV_VAR",
    "ProfileConfig",
    "RedactionStrategy",
    "RemoteConfig",
    "StampSettings",
    "dump_example_config",
    "load_config",
    "resolve_settings",
]
