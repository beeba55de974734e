"""Configuration for dtsdiff."""

from config.loader import (
    CONFIG_FILENAME,
    ConfigError,
    DtsDiffConfig,
    RemoteConfig,
    SourceDef,
    load_config,
    resolve_output_path,
)

__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "DtsDiffConfig",
    "RemoteConfig",
    "SourceDef",
    "load_config",
    "resolve_output_path",
]
