"""Configuration management module."""

from leadscope.core.config.settings import (
    CacheConfig,
    ConfigManager,
    LeadscopeConfig,
    LoggingConfig,
    OverridesConfig,
    SourcesConfig,
    WebConfig,
    get_default_config,
    load_config_from_env,
)

__all__ = [
    "ConfigManager",
    "LeadscopeConfig",
    "SourcesConfig",
    "OverridesConfig",
    "CacheConfig",
    "LoggingConfig",
    "WebConfig",
    "get_default_config",
    "load_config_from_env",
]
