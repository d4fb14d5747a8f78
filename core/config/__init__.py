"""
Runtime Configuration Module

Provides configuration loading and management for the reserve service.
"""

from .runtime import (
    ENV_PREFIX,
    HashingConfig,
    StoreConfig,
    ServerConfig,
    RuntimeConfig,
    load_runtime_config,
    get_default_config_template,
)

__all__ = [
    "ENV_PREFIX",
    "HashingConfig",
    "StoreConfig",
    "ServerConfig",
    "RuntimeConfig",
    "load_runtime_config",
    "get_default_config_template",
]
