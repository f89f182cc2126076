"""
Runtime Configuration Module

Provides configuration loading and management for the anchor service.
"""

from .runtime import (
    AnchorConfig,
    RuntimeConfig,
    StorageConfig,
    default_config_paths,
    get_default_config,
    load_runtime_config,
    set_default_config,
)

__all__ = [
    "RuntimeConfig",
    "AnchorConfig",
    "StorageConfig",
    "default_config_paths",
    "get_default_config",
    "load_runtime_config",
    "set_default_config",
]
