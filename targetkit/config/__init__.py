"""
Configuration management for TargetKit.

Loads the optional targetkit.yaml project configuration.
"""

from targetkit.config.parser import (
    CONFIG_FILE_NAME,
    BuildSettings,
    TargetKitConfig,
    ToolSettings,
    load_config,
    parse_config,
)

__all__ = [
    "CONFIG_FILE_NAME",
    "BuildSettings",
    "TargetKitConfig",
    "ToolSettings",
    "load_config",
    "parse_config",
]
