"""
Core utilities for TargetKit.

Exception hierarchy, external process helpers, project build locking and
host platform detection.
"""

from targetkit.core.exceptions import (
    TargetKitError,
    ConfigError,
    RegistryError,
    BuildError,
    ProvisionError,
    CompileError,
    CleanError,
    CommandError,
    BootstrapError,
    BuildLockTimeout,
)

__all__ = [
    "TargetKitError",
    "ConfigError",
    "RegistryError",
    "BuildError",
    "ProvisionError",
    "CompileError",
    "CleanError",
    "CommandError",
    "BootstrapError",
    "BuildLockTimeout",
]
