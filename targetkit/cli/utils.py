"""
Shared utilities for CLI commands.
"""

import sys
from pathlib import Path
from typing import Optional

from targetkit.config.parser import TargetKitConfig, load_config
from targetkit.core.exceptions import ConfigError


def resolve_project_root(path: Optional[Path] = None) -> Path:
    """
    Resolve project root directory.

    Args:
        path: Optional path (defaults to current directory)

    Returns:
        Resolved absolute path
    """
    if path is None:
        path = Path.cwd()
    return Path(path).resolve()


def require_project_root(path: Optional[Path] = None) -> Path:
    """
    Resolve the project root and check that it is an existing directory.

    Raises:
        ConfigError: If the path does not exist or is not a directory
    """
    project_root = resolve_project_root(path)
    if not project_root.is_dir():
        raise ConfigError(f"Project root is not a directory: {project_root}")
    return project_root


def load_project_config(args) -> TargetKitConfig:
    """
    Load configuration for the project named by the global CLI options.

    Raises:
        ConfigError: If the configuration file is invalid
    """
    project_root = resolve_project_root(getattr(args, "project_root", None))
    config_path = getattr(args, "config", None)
    return load_config(project_root, config_path)


def print_error(message: str, details: Optional[str] = None):
    """
    Print error message to stderr in consistent format.

    Args:
        message: Main error message
        details: Optional additional details
    """
    print(f"ERROR: {message}", file=sys.stderr)
    if details:
        print(f"  {details}", file=sys.stderr)


def print_warning(message: str):
    """Print warning message to stderr."""
    print(f"WARNING: {message}", file=sys.stderr)
