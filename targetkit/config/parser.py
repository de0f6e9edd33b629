"""YAML configuration parser for TargetKit.

This module provides parsing and validation for targetkit.yaml configuration
files. Every section is optional; a project without a config file uses the
built-in target table and tools.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

import yaml

from targetkit.build.mode import DEFAULT_MODE_ENV
from targetkit.core.exceptions import ConfigError, RegistryError
from targetkit.targets.registry import DEFAULT_TARGETS, TargetRegistry

CONFIG_FILE_NAME = "targetkit.yaml"


@dataclass
class BuildSettings:
    """Build run configuration."""

    mode_env: str = DEFAULT_MODE_ENV
    lock_timeout: float = 600


@dataclass
class ToolSettings:
    """External tools driven by TargetKit."""

    compiler: str = "cargo"
    installer: str = "rustup"


@dataclass
class TargetKitConfig:
    """Complete TargetKit configuration."""

    version: int = 1
    targets: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_TARGETS))
    build: BuildSettings = field(default_factory=BuildSettings)
    tools: ToolSettings = field(default_factory=ToolSettings)

    def registry(self) -> TargetRegistry:
        return TargetRegistry(self.targets)


def parse_config(config_path: Path) -> TargetKitConfig:
    """
    Parse targetkit.yaml configuration file.

    Args:
        config_path: Path to targetkit.yaml

    Returns:
        Parsed and validated configuration

    Raises:
        ConfigError: If configuration is missing or invalid
    """
    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML syntax: {e}")

    if data is None:
        return TargetKitConfig()

    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a mapping")

    return _parse_and_validate(data)


def load_config(
    project_root: Path, config_path: Optional[Path] = None
) -> TargetKitConfig:
    """
    Load configuration for a project.

    An explicit config path must exist. Without one, targetkit.yaml in the
    project root is used if present, otherwise the defaults.
    """
    if config_path is not None:
        return parse_config(Path(config_path))

    default_path = Path(project_root) / CONFIG_FILE_NAME
    if default_path.exists():
        return parse_config(default_path)

    return TargetKitConfig()


def _parse_and_validate(data: dict) -> TargetKitConfig:
    """Parse and validate configuration data."""
    version = data.get("version", 1)
    if version != 1:
        raise ConfigError(f"Unsupported version: {version} (expected 1)")

    targets = _parse_targets(data.get("targets"))
    build = _parse_build(data.get("build") or {})
    tools = _parse_tools(data.get("tools") or {})

    return TargetKitConfig(version=version, targets=targets, build=build, tools=tools)


def _parse_targets(data) -> Dict[str, str]:
    """Parse the alias -> triple table, keeping declared order."""
    if data is None:
        return dict(DEFAULT_TARGETS)

    if not isinstance(data, dict) or not data:
        raise ConfigError("targets must be a non-empty mapping of alias to triple")

    targets = {str(alias): triple for alias, triple in data.items()}

    try:
        TargetRegistry(targets)
    except RegistryError as e:
        raise ConfigError(str(e)) from e

    return targets


def _parse_build(data: dict) -> BuildSettings:
    if not isinstance(data, dict):
        raise ConfigError("build must be a mapping")

    mode_env = data.get("mode_env", DEFAULT_MODE_ENV)
    if not isinstance(mode_env, str) or not mode_env:
        raise ConfigError("build.mode_env must be a non-empty string")

    lock_timeout = data.get("lock_timeout", 600)
    if isinstance(lock_timeout, bool) or not isinstance(lock_timeout, (int, float)):
        raise ConfigError("build.lock_timeout must be a number")
    if lock_timeout <= 0:
        raise ConfigError(f"build.lock_timeout must be positive, got {lock_timeout}")

    return BuildSettings(mode_env=mode_env, lock_timeout=lock_timeout)


def _parse_tools(data: dict) -> ToolSettings:
    if not isinstance(data, dict):
        raise ConfigError("tools must be a mapping")

    settings = ToolSettings()
    for name in ("compiler", "installer"):
        value = data.get(name, getattr(settings, name))
        if not isinstance(value, str) or not value:
            raise ConfigError(f"tools.{name} must be a non-empty string")
        setattr(settings, name, value)

    return settings
