"""
Build mode selection.

The mode is read from a single environment variable once per invocation and
then passed down explicitly, so every target in a run builds the same way.
"""

import os
from enum import Enum
from typing import Callable, List, Optional

DEFAULT_MODE_ENV = "BUILD_MODE"
RELEASE_VALUE = "RELEASE"


class BuildMode(Enum):
    """Compilation mode."""

    DEBUG = "debug"
    RELEASE = "release"

    def compiler_flags(self) -> List[str]:
        """Flags passed to the compiler for this mode."""
        if self is BuildMode.RELEASE:
            return ["--release"]
        return []


def select_mode(
    environment_lookup: Callable[[str], Optional[str]] = os.environ.get,
    variable: str = DEFAULT_MODE_ENV,
) -> BuildMode:
    """
    Choose the build mode from the environment.

    Args:
        environment_lookup: Function returning an environment value or None
        variable: Name of the variable to read

    Returns:
        BuildMode.RELEASE if the value is exactly "RELEASE", else BuildMode.DEBUG

    Example:
        >>> select_mode({"BUILD_MODE": "RELEASE"}.get)
        <BuildMode.RELEASE: 'release'>
        >>> select_mode({}.get)
        <BuildMode.DEBUG: 'debug'>
    """
    if environment_lookup(variable) == RELEASE_VALUE:
        return BuildMode.RELEASE
    return BuildMode.DEBUG
