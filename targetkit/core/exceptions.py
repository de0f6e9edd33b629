"""
Centralized exception hierarchy for TargetKit.

This module defines all custom exceptions used across the codebase.
Resolution anomalies (no selection, no valid targets) are not exceptions;
they are reported through ``ResolutionResult``.
"""

from typing import Optional, Sequence


# ============================================================================
# Base Exceptions
# ============================================================================


class TargetKitError(Exception):
    """Base exception for all TargetKit errors."""

    pass


# ============================================================================
# Configuration Exceptions
# ============================================================================


class ConfigError(TargetKitError):
    """Configuration parsing or validation error."""

    pass


class RegistryError(TargetKitError):
    """Raised when a target registry has invalid contents."""

    pass


# ============================================================================
# Build Exceptions
# ============================================================================


class BuildError(TargetKitError):
    """Base exception for failures of an external build step."""

    def __init__(
        self,
        message: str,
        triple: Optional[str] = None,
        returncode: Optional[int] = None,
        output: str = "",
    ):
        self.triple = triple
        self.returncode = returncode
        self.output = output
        super().__init__(message)


class ProvisionError(BuildError):
    """Raised when the toolchain for a triple could not be installed."""

    def __init__(self, triple: str, returncode: Optional[int] = None, output: str = ""):
        msg = f"Failed to install toolchain for target {triple}"
        if returncode is not None:
            msg += f" (exit code {returncode})"
        if output.strip():
            msg += f"\n{output.strip()}"
        super().__init__(msg, triple=triple, returncode=returncode, output=output)


class CompileError(BuildError):
    """Raised when the compiler reports failure."""

    def __init__(
        self, triple: Optional[str], returncode: Optional[int] = None, output: str = ""
    ):
        target = triple or "local machine"
        msg = f"Compilation failed for {target}"
        if returncode is not None:
            msg += f" (exit code {returncode})"
        if output.strip():
            msg += f": {output.strip()}"
        super().__init__(msg, triple=triple, returncode=returncode, output=output)


class CleanError(BuildError):
    """Raised when clearing previous build artifacts fails."""

    pass


# ============================================================================
# Tooling Exceptions
# ============================================================================


class CommandError(TargetKitError):
    """Raised when a pass-through command step fails."""

    def __init__(
        self,
        command: Sequence[str],
        returncode: Optional[int] = None,
        reason: str = "",
    ):
        self.command = list(command)
        self.returncode = returncode
        msg = f"Command failed: {' '.join(self.command)}"
        if returncode is not None:
            msg += f" (exit code {returncode})"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class BootstrapError(TargetKitError):
    """Raised when the toolchain installer cannot be fetched or run."""

    pass


class BuildLockTimeout(TargetKitError):
    """Raised when the project build lock cannot be acquired within timeout."""

    pass
