"""
Toolchain management for TargetKit.

Per-target toolchain provisioning and installation of the toolchain manager
itself.
"""

from targetkit.toolchain.provisioner import ToolchainProvisioner
from targetkit.toolchain.bootstrap import ToolchainBootstrapper

__all__ = ["ToolchainProvisioner", "ToolchainBootstrapper"]
