"""
Toolchain provisioning.

Before a target is compiled, the toolchain component for its triple is
installed with ``rustup target add``. Installing an already-present target is
success. The installer reports that case on the same channel as real
failures, so it is recognised by matching the installer's message rather than
by ignoring its exit status.
"""

import logging
import re
import subprocess
from typing import List

from targetkit.core.exceptions import ProvisionError

logger = logging.getLogger(__name__)

ALREADY_INSTALLED_PATTERNS = [
    re.compile(r"is up to date", re.IGNORECASE),
    re.compile(r"is already installed", re.IGNORECASE),
]


def is_already_installed_message(output: str) -> bool:
    """Check whether installer output says the target is already present."""
    return any(pattern.search(output) for pattern in ALREADY_INSTALLED_PATTERNS)


class ToolchainProvisioner:
    """
    Ensure the toolchain for a target triple is installed.

    Args:
        installer: Installer executable (default: rustup)
    """

    def __init__(self, installer: str = "rustup"):
        self.installer = installer

    def install_command(self, triple: str) -> List[str]:
        return [self.installer, "target", "add", triple]

    def ensure(self, triple: str) -> None:
        """
        Install the toolchain for a triple if it isn't already present.

        Args:
            triple: Target triple

        Raises:
            ProvisionError: If the installer can't be started, or fails for any
                reason other than the target already being installed
        """
        cmd = self.install_command(triple)
        logger.debug(f"Running: {' '.join(cmd)}")

        try:
            result = subprocess.run(
                cmd, capture_output=True, text=True, errors="replace"
            )
        except OSError as e:
            logger.error(f"Could not run toolchain installer {self.installer}: {e}")
            raise ProvisionError(triple, output=str(e)) from e

        output = "\n".join(part for part in (result.stdout, result.stderr) if part)

        if result.returncode == 0:
            if output.strip():
                logger.debug(output.strip())
            return

        if is_already_installed_message(output):
            logger.debug(f"Toolchain for {triple} already installed: {output.strip()}")
            return

        raise ProvisionError(triple, result.returncode, output)
