"""
Development toolchain installation.

Installs the toolchain manager when it is missing, updates it, and installs
the cargo subcommands used by the ``health`` command.
"""

import logging
import os
import platform
import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import List, Optional

import requests
from requests.exceptions import RequestException

from targetkit.core.exceptions import BootstrapError
from targetkit.core.process import run_steps

logger = logging.getLogger(__name__)

RUSTUP_INIT_URL = "https://sh.rustup.rs"

HEALTH_TOOLS = ["cargo-outdated", "cargo-deny", "cargo-cache"]


def cargo_bin_dir() -> Path:
    """Directory rustup installs its binaries into."""
    cargo_home = os.environ.get("CARGO_HOME")
    if cargo_home:
        return Path(cargo_home) / "bin"
    return Path.home() / ".cargo" / "bin"


class ToolchainBootstrapper:
    """
    Install and update the development toolchain.

    Args:
        installer: Toolchain manager executable (default: rustup)
        compiler: Compiler driver used to install subcommands (default: cargo)
        url: Where to fetch the installer script from
        timeout: Download timeout in seconds
    """

    def __init__(
        self,
        installer: str = "rustup",
        compiler: str = "cargo",
        url: str = RUSTUP_INIT_URL,
        timeout: int = 30,
    ):
        self.installer = installer
        self.compiler = compiler
        self.url = url
        self.timeout = timeout

    def find_tool(self, name: str) -> Optional[str]:
        """
        Locate a tool on PATH, falling back to the cargo bin directory.

        A freshly installed toolchain is not on this process's PATH yet.
        """
        found = shutil.which(name)
        if found:
            return found

        candidate = cargo_bin_dir() / name
        if candidate.exists():
            return str(candidate)
        return None

    def is_installed(self) -> bool:
        return self.find_tool(self.installer) is not None

    def download_installer(self, destination: Path) -> Path:
        """
        Download the installer script.

        Args:
            destination: File to write the script to

        Returns:
            Path to the downloaded script

        Raises:
            BootstrapError: If the download fails
        """
        logger.info(f"Downloading from {self.url}")

        try:
            response = requests.get(self.url, timeout=self.timeout, allow_redirects=True)
            response.raise_for_status()
        except RequestException as e:
            raise BootstrapError(f"Failed to download installer from {self.url}: {e}") from e

        destination.write_bytes(response.content)
        return destination

    def install_manager(self) -> None:
        """
        Download and run the installer non-interactively.

        Raises:
            BootstrapError: On unsupported hosts or if the installer fails
        """
        if platform.system() == "Windows":
            raise BootstrapError(
                f"Automatic installation of {self.installer} is not supported on "
                "Windows. Install it from https://rustup.rs and re-run."
            )

        with tempfile.TemporaryDirectory() as tmpdir:
            script = self.download_installer(Path(tmpdir) / "rustup-init.sh")
            logger.info(f"Installing {self.installer}")
            try:
                result = subprocess.run(["sh", str(script), "-y"])
            except OSError as e:
                raise BootstrapError(
                    f"Could not run the {self.installer} installer: {e}"
                ) from e

        if result.returncode != 0:
            raise BootstrapError(
                f"{self.installer} installer failed (exit code {result.returncode})"
            )

    def update_steps(self) -> List[List[str]]:
        """Commands run after the toolchain manager is available."""
        installer = self.find_tool(self.installer) or self.installer
        compiler = self.find_tool(self.compiler) or self.compiler

        steps = [[installer, "update"]]
        for tool in HEALTH_TOOLS:
            steps.append([compiler, "install", tool])
        return steps

    def run(self) -> None:
        """
        Install the toolchain manager if needed, then update everything.

        Raises:
            BootstrapError: If installing the toolchain manager fails
            CommandError: If an update or install step fails
        """
        if not self.is_installed():
            logger.info(f"{self.installer} not found")
            self.install_manager()
        else:
            logger.debug(f"{self.installer} already installed")

        run_steps(self.update_steps())
