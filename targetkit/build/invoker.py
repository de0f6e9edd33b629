"""
Compiler invocation.

Runs the external compiler once per target. Compiler output goes straight to
the terminal; only the exit status is inspected.
"""

import logging
import subprocess
from pathlib import Path
from typing import List, Optional

from targetkit.build.mode import BuildMode
from targetkit.core.exceptions import CleanError, CompileError

logger = logging.getLogger(__name__)


class BuildInvoker:
    """
    Invoke the compiler for a single target.

    Args:
        project_root: Directory the compiler runs in
        compiler: Compiler executable (default: cargo)
    """

    def __init__(self, project_root: Optional[Path] = None, compiler: str = "cargo"):
        self.project_root = Path(project_root) if project_root else Path.cwd()
        self.compiler = compiler

    def build_command(self, triple: Optional[str], mode: BuildMode) -> List[str]:
        """
        Assemble the compiler command line.

        Args:
            triple: Target triple, or None to build for the host machine
            mode: Build mode

        Returns:
            Command as an argv list
        """
        cmd = [self.compiler, "build"]
        if triple is not None:
            cmd.extend(["--target", triple])
        cmd.extend(mode.compiler_flags())
        return cmd

    def build(self, triple: Optional[str], mode: BuildMode) -> None:
        """
        Compile the project for one target.

        Args:
            triple: Target triple, or None to build for the host machine
            mode: Build mode

        Raises:
            CompileError: If the compiler can't be started or exits non-zero
        """
        cmd = self.build_command(triple, mode)
        logger.debug(f"Running: {' '.join(cmd)}")

        try:
            result = subprocess.run(cmd, cwd=self.project_root)
        except OSError as e:
            logger.error(f"Could not run compiler {self.compiler}: {e}")
            raise CompileError(triple, output=str(e)) from e

        if result.returncode != 0:
            raise CompileError(triple, result.returncode)

    def clean(self) -> None:
        """
        Remove previous build artifacts.

        Raises:
            CleanError: If the clean step fails
        """
        cmd = [self.compiler, "clean"]
        logger.debug(f"Running: {' '.join(cmd)}")

        try:
            result = subprocess.run(cmd, cwd=self.project_root)
        except OSError as e:
            raise CleanError(f"Could not run compiler {self.compiler}: {e}") from e

        if result.returncode != 0:
            raise CleanError(
                f"Cleaning build artifacts failed (exit code {result.returncode})",
                returncode=result.returncode,
            )
