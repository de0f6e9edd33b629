"""
External process helpers.

Every external tool TargetKit drives (compiler, toolchain installer, git)
is run as a blocking subprocess. The helpers here cover the two shapes the
CLI needs: running a fixed sequence of steps that stops at the first failure,
and reading a single line of output from a query command.
"""

import logging
import subprocess
from pathlib import Path
from typing import Optional, Sequence

from targetkit.core.exceptions import CommandError

logger = logging.getLogger(__name__)


def run_steps(steps: Sequence[Sequence[str]], cwd: Optional[Path] = None) -> None:
    """
    Run commands one after another, stopping at the first failure.

    Output of each command is passed straight through to the terminal.

    Args:
        steps: Commands to run, each an argv list
        cwd: Working directory (default: current directory)

    Raises:
        CommandError: If a command can't be started or exits non-zero

    Example:
        >>> run_steps([["cargo", "fmt"], ["cargo", "fix", "--allow-staged"]])
    """
    for cmd in steps:
        logger.debug(f"Running: {' '.join(cmd)}")
        try:
            result = subprocess.run(list(cmd), cwd=cwd)
        except OSError as e:
            logger.error(f"Could not run {cmd[0]}: {e}")
            raise CommandError(cmd, reason=str(e)) from e

        if result.returncode != 0:
            raise CommandError(cmd, result.returncode)


def query_output(cmd: Sequence[str], cwd: Optional[Path] = None) -> Optional[str]:
    """
    Return the first line of a command's stdout, or None if it fails.

    Args:
        cmd: Command to run
        cwd: Working directory

    Returns:
        Stripped first output line, or None when the command can't be
        started, times out or exits non-zero
    """
    try:
        result = subprocess.run(
            list(cmd),
            capture_output=True,
            text=True,
            errors="replace",
            cwd=cwd,
            timeout=10,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.debug(f"Query {' '.join(cmd)} failed: {e}")
        return None

    if result.returncode != 0:
        logger.debug(f"Query {' '.join(cmd)} exited with {result.returncode}")
        return None

    lines = result.stdout.strip().splitlines()
    return lines[0].strip() if lines else None
