"""
Pass-through tool commands.

``doc``, ``lint`` and ``health`` run fixed compiler subcommands in the
project root. ``install-toolchain`` sets up the development toolchain.
"""

import logging
from typing import List

from targetkit.cli.utils import load_project_config, print_error, require_project_root
from targetkit.core.exceptions import TargetKitError
from targetkit.core.process import run_steps
from targetkit.toolchain.bootstrap import ToolchainBootstrapper

logger = logging.getLogger(__name__)


def doc_steps(compiler: str) -> List[List[str]]:
    return [[compiler, "doc"]]


def lint_steps(compiler: str) -> List[List[str]]:
    return [[compiler, "fmt"], [compiler, "fix", "--allow-staged"]]


def health_steps(compiler: str) -> List[List[str]]:
    return [
        [compiler, "outdated"],
        [compiler, "deny", "check"],
        [compiler, "cache"],
    ]


def _run_tool_steps(args, make_steps) -> int:
    try:
        project_root = require_project_root(args.project_root)
        config = load_project_config(args)
        run_steps(make_steps(config.tools.compiler), cwd=project_root)
    except TargetKitError as e:
        print_error(str(e))
        return 1
    return 0


def run_doc(args) -> int:
    """Build project documentation."""
    return _run_tool_steps(args, doc_steps)


def run_lint(args) -> int:
    """Format and auto-fix the codebase."""
    return _run_tool_steps(args, lint_steps)


def run_health(args) -> int:
    """Report dependency health."""
    return _run_tool_steps(args, health_steps)


def run_install_toolchain(args) -> int:
    """
    Install or update the development toolchain.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    try:
        config = load_project_config(args)
        bootstrapper = ToolchainBootstrapper(
            installer=config.tools.installer, compiler=config.tools.compiler
        )
        bootstrapper.run()
    except TargetKitError as e:
        print_error(str(e))
        return 1

    logger.info("Toolchain is up to date")
    return 0
