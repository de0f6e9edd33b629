"""
Build command implementations.

Implements ``build``, ``clean-build`` and ``build-release``. All three share
one code path: load configuration, fix the build mode, take the project build
lock, optionally clean, then run the pipeline.
"""

import logging
import os
from pathlib import Path
from typing import Optional, Sequence

from targetkit.build import BuildInvoker, BuildMode, BuildPipeline, RunReporter, select_mode
from targetkit.cli.utils import load_project_config, print_error, require_project_root
from targetkit.config.parser import TargetKitConfig
from targetkit.core.exceptions import TargetKitError
from targetkit.core.locking import build_lock
from targetkit.core.process import run_steps
from targetkit.targets.registry import ALL_TARGETS
from targetkit.toolchain.provisioner import ToolchainProvisioner

logger = logging.getLogger(__name__)


def create_pipeline(config: TargetKitConfig, project_root: Path) -> BuildPipeline:
    """Wire a pipeline from configuration."""
    return BuildPipeline(
        registry=config.registry(),
        provisioner=ToolchainProvisioner(installer=config.tools.installer),
        invoker=BuildInvoker(project_root, compiler=config.tools.compiler),
        reporter=RunReporter(),
    )


def execute_build(
    args,
    targets: Sequence[str],
    mode: Optional[BuildMode] = None,
    clean: bool = False,
) -> int:
    """
    Run a build for the given targets.

    Args:
        args: Parsed command-line arguments (global options)
        targets: Target aliases to build
        mode: Build mode for the whole run (default: read once from the
            environment variable named in the configuration)
        clean: Clear previous build artifacts first

    Returns:
        Exit code (0 only if every target built)
    """
    try:
        project_root = require_project_root(args.project_root)
        config = load_project_config(args)
        if mode is None:
            mode = select_mode(os.environ.get, config.build.mode_env)
        logger.debug(f"Build mode: {mode.value}")

        pipeline = create_pipeline(config, project_root)
        with build_lock(project_root, timeout=config.build.lock_timeout):
            if clean:
                pipeline.invoker.clean()
            report = pipeline.run(targets, mode)
    except TargetKitError as e:
        print_error(str(e))
        return 1

    if not report.succeeded:
        failure = report.failure
        if failure is not None:
            logger.debug(f"Run aborted at {failure.triple}: {failure.result.value}")
        return 1

    return 0


def run(args) -> int:
    """
    Run the build command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    return execute_build(args, args.targets)


def run_clean_build(args) -> int:
    """Run the clean-build command."""
    return execute_build(args, args.targets, clean=True)


def run_release(args) -> int:
    """
    Run the build-release command.

    Clean release build of every registered target, followed by the
    documentation build.
    """
    code = execute_build(args, [ALL_TARGETS], BuildMode.RELEASE, clean=True)
    if code != 0:
        return code

    try:
        project_root = require_project_root(args.project_root)
        config = load_project_config(args)
        run_steps([[config.tools.compiler, "doc"]], cwd=project_root)
    except TargetKitError as e:
        print_error(str(e))
        return 1

    return 0
