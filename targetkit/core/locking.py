"""
Project build lock.

Two TargetKit runs in the same project would interleave compiler output and
race on the shared build directory. A file lock under ``.targetkit/`` in the
project root serialises them across processes.

Usage:
    from targetkit.core.locking import build_lock

    with build_lock(project_root, timeout=600):
        pipeline.run(selection, mode)
"""

import logging
from contextlib import contextmanager
from pathlib import Path

from filelock import FileLock, Timeout as LockTimeout

from targetkit.core.exceptions import BuildLockTimeout, TargetKitError

logger = logging.getLogger(__name__)

LOCK_DIR_NAME = ".targetkit"
LOCK_FILE_NAME = "build.lock"


def get_lock_path(project_root: Path) -> Path:
    """Return the build lock file path for a project."""
    return Path(project_root) / LOCK_DIR_NAME / LOCK_FILE_NAME


@contextmanager
def build_lock(project_root: Path, timeout: float = 600):
    """
    Hold the project build lock for the duration of the block.

    Args:
        project_root: Project root directory
        timeout: Maximum wait time in seconds

    Yields:
        None

    Raises:
        TargetKitError: If the lock directory can't be created
        BuildLockTimeout: If the lock can't be acquired within timeout
    """
    lock_path = get_lock_path(project_root)
    try:
        # The project root itself must already exist
        lock_path.parent.mkdir(exist_ok=True)
    except OSError as e:
        raise TargetKitError(
            f"Could not create build lock directory {lock_path.parent}: {e}"
        ) from e
    lock = FileLock(lock_path, timeout=timeout)

    try:
        with lock:
            logger.debug(f"Acquired build lock: {lock_path}")
            yield
            logger.debug(f"Released build lock: {lock_path}")
    except LockTimeout as e:
        raise BuildLockTimeout(
            f"Could not acquire build lock after {timeout}s. "
            "Another TargetKit build may be running in this project."
        ) from e
