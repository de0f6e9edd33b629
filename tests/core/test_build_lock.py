"""
Tests for the project build lock.
"""

import pytest
from filelock import FileLock

from targetkit.core.exceptions import BuildLockTimeout, TargetKitError
from targetkit.core.locking import build_lock, get_lock_path


class TestBuildLock:
    """Test build_lock()."""

    def test_lock_path(self, tmp_path):
        assert get_lock_path(tmp_path) == tmp_path / ".targetkit" / "build.lock"

    def test_creates_lock_directory(self, tmp_path):
        with build_lock(tmp_path, timeout=1):
            assert (tmp_path / ".targetkit").is_dir()

    def test_lock_is_reentrant_after_release(self, tmp_path):
        """Test the lock can be taken again once released."""
        with build_lock(tmp_path, timeout=1):
            pass
        with build_lock(tmp_path, timeout=1):
            pass

    def test_timeout_when_held_elsewhere(self, tmp_path):
        """Test a lock held by another owner times out."""
        lock_path = get_lock_path(tmp_path)
        lock_path.parent.mkdir(parents=True)
        other = FileLock(lock_path)
        other.acquire()
        try:
            with pytest.raises(BuildLockTimeout, match="Another TargetKit build"):
                with build_lock(tmp_path, timeout=0.1):
                    pass
        finally:
            other.release()

    def test_exceptions_inside_block_propagate(self, tmp_path):
        with pytest.raises(ValueError):
            with build_lock(tmp_path, timeout=1):
                raise ValueError("inside")

    def test_missing_project_root_is_not_created(self, tmp_path):
        """Test a missing project root raises instead of being created."""
        missing = tmp_path / "typo"
        with pytest.raises(TargetKitError, match="Could not create build lock"):
            with build_lock(missing, timeout=1):
                pass
        assert not missing.exists()
