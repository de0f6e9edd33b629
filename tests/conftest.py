"""
Pytest configuration and shared fixtures for TargetKit tests.
"""

import argparse
import io
from pathlib import Path
from typing import Dict
from unittest.mock import Mock

import pytest

from targetkit.build.invoker import BuildInvoker
from targetkit.build.pipeline import BuildPipeline
from targetkit.build.reporter import RunReporter
from targetkit.targets.registry import TargetRegistry
from targetkit.toolchain.provisioner import ToolchainProvisioner


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--integration",
        action="store_true",
        default=False,
        help="run integration tests that call real external tools",
    )


def pytest_collection_modifyitems(config, items):
    """Skip integration tests unless --integration flag is provided."""
    if not config.getoption("--integration"):
        skip_integration = pytest.mark.skip(reason="need --integration option to run")
        for item in items:
            if "integration" in item.keywords:
                item.add_marker(skip_integration)


# ============================================================================
# Shared Test Fixtures
# ============================================================================

SAMPLE_TARGETS: Dict[str, str] = {
    "linux": "x86_64-unknown-linux-gnu",
    "windows": "x86_64-pc-windows-gnu",
    "mac": "x86_64-apple-darwin",
}


@pytest.fixture
def sample_registry() -> TargetRegistry:
    """Three-target registry: linux, windows, mac (in that order)."""
    return TargetRegistry(SAMPLE_TARGETS)


@pytest.fixture
def report_stream() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def mock_provisioner() -> Mock:
    return Mock(spec=ToolchainProvisioner)


@pytest.fixture
def mock_invoker() -> Mock:
    return Mock(spec=BuildInvoker)


@pytest.fixture
def pipeline(sample_registry, mock_provisioner, mock_invoker, report_stream):
    """Pipeline over the sample registry with mocked external steps."""
    return BuildPipeline(
        sample_registry,
        mock_provisioner,
        mock_invoker,
        RunReporter(report_stream),
    )


@pytest.fixture
def cli_args(tmp_path: Path):
    """Factory for parsed-argument namespaces rooted in a temp project."""

    def make(**kwargs):
        values = {
            "project_root": tmp_path,
            "config": None,
            "verbose": False,
            "quiet": False,
            "targets": [],
        }
        values.update(kwargs)
        return argparse.Namespace(**values)

    return make
