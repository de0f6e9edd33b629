"""
Build orchestration for TargetKit.

Build mode selection, compiler invocation, progress reporting and the
sequential fail-fast pipeline that ties them together.
"""

from targetkit.build.mode import BuildMode, select_mode
from targetkit.build.invoker import BuildInvoker
from targetkit.build.reporter import RunReporter
from targetkit.build.pipeline import (
    BuildPipeline,
    BuildResult,
    RunOutcome,
    RunReport,
    TargetResult,
)

__all__ = [
    "BuildMode",
    "select_mode",
    "BuildInvoker",
    "RunReporter",
    "BuildPipeline",
    "BuildResult",
    "RunOutcome",
    "RunReport",
    "TargetResult",
]
