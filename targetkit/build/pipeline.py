"""
Sequential build pipeline.

Runs the whole selection through resolution, then for every resolved triple
provisions its toolchain and compiles it, strictly in resolution order. The
first failure aborts the run; later targets are never attempted and earlier
results are kept as they were.

Usage:
    from targetkit.build import BuildPipeline, select_mode

    pipeline = BuildPipeline(registry, ToolchainProvisioner(), BuildInvoker(root))
    report = pipeline.run(["linux", "rpi"], select_mode())
    sys.exit(0 if report.succeeded else 1)
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence

from targetkit.build.invoker import BuildInvoker
from targetkit.build.mode import BuildMode
from targetkit.build.reporter import RunReporter
from targetkit.core.exceptions import BuildError, CompileError, ProvisionError
from targetkit.targets.registry import TargetRegistry
from targetkit.targets.resolver import ResolutionStatus, resolve
from targetkit.toolchain.provisioner import ToolchainProvisioner

logger = logging.getLogger(__name__)


class BuildResult(Enum):
    """Outcome for a single target."""

    SUCCESS = "success"
    TOOLCHAIN_INSTALL_FAILED = "toolchain_install_failed"
    COMPILE_FAILED = "compile_failed"


class RunOutcome(Enum):
    """Terminal state of a run."""

    COMPLETED = "completed"
    ABORTED = "aborted"
    NO_VALID_TARGETS = "no_valid_targets"


@dataclass
class TargetResult:
    """Result of building one target (triple is None for a host build)."""

    triple: Optional[str]
    result: BuildResult
    error: Optional[BuildError] = None


@dataclass
class RunReport:
    """
    Summary of a pipeline run.

    Attributes:
        outcome: Terminal state
        mode: Build mode the run used
        triples: Triples selected for the run, in build order
        results: Per-target results for every target that was attempted
    """

    outcome: RunOutcome
    mode: BuildMode
    triples: List[str] = field(default_factory=list)
    results: List[TargetResult] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.outcome is RunOutcome.COMPLETED

    @property
    def failure(self) -> Optional[TargetResult]:
        """The failing target, if any."""
        for target in self.results:
            if target.result is not BuildResult.SUCCESS:
                return target
        return None


class BuildPipeline:
    """
    Provision and build a target selection, stopping at the first failure.

    Args:
        registry: Target registry used to resolve aliases
        provisioner: Installs the toolchain for each triple
        invoker: Runs the compiler
        reporter: Progress output (default: RunReporter on stdout)
    """

    def __init__(
        self,
        registry: TargetRegistry,
        provisioner: ToolchainProvisioner,
        invoker: BuildInvoker,
        reporter: Optional[RunReporter] = None,
    ):
        self.registry = registry
        self.provisioner = provisioner
        self.invoker = invoker
        self.reporter = reporter or RunReporter()

    def run(self, selection: Sequence[str], mode: BuildMode) -> RunReport:
        """
        Build every target in a selection.

        Args:
            selection: Target aliases as given by the operator
            mode: Build mode, fixed for the whole run

        Returns:
            RunReport describing what was built and where it stopped
        """
        resolution = resolve(selection, self.registry)

        if resolution.status is ResolutionStatus.NO_SELECTION:
            self.reporter.no_target_specified()
            return self._run_host(mode)

        if resolution.status is ResolutionStatus.NO_VALID_TARGETS:
            self.reporter.no_valid_targets(resolution.unknown)
            return RunReport(outcome=RunOutcome.NO_VALID_TARGETS, mode=mode)

        if resolution.unknown:
            self.reporter.skipped_unknown(resolution.unknown)

        triples = resolution.triples
        self.reporter.target_list(triples)
        report = RunReport(outcome=RunOutcome.COMPLETED, mode=mode, triples=triples)

        for index, triple in enumerate(triples):
            target = self._build_target(triple, mode)
            report.results.append(target)

            if target.result is not BuildResult.SUCCESS:
                report.outcome = RunOutcome.ABORTED
                self.reporter.aborted(len(triples) - index - 1)
                return report

        self.reporter.completed(len(triples))
        return report

    def _build_target(self, triple: str, mode: BuildMode) -> TargetResult:
        self.reporter.target_started(triple)

        self.reporter.installing(triple)
        try:
            self.provisioner.ensure(triple)
        except ProvisionError as e:
            logger.debug(f"Provisioning {triple} failed: {e}")
            self.reporter.target_failed(triple, "toolchain installation", str(e))
            return TargetResult(triple, BuildResult.TOOLCHAIN_INSTALL_FAILED, e)

        self.reporter.compiling(triple)
        try:
            self.invoker.build(triple, mode)
        except CompileError as e:
            self.reporter.target_failed(triple, "compilation", str(e))
            return TargetResult(triple, BuildResult.COMPILE_FAILED, e)

        return TargetResult(triple, BuildResult.SUCCESS)

    def _run_host(self, mode: BuildMode) -> RunReport:
        """Single untargeted build for the local machine, no provisioning."""
        report = RunReport(outcome=RunOutcome.COMPLETED, mode=mode)

        self.reporter.compiling(None)
        try:
            self.invoker.build(None, mode)
        except CompileError as e:
            self.reporter.target_failed(None, "compilation", str(e))
            report.results.append(TargetResult(None, BuildResult.COMPILE_FAILED, e))
            report.outcome = RunOutcome.ABORTED
            self.reporter.aborted(0)
            return report

        report.results.append(TargetResult(None, BuildResult.SUCCESS))
        self.reporter.completed(1)
        return report
