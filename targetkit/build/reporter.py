"""
Run progress reporting.

The reporter writes one plain-text line per phase transition of a build run.
It only produces output; nothing it does affects the run.
"""

import sys
from typing import Optional, Sequence, TextIO


class RunReporter:
    """
    Write build progress to an output stream.

    Args:
        stream: Output stream (default: sys.stdout at the time of writing)
    """

    def __init__(self, stream: Optional[TextIO] = None):
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def _emit(self, message: str) -> None:
        print(message, file=self.stream)

    def no_target_specified(self) -> None:
        self._emit("No target specified, building for local machine...")

    def no_valid_targets(self, unknown: Sequence[str]) -> None:
        message = "No valid targets specified!"
        if unknown:
            message += f" (unknown: {', '.join(unknown)})"
        self._emit(message)

    def skipped_unknown(self, unknown: Sequence[str]) -> None:
        for alias in unknown:
            self._emit(f"Skipping unknown target: {alias}")

    def target_list(self, triples: Sequence[str]) -> None:
        self._emit(f"Target(s): {' '.join(triples)}")

    def target_started(self, triple: str) -> None:
        self._emit(triple)

    def installing(self, triple: str) -> None:
        self._emit(f"Installing target {triple}")

    def compiling(self, triple: Optional[str]) -> None:
        self._emit(f"Compiling target {triple or 'local machine'}")

    def target_failed(self, triple: Optional[str], phase: str, reason: str) -> None:
        target = triple or "local machine"
        self._emit(f"FAILED: {target} during {phase}: {reason}")

    def completed(self, count: int) -> None:
        noun = "target" if count == 1 else "targets"
        self._emit(f"Build completed ({count} {noun})")

    def aborted(self, skipped: int) -> None:
        message = "Build aborted"
        if skipped:
            message += f", {skipped} remaining target(s) not built"
        self._emit(message)
