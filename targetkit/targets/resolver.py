"""
Target resolution.

Turns an operator's raw selection into the ordered, deduplicated list of
triples to build. Unknown aliases are handled in two tiers: each one on its
own is skipped (and remembered for diagnostics), but a selection in which
every alias is unknown resolves to ``NO_VALID_TARGETS`` so the caller can
refuse to build.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Sequence

from targetkit.targets.registry import ALL_TARGETS, TargetRegistry

logger = logging.getLogger(__name__)


class ResolutionStatus(Enum):
    """Outcome of resolving a selection."""

    RESOLVED = "resolved"
    NO_SELECTION = "no_selection"
    NO_VALID_TARGETS = "no_valid_targets"


@dataclass
class ResolutionResult:
    """
    Result of resolving a target selection.

    Attributes:
        status: Which of the three outcomes applies
        triples: Triples to build, in build order (empty unless RESOLVED)
        unknown: Selected aliases that are not in the registry, in the order
            given (duplicates removed)
    """

    status: ResolutionStatus
    triples: List[str] = field(default_factory=list)
    unknown: List[str] = field(default_factory=list)

    @property
    def resolved(self) -> bool:
        return self.status is ResolutionStatus.RESOLVED


def resolve(selection: Sequence[str], registry: TargetRegistry) -> ResolutionResult:
    """
    Resolve a raw target selection against a registry.

    Args:
        selection: Aliases as supplied by the operator; empty strings are ignored
        registry: Registry to look aliases up in

    Returns:
        ResolutionResult. ``NO_SELECTION`` for an empty selection,
        ``NO_VALID_TARGETS`` if no alias is known, otherwise ``RESOLVED``.

    Example:
        >>> registry = TargetRegistry({"linux": "T1", "windows": "T2"})
        >>> resolve(["windows", "linux", "windows"], registry).triples
        ['T2', 'T1']
    """
    tokens = [token for token in selection if token]

    if not tokens:
        return ResolutionResult(status=ResolutionStatus.NO_SELECTION)

    if ALL_TARGETS in tokens:
        logger.debug("Selection contains 'all', using every registered target")
        return ResolutionResult(
            status=ResolutionStatus.RESOLVED, triples=registry.triples()
        )

    triples: List[str] = []
    unknown: List[str] = []
    for alias in tokens:
        triple = registry.lookup(alias)
        if triple is None:
            if alias not in unknown:
                logger.debug(f"Skipping unknown target alias: {alias}")
                unknown.append(alias)
            continue
        if triple not in triples:
            triples.append(triple)

    if not triples:
        return ResolutionResult(
            status=ResolutionStatus.NO_VALID_TARGETS, unknown=unknown
        )

    return ResolutionResult(
        status=ResolutionStatus.RESOLVED, triples=triples, unknown=unknown
    )
