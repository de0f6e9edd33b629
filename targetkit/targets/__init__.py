"""
Target selection for TargetKit.

Maps human-facing target aliases to compiler target triples and resolves an
operator's selection into the ordered list of triples to build.
"""

from targetkit.targets.registry import (
    ALL_TARGETS,
    DEFAULT_TARGETS,
    TargetRegistry,
    default_registry,
)
from targetkit.targets.resolver import ResolutionResult, ResolutionStatus, resolve

__all__ = [
    "ALL_TARGETS",
    "DEFAULT_TARGETS",
    "TargetRegistry",
    "default_registry",
    "ResolutionResult",
    "ResolutionStatus",
    "resolve",
]
