"""
Target registry.

The registry is a fixed, ordered alias -> triple table built once at process
start and only read afterwards. Declared order matters: selecting ``all``
builds every target in exactly this order.
"""

from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

from targetkit.core.exceptions import RegistryError

# Reserved selection token meaning "every registered target"
ALL_TARGETS = "all"

DEFAULT_TARGETS: Mapping[str, str] = MappingProxyType(
    {
        "linux": "x86_64-unknown-linux-gnu",
        "windows": "x86_64-pc-windows-gnu",
        "mac": "x86_64-apple-darwin",
        "rpi": "armv7-unknown-linux-gnueabihf",
        "rpi-legacy": "arm-unknown-linux-gnueabihf",
    }
)


class TargetRegistry:
    """
    Read-only ordered mapping from target alias to target triple.

    Args:
        targets: Alias -> triple mapping, in declared order

    Raises:
        RegistryError: If an alias is reserved or empty, or a triple is empty

    Example:
        >>> registry = TargetRegistry({"linux": "x86_64-unknown-linux-gnu"})
        >>> registry.lookup("linux")
        'x86_64-unknown-linux-gnu'
    """

    def __init__(self, targets: Mapping[str, str]):
        entries: Dict[str, str] = {}
        for alias, triple in targets.items():
            if not isinstance(alias, str) or not alias.strip():
                raise RegistryError(f"Invalid target alias: {alias!r}")
            if alias == ALL_TARGETS:
                raise RegistryError(
                    f"'{ALL_TARGETS}' is reserved and cannot be used as a target alias"
                )
            if not isinstance(triple, str) or not triple.strip():
                raise RegistryError(f"Target '{alias}' has an invalid triple: {triple!r}")
            entries[alias] = triple

        self._targets = MappingProxyType(entries)

    def lookup(self, alias: str) -> Optional[str]:
        """Return the triple for an alias, or None if it isn't registered."""
        return self._targets.get(alias)

    def aliases(self) -> List[str]:
        return list(self._targets.keys())

    def triples(self) -> List[str]:
        """All triples in declared order."""
        return list(self._targets.values())

    def items(self) -> List[Tuple[str, str]]:
        return list(self._targets.items())

    def __contains__(self, alias: object) -> bool:
        return alias in self._targets

    def __iter__(self) -> Iterator[str]:
        return iter(self._targets)

    def __len__(self) -> int:
        return len(self._targets)

    def __repr__(self) -> str:
        return f"TargetRegistry({dict(self._targets)!r})"


def default_registry() -> TargetRegistry:
    """Registry with the built-in target table."""
    return TargetRegistry(DEFAULT_TARGETS)
