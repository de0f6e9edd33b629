"""
Host platform detection for bug reports.

Usage:
    from targetkit.core.platform import detect_platform

    info = detect_platform()
    print(f"{info.arch} {info.os} ({info.os_family})")
"""

import functools
import platform
from dataclasses import dataclass


@dataclass
class PlatformInfo:
    """
    Host platform information.

    Attributes:
        os: Operating system ('windows', 'linux', 'macos', or the raw name)
        os_family: 'windows' or 'unix'
        arch: Machine architecture as reported by the OS (e.g. 'x86_64')
    """

    os: str
    os_family: str
    arch: str

    def __str__(self) -> str:
        return f"{self.arch} {self.os} ({self.os_family})"


@functools.lru_cache(maxsize=1)
def detect_platform() -> PlatformInfo:
    """
    Detect current platform information.

    This function is cached - it only runs detection once per process.
    """
    os_name = _detect_os()
    os_family = "windows" if os_name == "windows" else "unix"
    return PlatformInfo(os=os_name, os_family=os_family, arch=_detect_architecture())


def _detect_os() -> str:
    system = platform.system().lower()

    if system == "darwin":
        return "macos"
    return system or "unknown"


def _detect_architecture() -> str:
    machine = platform.machine().lower()

    # Match the compiler's naming rather than the OS's
    if machine in ("amd64", "x64"):
        return "x86_64"
    elif machine == "arm64":
        return "aarch64"
    return machine or "unknown"
