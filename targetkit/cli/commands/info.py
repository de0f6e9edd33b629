"""
Info command implementation.

Prints host and repository details to paste into a bug report. Read only.
"""

from targetkit.cli.utils import load_project_config, print_warning, resolve_project_root
from targetkit.config.parser import TargetKitConfig
from targetkit.core.exceptions import ConfigError
from targetkit.core.platform import detect_platform
from targetkit.core.process import query_output

UNKNOWN = "unknown"


def collect_info(project_root, compiler: str = "cargo") -> dict:
    """
    Gather bug report details.

    Args:
        project_root: Repository to read revision details from
        compiler: Compiler driver to query for its version

    Returns:
        Ordered mapping of label to value; values that can't be determined
        are "unknown"
    """
    platform_info = detect_platform()

    def query(*cmd):
        return query_output(cmd, cwd=project_root) or UNKNOWN

    short_rev = query("git", "rev-parse", "--short", "HEAD")
    full_rev = query("git", "rev-parse", "HEAD")

    return {
        "Architecture": platform_info.arch,
        "Operating system": f"{platform_info.os} ({platform_info.os_family})",
        "Commit": f"{short_rev} ({full_rev})",
        "Branch": query("git", "rev-parse", "--abbrev-ref", "HEAD"),
        "Cargo": query(compiler, "version"),
        "Rust": query("rustc", "--version"),
    }


def run(args) -> int:
    """
    Run the info command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (always 0)
    """
    project_root = resolve_project_root(args.project_root)

    try:
        config = load_project_config(args)
    except ConfigError as e:
        print_warning(f"{e}; using default tools")
        config = TargetKitConfig()

    print("Please use the following data when preparing a bug report:")
    for label, value in collect_info(project_root, config.tools.compiler).items():
        print(f"{label}: {value}")

    return 0
