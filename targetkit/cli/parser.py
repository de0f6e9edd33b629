"""
TargetKit CLI argument parser.

This module implements the command-line interface for TargetKit using argparse.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

# Get version from package
try:
    from importlib.metadata import version

    __version__ = version("targetkit")
except Exception:
    __version__ = "0.1.0"

logger = logging.getLogger(__name__)


class CLI:
    """TargetKit command-line interface."""

    # command -> (module, handler function)
    COMMANDS = {
        "build": ("targetkit.cli.commands.build", "run"),
        "clean-build": ("targetkit.cli.commands.build", "run_clean_build"),
        "build-release": ("targetkit.cli.commands.build", "run_release"),
        "info": ("targetkit.cli.commands.info", "run"),
        "doc": ("targetkit.cli.commands.tools", "run_doc"),
        "lint": ("targetkit.cli.commands.tools", "run_lint"),
        "health": ("targetkit.cli.commands.tools", "run_health"),
        "install-toolchain": (
            "targetkit.cli.commands.tools",
            "run_install_toolchain",
        ),
    }

    def __init__(self):
        """Initialize CLI with argument parser."""
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """
        Create argument parser with all subcommands.

        Returns:
            Configured ArgumentParser instance
        """
        parser = argparse.ArgumentParser(
            prog="targetkit",
            description="TargetKit - build one project for many target platforms",
            epilog='Use "targetkit COMMAND --help" for command-specific help',
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        # Global options
        parser.add_argument(
            "--version", action="version", version=f"TargetKit {__version__}"
        )
        parser.add_argument(
            "--verbose", "-v", action="store_true", help="Enable verbose output"
        )
        parser.add_argument(
            "--quiet",
            "-q",
            action="store_true",
            help="Enable minimal output (errors only)",
        )
        parser.add_argument(
            "--config",
            type=Path,
            metavar="PATH",
            help="Path to configuration file (default: ./targetkit.yaml)",
        )
        parser.add_argument(
            "--project-root",
            type=Path,
            metavar="PATH",
            default=Path.cwd(),
            help="Project root directory (default: current directory)",
        )

        # Subcommands
        subparsers = parser.add_subparsers(
            dest="command", help="Available commands", metavar="COMMAND"
        )

        self._add_build_commands(subparsers)
        self._add_info_command(subparsers)
        self._add_tool_commands(subparsers)

        return parser

    def _add_build_commands(self, subparsers):
        """Add 'build', 'clean-build' and 'build-release' subcommands."""
        targets_help = (
            "Target aliases to build ('all' for every target; "
            "none to build for the local machine)"
        )

        parser = subparsers.add_parser(
            "build",
            help="Build the selected targets",
            description="Install toolchains for and build the selected targets, in order",
        )
        parser.add_argument("targets", nargs="*", metavar="TARGET", help=targets_help)

        parser = subparsers.add_parser(
            "clean-build",
            help="Clean, then build the selected targets",
            description="Remove previous build artifacts, then build the selected targets",
        )
        parser.add_argument("targets", nargs="*", metavar="TARGET", help=targets_help)

        subparsers.add_parser(
            "build-release",
            help="Clean release build of all targets plus documentation",
            description="Clean release build of every target, then build documentation",
        )

    def _add_info_command(self, subparsers):
        """Add 'info' subcommand."""
        subparsers.add_parser(
            "info",
            help="Print system info for bug reports",
            description="Print architecture, OS, revision and tool versions",
        )

    def _add_tool_commands(self, subparsers):
        """Add pass-through tool subcommands."""
        subparsers.add_parser(
            "doc",
            help="Build project documentation",
            description="Build project documentation",
        )
        subparsers.add_parser(
            "lint",
            help="Format and auto-fix the codebase",
            description="Format and auto-fix the codebase",
        )
        subparsers.add_parser(
            "health",
            help="Report dependency health",
            description="Check for outdated and disallowed dependencies",
        )
        subparsers.add_parser(
            "install-toolchain",
            help="Install or update the development toolchain",
            description="Install the toolchain manager if missing, then update it "
            "and install helper tools",
        )

    def parse_args(self, args: Optional[List[str]] = None):
        """
        Parse command-line arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Parsed arguments namespace
        """
        return self.parser.parse_args(args)

    def run(self, args: Optional[List[str]] = None) -> int:
        """
        Run CLI with given arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        parsed_args = self.parse_args(args)

        # Configure logging
        self._configure_logging(parsed_args)

        # Check if command specified
        if not parsed_args.command:
            self.parser.print_help()
            return 1

        # Dispatch to command handler
        try:
            return self._dispatch_command(parsed_args)
        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return 130  # Standard exit code for SIGINT
        except Exception as e:
            logger.error(f"Error: {e}")
            if parsed_args.verbose:
                import traceback

                traceback.print_exc()
            return 1

    def _configure_logging(self, args):
        """
        Configure logging based on verbose/quiet flags.

        Args:
            args: Parsed arguments with verbose/quiet flags
        """
        if args.verbose:
            level = logging.DEBUG
            format_str = "%(levelname)s [%(name)s] %(message)s"
        elif args.quiet:
            level = logging.ERROR
            format_str = "%(levelname)s: %(message)s"
        else:
            level = logging.INFO
            format_str = "%(message)s"

        logging.basicConfig(
            level=level,
            format=format_str,
            force=True,  # Reconfigure if already configured
        )

    def _dispatch_command(self, args) -> int:
        """
        Dispatch to appropriate command handler.

        Args:
            args: Parsed arguments with command field

        Returns:
            Exit code from command handler
        """
        entry = self.COMMANDS.get(args.command)
        if not entry:
            logger.error(f"Unknown command: {args.command}")
            return 1

        module_name, handler_name = entry

        import importlib

        module = importlib.import_module(module_name)
        return getattr(module, handler_name)(args)


def main():
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
