# Copyright (c) fsusage-analyzer Contributors.

"""
fsusage CLI entry point.

Provides command-line interface for querying and analyzing fs_usage traces.
"""

import sys
from importlib.metadata import PackageNotFoundError, version

import click

from fsusage.analyze.cli import analyze_command
from fsusage.config import configure_logging
from fsusage.query.cli import query_command


def _get_package_version() -> str:
    """Get package version from metadata."""
    try:
        return version("fsusage-analyzer")
    except PackageNotFoundError:
        return "0+unknown"


EXAMPLES = """
Examples:
  fsusage query capture.log --fd 3
  fsusage analyze summary capture.log
  fsusage analyze bins capture.log --width 0.1
  fsusage analyze fd-paths capture.log --process Finder
"""


@click.group(epilog=EXAMPLES)
@click.version_option(version=_get_package_version(), prog_name="fsusage")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Log parsing progress to stderr.",
)
def main(verbose: bool) -> None:
    """fsusage: filesystem activity trace parsing and analysis tools."""
    configure_logging(verbose)


# Register subcommands
main.add_command(query_command)
main.add_command(analyze_command)


if __name__ == "__main__":
    sys.exit(main())
