"""CLI commands for m2sweep.

This package contains all subcommand implementations.
"""

from m2sweep.cli.commands import clean, config, scan

__all__ = ["clean", "config", "scan"]
