"""CLI package for m2sweep.

This package contains the Typer application and all subcommands.
"""

from m2sweep.cli.main import app

__all__ = ["app"]
