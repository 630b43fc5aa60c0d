"""Configuration commands.

Provides commands to create a default configuration file and to show
the effective configuration.
"""

import json
from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from m2sweep.core.config import (
    ConfigError,
    SweepConfig,
    load_config_or_default,
    save_config,
)
from m2sweep.core.paths import ensure_config_dir, get_config_path
from m2sweep.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Manage the m2sweep configuration.",
    invoke_without_command=True,
    no_args_is_help=True,
)


@app.command()
def init(
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Configuration file to create."),
    ] = None,
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing configuration."),
    ] = False,
) -> None:
    """Create a configuration file with default settings."""
    target = config_path or get_config_path()

    if target.exists() and not force:
        print_error(f"Configuration already exists: {target}")
        print_info("Use --force to overwrite.")
        raise typer.Exit(code=1)

    if config_path is None:
        try:
            ensure_config_dir()
        except RuntimeError as e:
            print_error(str(e))
            raise typer.Exit(code=1) from e

    try:
        saved = save_config(SweepConfig(), target)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Configuration written to {saved}")


@app.command()
def show(
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Configuration file."),
    ] = None,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the configuration as JSON."),
    ] = False,
) -> None:
    """Show the effective configuration."""
    try:
        config = load_config_or_default(config_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if as_json:
        console.print_json(config.model_dump_json())
        return

    table = Table(
        title="Configuration",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Key", style="bold")
    table.add_column("Value")

    table.add_row("repository", str(config.effective_repository))
    table.add_row("execution_probability", f"{config.execution_probability:g}")
    table.add_row("delete_builds", str(config.delete_builds).lower())
    table.add_row("delete_versions", str(config.delete_versions).lower())
    table.add_row("whitelist", json.dumps(config.whitelist))
    table.add_row("preserve_latest", json.dumps(config.preserve_latest))
    table.add_row("blacklist", json.dumps(config.blacklist))

    console.print(table)
