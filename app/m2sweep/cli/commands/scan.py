"""Scan command implementation.

Reports what a cleanup would remove without touching the repository.
"""

from pathlib import Path
from typing import Annotated

import typer

from m2sweep.cli.types import OutputFormat, render_result, resolve_config, run_cleaner

app = typer.Typer(
    help="Report removable builds and versions without deleting.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def scan_repository(
    repository: Annotated[
        Path | None,
        typer.Option("--repository", "-r", help="Local repository root."),
    ] = None,
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Configuration file."),
    ] = None,
    whitelist: Annotated[
        list[str] | None,
        typer.Option("--whitelist", "-w", help="Never remove [[group:]artifact:]version."),
    ] = None,
    preserve_latest: Annotated[
        list[str] | None,
        typer.Option("--preserve-latest", "-p", help="Keep the latest match of an entry."),
    ] = None,
    blacklist: Annotated[
        list[str] | None,
        typer.Option("--blacklist", "-b", help="Always remove [[group:]artifact:]version."),
    ] = None,
    details: Annotated[
        bool,
        typer.Option("--details", "-d", help="List every classified version and build."),
    ] = False,
    limit: Annotated[
        int | None,
        typer.Option("--limit", "-l", help="Limit number of listed decisions."),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format.", case_sensitive=False),
    ] = OutputFormat.TABLE,
) -> None:
    """Report removable builds and versions of the local repository."""
    config = resolve_config(
        config_path,
        repository=repository,
        whitelist=whitelist,
        preserve_latest=preserve_latest,
        blacklist=blacklist,
    )

    result = run_cleaner(config, allow_delete=False)
    render_result(result, output_format, details=details, limit=limit)
