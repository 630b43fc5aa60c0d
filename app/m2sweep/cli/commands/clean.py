"""Clean command implementation.

Classifies the local repository and deletes stale builds and superseded
versions when deletion is enabled.
"""

from pathlib import Path
from typing import Annotated

import typer

from m2sweep.cli.types import OutputFormat, render_result, resolve_config, run_cleaner
from m2sweep.core.gate import should_run
from m2sweep.utils.formatting import print_info

app = typer.Typer(
    help="Remove stale builds and superseded versions.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def clean_repository(
    repository: Annotated[
        Path | None,
        typer.Option("--repository", "-r", help="Local repository root."),
    ] = None,
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Configuration file."),
    ] = None,
    delete_builds: Annotated[
        bool,
        typer.Option("--delete-builds", help="Delete stale timestamped builds."),
    ] = False,
    delete_versions: Annotated[
        bool,
        typer.Option("--delete-versions", help="Delete superseded versions."),
    ] = False,
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
    force: Annotated[
        bool,
        typer.Option("--force", help="Ignore the configured execution probability."),
    ] = False,
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
    """Remove stale builds and superseded versions from the local repository.

    Without --delete-builds or --delete-versions (or the corresponding
    configuration keys) nothing is deleted and the removable units are
    only reported.
    """
    config = resolve_config(
        config_path,
        repository=repository,
        delete_builds=delete_builds,
        delete_versions=delete_versions,
        whitelist=whitelist,
        preserve_latest=preserve_latest,
        blacklist=blacklist,
    )

    if not force and not should_run(config.execution_probability):
        print_info("Skipped due to execution probability.")
        return

    result = run_cleaner(config)
    render_result(result, output_format, details=details, limit=limit)

    if result.has_failures:
        raise typer.Exit(code=1)
