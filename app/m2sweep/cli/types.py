"""Shared types and utilities for CLI commands.

This module provides the output format enum and the helpers that turn
configuration plus command-line overrides into a cleaner run, shared by
the clean and scan commands.
"""

import json
from enum import Enum
from pathlib import Path

import typer
from pydantic import ValidationError

from m2sweep.cleaner.engine import RepositoryCleaner, RepositoryError
from m2sweep.cleaner.models import TraversalResult
from m2sweep.cli.display import (
    create_decisions_table,
    create_summary_table,
    print_result_summary,
    result_to_dict,
)
from m2sweep.core.config import ConfigError, SweepConfig, load_config_or_default
from m2sweep.utils.formatting import console, print_error


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


def resolve_config(
    config_path: Path | None,
    *,
    repository: Path | None = None,
    delete_builds: bool = False,
    delete_versions: bool = False,
    whitelist: list[str] | None = None,
    preserve_latest: list[str] | None = None,
    blacklist: list[str] | None = None,
) -> SweepConfig:
    """Merge command-line overrides into the stored configuration.

    Deletion flags are OR-ed with the configured values, filter entries
    are appended to the configured lists.

    Args:
        config_path: Explicit config file, None for the default location.
        repository: Repository root overriding the configured one.
        delete_builds: Enable build deletion.
        delete_versions: Enable version deletion.
        whitelist: Additional whitelist entries.
        preserve_latest: Additional preserve-latest entries.
        blacklist: Additional blacklist entries.

    Returns:
        Validated effective SweepConfig.

    Raises:
        typer.Exit: If the configuration or an entry is invalid.
    """
    try:
        base = load_config_or_default(config_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    data = base.model_dump()
    if repository is not None:
        data["repository"] = repository
    data["delete_builds"] = base.delete_builds or delete_builds
    data["delete_versions"] = base.delete_versions or delete_versions
    data["whitelist"] = [*base.whitelist, *(whitelist or [])]
    data["preserve_latest"] = [*base.preserve_latest, *(preserve_latest or [])]
    data["blacklist"] = [*base.blacklist, *(blacklist or [])]

    try:
        return SweepConfig.model_validate(data)
    except ValidationError as e:
        print_error(f"Invalid filter configuration: {e}")
        raise typer.Exit(code=1) from e


def run_cleaner(config: SweepConfig, *, allow_delete: bool = True) -> TraversalResult:
    """Run the repository cleaner for a configuration.

    Args:
        config: Effective configuration.
        allow_delete: If False, deletion flags are ignored (report only).

    Returns:
        Aggregated TraversalResult.

    Raises:
        typer.Exit: If the repository does not exist.
    """
    cleaner = RepositoryCleaner(
        delete_builds=allow_delete and config.delete_builds,
        delete_versions=allow_delete and config.delete_versions,
        whitelist=config.compiled_whitelist(),
        preserve_latest=config.compiled_preserve_latest(),
        blacklist=config.compiled_blacklist(),
    )
    try:
        return cleaner.clean(config.effective_repository)
    except RepositoryError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def render_result(
    result: TraversalResult,
    output_format: OutputFormat,
    *,
    details: bool = False,
    limit: int | None = None,
) -> None:
    """Display a traversal result as tables or JSON.

    Args:
        result: Aggregated traversal result.
        output_format: Table or JSON output.
        details: Also list every classified unit.
        limit: Maximum number of decisions to list.
    """
    if output_format == OutputFormat.JSON:
        data = result_to_dict(result, include_decisions=details)
        if limit and details:
            data["decisions"] = data["decisions"][:limit]
        console.print_json(json.dumps(data))
        return

    console.print(create_summary_table(result))

    if details and result.decisions:
        decisions = list(result.decisions)
        shown = decisions[:limit] if limit else decisions
        console.print(create_decisions_table(shown))
        if len(shown) < len(decisions):
            console.print(
                f"[dim](showing {len(shown)} of {len(decisions)}, limited to {limit})[/dim]"
            )

    print_result_summary(result)
