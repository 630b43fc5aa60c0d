"""Shared Rich display functions for cleanup results.

Provides the summary table, the per-unit decisions table, and the JSON
representation of a traversal result used by the clean and scan commands.
"""

from typing import Any

from rich.table import Table

from m2sweep.cleaner.models import Decision, TraversalResult, UnitStats
from m2sweep.utils.formatting import console, format_binary_size, print_success, print_warning


def _files_and_size(files: int, size: int) -> str:
    return f"{files} files, {format_binary_size(size)}"


def _unit_row(stats: UnitStats) -> tuple[str, str, str]:
    return (str(stats.count), str(stats.files), format_binary_size(stats.size))


def create_summary_table(result: TraversalResult) -> Table:
    """Create a Rich table summarizing a traversal result.

    Rows follow the order of a cleanup report: the repository before the
    run, what was removed, the repository after the run, and what is
    still removable.

    Args:
        result: Aggregated traversal result.

    Returns:
        Rich Table configured for summary display.
    """
    table = Table(
        title="Repository Cleanup",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Category")
    table.add_column("Units", justify="right")
    table.add_column("Files", justify="right")
    table.add_column("Size", justify="right", style="info")

    table.add_row("Repository before", "-", str(result.all_files), format_binary_size(result.all_size))
    table.add_row("[removed]Removed builds[/]", *_unit_row(result.deleted_builds))
    table.add_row("[removed]Removed versions[/]", *_unit_row(result.deleted_versions))
    table.add_row(
        "Repository now",
        "-",
        str(result.remaining_files),
        format_binary_size(result.remaining_size),
    )
    table.add_row("[removable]Removable builds[/]", *_unit_row(result.potential_builds))
    table.add_row("[removable]Removable versions[/]", *_unit_row(result.potential_versions))

    return table


def create_decisions_table(decisions: list[Decision]) -> Table:
    """Create a Rich table listing classified versions and builds.

    Args:
        decisions: Decisions to display.

    Returns:
        Rich Table configured for decision display.
    """
    table = Table(
        title="Decisions",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Status", width=10, justify="center")
    table.add_column("Kind", width=8)
    table.add_column("Path", no_wrap=True)
    table.add_column("Reason")
    table.add_column("Size", justify="right")

    for decision in decisions:
        if decision.disposition.keep:
            status = "[kept]kept[/]"
            size = "-"
        elif decision.removed:
            status = "[removed]removed[/]"
            size = _files_and_size(decision.files, decision.size)
        else:
            status = "[removable]removable[/]"
            size = _files_and_size(decision.files, decision.size)

        table.add_row(
            status,
            decision.kind.value,
            decision.path,
            f"[muted]{decision.disposition.value}[/muted]",
            size,
        )

    return table


def print_result_summary(result: TraversalResult) -> None:
    """Print a one-line verdict below the summary table."""
    if result.has_failures:
        print_warning(
            f"{result.failed_removals} removal(s) failed; affected units are reported as removable."
        )
        return

    freed = result.deleted_builds.size + result.deleted_versions.size
    if freed:
        print_success(f"Freed {format_binary_size(freed)}.")
    elif result.potential_builds.count or result.potential_versions.count:
        removable = result.potential_builds.size + result.potential_versions.size
        console.print(f"\n[dim]Up to {format_binary_size(removable)} can be reclaimed.[/dim]")
    else:
        print_success("Repository is clean. Nothing to remove.")


def _unit_dict(stats: UnitStats) -> dict[str, int]:
    return {"count": stats.count, "files": stats.files, "size": stats.size}


def result_to_dict(result: TraversalResult, include_decisions: bool = True) -> dict[str, Any]:
    """Convert a traversal result to a JSON-serializable dictionary."""
    data: dict[str, Any] = {
        "all": {"files": result.all_files, "size": result.all_size},
        "deleted_builds": _unit_dict(result.deleted_builds),
        "deleted_versions": _unit_dict(result.deleted_versions),
        "potential_builds": _unit_dict(result.potential_builds),
        "potential_versions": _unit_dict(result.potential_versions),
        "remaining": {"files": result.remaining_files, "size": result.remaining_size},
        "failed_removals": result.failed_removals,
    }
    if include_decisions:
        data["decisions"] = [
            {
                "path": d.path,
                "kind": d.kind.value,
                "disposition": d.disposition.value,
                "files": d.files,
                "size": d.size,
                "removed": d.removed,
            }
            for d in result.decisions
        ]
    return data
