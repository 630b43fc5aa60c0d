"""Unit tests for cli/display.py.

Tests for the summary and decision tables and the JSON representation
shared by the clean and scan commands.
"""

import io

import pytest
from m2sweep.cleaner.models import Decision, Disposition, TraversalResult, UnitKind, UnitStats
from m2sweep.cli.display import (
    create_decisions_table,
    create_summary_table,
    print_result_summary,
    result_to_dict,
)
from m2sweep.core.theme import get_theme
from rich.console import Console
from rich.table import Table

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def cleaned_result() -> TraversalResult:
    """A run that removed one version and one build."""
    return TraversalResult(
        all_files=10,
        all_size=4096,
        deleted_builds=UnitStats(count=1, files=2, size=1024),
        deleted_versions=UnitStats(count=1, files=3, size=2048),
        decisions=(
            Decision(
                path="com/example/app/2.0",
                kind=UnitKind.VERSION,
                disposition=Disposition.LATEST,
            ),
            Decision(
                path="com/example/app/1.0",
                kind=UnitKind.VERSION,
                disposition=Disposition.SUPERSEDED,
                files=3,
                size=2048,
                removed=True,
            ),
            Decision(
                path="com/example/app/2.0-SNAPSHOT/app-2.0-20230101.120000-1",
                kind=UnitKind.BUILD,
                disposition=Disposition.STALE_BUILD,
                files=2,
                size=1024,
                removed=True,
            ),
        ),
    )


@pytest.fixture
def report_result() -> TraversalResult:
    """A report-only run with one removable version."""
    return TraversalResult(
        all_files=4,
        all_size=2048,
        potential_versions=UnitStats(count=1, files=2, size=1536),
        decisions=(
            Decision(
                path="com/example/app/1.0",
                kind=UnitKind.VERSION,
                disposition=Disposition.BLACKLISTED,
                files=2,
                size=1536,
            ),
        ),
    )


def _render_table(table: Table) -> str:
    buf = io.StringIO()
    Console(theme=get_theme(), file=buf, color_system=None, width=200).print(table)
    return buf.getvalue()


def _capture_output(func: object, *args: object, **kwargs: object) -> str:
    """Capture Rich console output by temporarily replacing the consoles."""
    import m2sweep.cli.display as display_mod
    import m2sweep.utils.formatting as fmt_mod

    buf = io.StringIO()
    test_console = Console(theme=get_theme(), file=buf, color_system=None, width=200)

    originals = (display_mod.console, fmt_mod.console, fmt_mod.err_console)
    display_mod.console = test_console
    fmt_mod.console = test_console
    fmt_mod.err_console = test_console
    try:
        func(*args, **kwargs)  # type: ignore[operator]
    finally:
        display_mod.console, fmt_mod.console, fmt_mod.err_console = originals

    return buf.getvalue()


# ===========================================================================
# create_summary_table
# ===========================================================================


class TestCreateSummaryTable:
    """Tests for create_summary_table."""

    def test_columns(self, cleaned_result: TraversalResult) -> None:
        table = create_summary_table(cleaned_result)
        assert [col.header for col in table.columns] == ["Category", "Units", "Files", "Size"]
        assert table.title == "Repository Cleanup"
        assert table.row_count == 6

    def test_rows(self, cleaned_result: TraversalResult) -> None:
        output = _render_table(create_summary_table(cleaned_result))

        assert "Repository before" in output
        assert "4.00 KiB" in output
        assert "Removed versions" in output
        assert "2.00 KiB" in output
        assert "Repository now" in output
        assert "1.00 KiB" in output
        assert "Removable builds" in output


# ===========================================================================
# create_decisions_table
# ===========================================================================


class TestCreateDecisionsTable:
    """Tests for create_decisions_table."""

    def test_columns(self, cleaned_result: TraversalResult) -> None:
        table = create_decisions_table(list(cleaned_result.decisions))
        assert [col.header for col in table.columns] == ["Status", "Kind", "Path", "Reason", "Size"]
        assert table.row_count == 3

    def test_statuses(self, cleaned_result: TraversalResult, report_result: TraversalResult) -> None:
        output = _render_table(
            create_decisions_table([*cleaned_result.decisions, *report_result.decisions])
        )

        assert "kept" in output
        assert "removed" in output
        assert "removable" in output
        assert "blacklisted" in output
        assert "com/example/app/2.0-SNAPSHOT/app-2.0-20230101.120000-1" in output
        assert "3 files, 2.00 KiB" in output

    def test_empty(self) -> None:
        assert create_decisions_table([]).row_count == 0


# ===========================================================================
# print_result_summary
# ===========================================================================


class TestPrintResultSummary:
    """Tests for print_result_summary."""

    def test_freed(self, cleaned_result: TraversalResult) -> None:
        output = _capture_output(print_result_summary, cleaned_result)
        assert "Freed 3.00 KiB." in output

    def test_reclaimable(self, report_result: TraversalResult) -> None:
        output = _capture_output(print_result_summary, report_result)
        assert "Up to 1.50 KiB can be reclaimed." in output

    def test_clean(self) -> None:
        output = _capture_output(print_result_summary, TraversalResult(all_files=2, all_size=20))
        assert "Repository is clean" in output

    def test_failures(self) -> None:
        output = _capture_output(print_result_summary, TraversalResult(failed_removals=2))
        assert "2 removal(s) failed" in output


# ===========================================================================
# result_to_dict
# ===========================================================================


class TestResultToDict:
    """Tests for result_to_dict."""

    def test_counters(self, cleaned_result: TraversalResult) -> None:
        data = result_to_dict(cleaned_result)

        assert data["all"] == {"files": 10, "size": 4096}
        assert data["deleted_versions"] == {"count": 1, "files": 3, "size": 2048}
        assert data["potential_builds"] == {"count": 0, "files": 0, "size": 0}
        assert data["remaining"] == {"files": 5, "size": 1024}
        assert data["failed_removals"] == 0

    def test_decisions(self, cleaned_result: TraversalResult) -> None:
        decisions = result_to_dict(cleaned_result)["decisions"]

        assert len(decisions) == 3
        assert decisions[1] == {
            "path": "com/example/app/1.0",
            "kind": "version",
            "disposition": "superseded",
            "files": 3,
            "size": 2048,
            "removed": True,
        }

    def test_without_decisions(self, cleaned_result: TraversalResult) -> None:
        assert "decisions" not in result_to_dict(cleaned_result, include_decisions=False)
