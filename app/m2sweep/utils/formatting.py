"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

import sys

from rich.console import Console

from m2sweep.core.theme import get_theme

# Binary prefixes, capped at tebi
BINARY_PREFIXES: tuple[str, ...] = ("", "Ki", "Mi", "Gi", "Ti")


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances (theme loaded once at import)
console = Console(theme=get_theme(), color_system=_detect_color_system())
err_console = Console(theme=get_theme(), stderr=True, color_system=_detect_color_system())


def format_binary_size(size_bytes: int) -> str:
    """Format a byte count with a binary prefix and two decimals.

    Args:
        size_bytes: Number of bytes.

    Returns:
        Human-readable size, e.g. "0.00 B", "1.50 KiB", "3.25 GiB".
    """
    index = (size_bytes.bit_length() - 1) // 10 if size_bytes > 0 else 0
    index = min(index, len(BINARY_PREFIXES) - 1)
    value = size_bytes / (1 << (index * 10))
    return f"{value:.2f} {BINARY_PREFIXES[index]}B"


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")
