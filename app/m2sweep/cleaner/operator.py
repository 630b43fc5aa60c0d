"""Filesystem removal operator.

Performs the single-path deletions requested by the repository cleaner
and reports each outcome instead of raising, so one failing file never
interrupts the walk.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RemovalResult:
    """Result of a single removal.

    Attributes:
        path: Path that was operated on.
        success: Whether the path was removed.
        size: Byte size of the file measured before removal (0 for directories).
        error: Error message if the removal failed, None otherwise.
    """

    path: Path
    success: bool
    size: int = 0
    error: str | None = None


class RemovalOperator:
    """Deletes repository files and emptied directories."""

    def remove_file(self, path: Path) -> RemovalResult:
        """Delete a regular file.

        Args:
            path: File to delete.

        Returns:
            RemovalResult carrying the file size measured before deletion.
        """
        size = file_size(path)
        try:
            path.unlink()
        except OSError as e:
            logger.warning("Couldn't remove file: %s (%s)", path, e)
            return RemovalResult(path=path, success=False, size=size, error=str(e))
        return RemovalResult(path=path, success=True, size=size)

    def remove_directory(self, path: Path) -> RemovalResult:
        """Delete an empty directory.

        Args:
            path: Directory to delete.

        Returns:
            RemovalResult indicating success or failure.
        """
        try:
            path.rmdir()
        except OSError as e:
            logger.warning("Couldn't remove directory: %s (%s)", path, e)
            return RemovalResult(path=path, success=False, error=str(e))
        return RemovalResult(path=path, success=True)


def file_size(path: Path) -> int:
    """Get the size of a file without following symlinks, 0 if unavailable."""
    try:
        return path.lstat().st_size
    except OSError:
        return 0
