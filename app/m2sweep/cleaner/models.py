"""Repository cleaner domain models.

This module defines the data structures produced while walking a local
repository: directory kinds, dispositions of version directories and
build units, and the aggregated traversal statistics.
"""

from dataclasses import dataclass, field
from enum import Enum, Flag, auto


class DirectoryKind(Flag):
    """Structural role of a repository directory.

    Attributes:
        NONE: Group directory or anything else without version content.
        VERSION: Directory directly containing a package descriptor (.pom).
        ARTIFACT: Directory whose subdirectories include version directories.
    """

    NONE = 0
    VERSION = auto()
    ARTIFACT = auto()


class UnitKind(str, Enum):
    """Kind of unit a decision refers to."""

    BUILD = "build"
    VERSION = "version"


class Disposition(str, Enum):
    """Outcome of classifying a version directory or build unit.

    Attributes:
        WHITELISTED: Matched by a whitelist filter, always kept.
        PRESERVED_LATEST: Newest match of a preserve-latest filter, kept.
        LATEST: Newest version of its artifact, kept.
        BLACKLISTED: Matched by a blacklist filter, designated for removal.
        SUPERSEDED: Older than the newest version, designated for removal.
        STALE_BUILD: Timestamped build cluster, designated for removal.
    """

    WHITELISTED = "whitelisted"
    PRESERVED_LATEST = "preserved_latest"
    LATEST = "latest"
    BLACKLISTED = "blacklisted"
    SUPERSEDED = "superseded"
    STALE_BUILD = "stale_build"

    @property
    def keep(self) -> bool:
        """Check if the unit survives the cleanup."""
        return self in (Disposition.WHITELISTED, Disposition.PRESERVED_LATEST, Disposition.LATEST)


@dataclass(frozen=True, slots=True)
class UnitStats:
    """Count, file count and byte size of a category of units."""

    count: int = 0
    files: int = 0
    size: int = 0

    def __add__(self, other: "UnitStats") -> "UnitStats":
        return UnitStats(
            count=self.count + other.count,
            files=self.files + other.files,
            size=self.size + other.size,
        )


@dataclass(frozen=True, slots=True)
class Decision:
    """A single classified unit, reported for display.

    Attributes:
        path: Path relative to the repository root (build name for builds).
        kind: Whether the unit is a build cluster or a version directory.
        disposition: Classification outcome.
        files: Number of files belonging to the unit.
        size: Total byte size of those files.
        removed: True if the unit was actually deleted.
    """

    path: str
    kind: UnitKind
    disposition: Disposition
    files: int = 0
    size: int = 0
    removed: bool = False


@dataclass(frozen=True, slots=True)
class TraversalResult:
    """Aggregated statistics of a repository subtree.

    Attributes:
        all_files: Number of files found in the subtree.
        all_size: Total byte size of those files.
        potential_builds: Build units eligible for removal but kept.
        deleted_builds: Build units actually removed.
        potential_versions: Version directories eligible for removal but kept.
        deleted_versions: Version directories actually removed.
        failed_removals: Number of files or directories that failed to delete.
        pom_present: True if the subtree root directly contains a .pom file.
        nested_pom: True if a .pom file exists in any subdirectory of the subtree root.
        decisions: Classified units in traversal order.
    """

    all_files: int = 0
    all_size: int = 0
    potential_builds: UnitStats = field(default_factory=UnitStats)
    deleted_builds: UnitStats = field(default_factory=UnitStats)
    potential_versions: UnitStats = field(default_factory=UnitStats)
    deleted_versions: UnitStats = field(default_factory=UnitStats)
    failed_removals: int = 0
    pom_present: bool = False
    nested_pom: bool = False
    decisions: tuple[Decision, ...] = ()

    def merge(self, child: "TraversalResult") -> "TraversalResult":
        """Add a child's statistics to this result.

        The child's pom_present flag is not inherited; it describes the
        child directory only and turns into nested_pom of the parent.

        Args:
            child: Result of a subdirectory.

        Returns:
            New TraversalResult with pointwise summed counters.
        """
        return TraversalResult(
            all_files=self.all_files + child.all_files,
            all_size=self.all_size + child.all_size,
            potential_builds=self.potential_builds + child.potential_builds,
            deleted_builds=self.deleted_builds + child.deleted_builds,
            potential_versions=self.potential_versions + child.potential_versions,
            deleted_versions=self.deleted_versions + child.deleted_versions,
            failed_removals=self.failed_removals + child.failed_removals,
            pom_present=self.pom_present,
            nested_pom=self.nested_pom or child.pom_present or child.nested_pom,
            decisions=self.decisions + child.decisions,
        )

    @property
    def remaining_files(self) -> int:
        """Number of files left in the repository after the run."""
        return self.all_files - self.deleted_builds.files - self.deleted_versions.files

    @property
    def remaining_size(self) -> int:
        """Byte size left in the repository after the run."""
        return self.all_size - self.deleted_builds.size - self.deleted_versions.size

    @property
    def has_failures(self) -> bool:
        return self.failed_removals > 0
