"""Repository classification and cleanup engine.

This module provides coordinate filters, Maven version ordering, build
clustering, version directory classification and the traversal engine
that deletes stale versions and builds from a local repository.
"""

from m2sweep.cleaner.builds import group_builds
from m2sweep.cleaner.classifier import (
    Classification,
    VersionCandidate,
    classify_versions,
    sort_newest_first,
)
from m2sweep.cleaner.engine import RepositoryCleaner, RepositoryError, traverse
from m2sweep.cleaner.filters import Filter, FilterSyntaxError, compile_filter, compile_filters
from m2sweep.cleaner.models import (
    Decision,
    DirectoryKind,
    Disposition,
    TraversalResult,
    UnitKind,
    UnitStats,
)
from m2sweep.cleaner.operator import RemovalOperator, RemovalResult
from m2sweep.cleaner.versions import ComparableVersion, compare_versions, version_sort_key

__all__ = [
    "Classification",
    "ComparableVersion",
    "Decision",
    "DirectoryKind",
    "Disposition",
    "Filter",
    "FilterSyntaxError",
    "RemovalOperator",
    "RemovalResult",
    "RepositoryCleaner",
    "RepositoryError",
    "TraversalResult",
    "UnitKind",
    "UnitStats",
    "VersionCandidate",
    "classify_versions",
    "compare_versions",
    "compile_filter",
    "compile_filters",
    "group_builds",
    "sort_newest_first",
    "traverse",
    "version_sort_key",
]
