"""Classification of the version directories of one artifact.

Precedence, evaluated per directory:

1. Whitelist: matched by any whitelist filter, kept.
2. Preserve latest: newest directory within the matching subset of a
   preserve-latest filter, kept.
3. Blacklist: matched by any blacklist filter, removed.
4. Latest: the newest directory of the artifact is kept, all others removed.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from m2sweep.cleaner.filters import Filter, any_match
from m2sweep.cleaner.models import Disposition
from m2sweep.cleaner.versions import version_sort_key

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class VersionCandidate:
    """A version directory together with its coordinates.

    Attributes:
        path: Absolute path of the version directory.
        group: Dotted group identifier.
        artifact: Artifact identifier.
        version: Version identifier (directory name).
    """

    path: Path
    group: str
    artifact: str
    version: str

    @property
    def coordinates(self) -> str:
        return f"{self.group}:{self.artifact}:{self.version}"


@dataclass(frozen=True, slots=True)
class Classification:
    """Disposition assigned to a version candidate."""

    candidate: VersionCandidate
    disposition: Disposition

    @property
    def remove(self) -> bool:
        return not self.disposition.keep


def sort_newest_first(candidates: Sequence[VersionCandidate]) -> list[VersionCandidate]:
    """Sort version candidates from newest to oldest.

    Equivalent versions ("1.0" and "1.0.0") are ordered by name, descending.
    """
    return sorted(
        candidates,
        key=lambda candidate: (version_sort_key(candidate.version), candidate.version),
        reverse=True,
    )


def classify_versions(
    candidates: Sequence[VersionCandidate],
    whitelist: Sequence[Filter] = (),
    preserve_latest: Sequence[Filter] = (),
    blacklist: Sequence[Filter] = (),
) -> list[Classification]:
    """Assign a disposition to every version directory of one artifact.

    Args:
        candidates: Version directories sorted newest first.
        whitelist: Filters of versions that are never removed.
        preserve_latest: Filters whose newest matching version is kept.
        blacklist: Filters of versions that are always removed
            unless whitelisted or preserved.

    Returns:
        One Classification per candidate, in input order.
    """
    # Newest match per preserve-latest filter (input is newest first)
    preserved: set[Path] = set()
    for filter_ in preserve_latest:
        for candidate in candidates:
            if filter_.matches(candidate.group, candidate.artifact, candidate.version):
                preserved.add(candidate.path)
                break

    results: list[Classification] = []
    for index, candidate in enumerate(candidates):
        coordinates = (candidate.group, candidate.artifact, candidate.version)

        if any_match(whitelist, *coordinates):
            disposition = Disposition.WHITELISTED
        elif candidate.path in preserved:
            disposition = Disposition.PRESERVED_LATEST
        elif any_match(blacklist, *coordinates):
            disposition = Disposition.BLACKLISTED
        elif index == 0:
            disposition = Disposition.LATEST
        else:
            disposition = Disposition.SUPERSEDED

        logger.debug("%-16s %s", f"{disposition.value}:", candidate.coordinates)
        results.append(Classification(candidate=candidate, disposition=disposition))

    return results
