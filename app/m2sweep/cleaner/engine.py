"""Repository traversal engine.

Walks a local repository depth-first, post-order. Every directory is
classified once (version directory, artifact directory, or neither):

- version directories have their stale timestamped builds grouped and
  optionally deleted,
- artifact directories have their version subdirectories classified by
  the whitelist / preserve-latest / blacklist rules and the superseded
  ones optionally deleted.

Each directory returns an immutable TraversalResult which the parent
merges into its own.
"""

import logging
from collections.abc import Sequence
from pathlib import Path

from m2sweep.cleaner.builds import group_builds
from m2sweep.cleaner.classifier import VersionCandidate, classify_versions, sort_newest_first
from m2sweep.cleaner.filters import Filter
from m2sweep.cleaner.models import (
    Decision,
    DirectoryKind,
    Disposition,
    TraversalResult,
    UnitKind,
    UnitStats,
)
from m2sweep.cleaner.operator import RemovalOperator, file_size

logger = logging.getLogger(__name__)

POM_EXTENSION = ".pom"


class RepositoryError(Exception):
    """Raised when the repository root cannot be traversed."""


def directory_kind(pom_present: bool, has_version_children: bool) -> DirectoryKind:
    """Compute the structural kind of a directory.

    Args:
        pom_present: The directory directly contains a .pom file.
        has_version_children: At least one subdirectory directly contains a .pom file.

    Returns:
        Combination of DirectoryKind flags.
    """
    kind = DirectoryKind.NONE
    if pom_present:
        kind |= DirectoryKind.VERSION
    if has_version_children:
        kind |= DirectoryKind.ARTIFACT
    return kind


def version_candidate(root: Path, directory: Path) -> VersionCandidate:
    """Derive the coordinates of a version directory from its location.

    ``<root>/com/example/app/1.0`` yields group ``com.example``,
    artifact ``app`` and version ``1.0``. When the root is the artifact
    directory itself, its name is the artifact.
    """
    parts = directory.relative_to(root).parts
    version = parts[-1]
    artifact = parts[-2] if len(parts) > 1 else root.name
    group = ".".join(parts[:-2])
    return VersionCandidate(path=directory, group=group, artifact=artifact, version=version)


def _list_entries(directory: Path) -> tuple[list[Path], list[Path]]:
    """List subdirectories and files of a directory in name order.

    Symlinks are reported as files so they are never descended into.
    """
    directories: list[Path] = []
    files: list[Path] = []
    for entry in sorted(directory.iterdir()):
        if entry.is_dir() and not entry.is_symlink():
            directories.append(entry)
        else:
            files.append(entry)
    return directories, files


def _relative(root: Path, path: Path) -> str:
    try:
        return str(path.relative_to(root))
    except ValueError:
        return str(path)


class RepositoryCleaner:
    """Classifies and optionally deletes stale versions and builds.

    The cleaner is pure with respect to its constructor arguments: it
    never reads configuration and never decides whether to run.

    Args:
        delete_builds: Delete stale build units instead of only reporting them.
        delete_versions: Delete superseded version directories instead of
            only reporting them.
        whitelist: Filters of versions that are never removed.
        preserve_latest: Filters whose newest matching version is kept.
        blacklist: Filters of versions that are removed unless whitelisted
            or preserved.
        operator: Removal operator, defaults to RemovalOperator().
    """

    def __init__(
        self,
        *,
        delete_builds: bool = False,
        delete_versions: bool = False,
        whitelist: Sequence[Filter] = (),
        preserve_latest: Sequence[Filter] = (),
        blacklist: Sequence[Filter] = (),
        operator: RemovalOperator | None = None,
    ) -> None:
        self._delete_builds = delete_builds
        self._delete_versions = delete_versions
        self._whitelist = tuple(whitelist)
        self._preserve_latest = tuple(preserve_latest)
        self._blacklist = tuple(blacklist)
        self._operator = operator or RemovalOperator()

    def clean(self, root: Path) -> TraversalResult:
        """Traverse a whole repository.

        Args:
            root: Repository root directory.

        Returns:
            Aggregated TraversalResult of the repository.

        Raises:
            RepositoryError: If root is not an existing directory.
        """
        root = Path(root)
        if not root.is_dir():
            msg = f"Repository not found: {root}"
            raise RepositoryError(msg)

        logger.debug(
            "Cleaning %s (delete_builds=%s, delete_versions=%s)",
            root,
            self._delete_builds,
            self._delete_versions,
        )
        return self.traverse(root, root)

    def traverse(self, root: Path, directory: Path) -> TraversalResult:
        """Traverse a subtree of the repository.

        Args:
            root: Repository root, used to derive coordinates.
            directory: Directory to process.

        Returns:
            TraversalResult of the subtree including the directory's own
            pom_present flag.
        """
        try:
            directories, files = _list_entries(directory)
        except OSError as e:
            logger.warning("Cannot read directory: %s (%s)", directory, e)
            return TraversalResult()

        # Pass 1: children first, then the directory's own files
        children = TraversalResult()
        version_dirs: list[Path] = []
        pomless_dirs: list[Path] = []
        for subdirectory in directories:
            child = self.traverse(root, subdirectory)
            children = children.merge(child)
            if child.pom_present:
                version_dirs.append(subdirectory)
            elif not child.nested_pom:
                # Incomplete version such as a failed download; subgroups hold poms deeper
                pomless_dirs.append(subdirectory)

        result = TraversalResult(
            all_files=len(files),
            all_size=sum(file_size(f) for f in files),
            pom_present=any(f.name.endswith(POM_EXTENSION) for f in files),
        ).merge(children)

        kind = directory_kind(result.pom_present, bool(version_dirs))

        # Pass 2: stale builds of this version
        if DirectoryKind.VERSION in kind:
            result = result.merge(self._evaluate_builds(root, directory, files))

        # Pass 3: superseded versions of this artifact
        if DirectoryKind.ARTIFACT in kind:
            result = result.merge(self._evaluate_versions(root, version_dirs + pomless_dirs))

        return result

    def _evaluate_builds(self, root: Path, directory: Path, files: list[Path]) -> TraversalResult:
        """Group the stale builds of a version directory and remove them if enabled."""
        builds = group_builds(files, artifact=directory.parent.name, version=directory.name)

        potential = UnitStats()
        deleted = UnitStats()
        failed = 0
        decisions: list[Decision] = []

        for name, members in builds.items():
            removed_files = removed_size = kept_files = kept_size = 0
            for path in members:
                if self._delete_builds:
                    outcome = self._operator.remove_file(path)
                    if outcome.success:
                        removed_files += 1
                        removed_size += outcome.size
                        continue
                    failed += 1
                    size = outcome.size
                else:
                    size = file_size(path)
                kept_files += 1
                kept_size += size

            removed = self._delete_builds and kept_files == 0
            deleted += UnitStats(count=int(removed), files=removed_files, size=removed_size)
            potential += UnitStats(count=int(not removed), files=kept_files, size=kept_size)

            display = _relative(root, directory / name)
            logger.debug("%-16s %s", "Remove build:" if removed else "Removable build:", display)
            decisions.append(
                Decision(
                    path=display,
                    kind=UnitKind.BUILD,
                    disposition=Disposition.STALE_BUILD,
                    files=len(members),
                    size=removed_size + kept_size,
                    removed=removed,
                )
            )

        return TraversalResult(
            potential_builds=potential,
            deleted_builds=deleted,
            failed_removals=failed,
            decisions=tuple(decisions),
        )

    def _evaluate_versions(self, root: Path, version_dirs: list[Path]) -> TraversalResult:
        """Classify the version directories of an artifact and remove the stale ones."""
        candidates = sort_newest_first([version_candidate(root, d) for d in version_dirs])
        classifications = classify_versions(
            candidates,
            whitelist=self._whitelist,
            preserve_latest=self._preserve_latest,
            blacklist=self._blacklist,
        )

        result = TraversalResult()
        for classification in classifications:
            path = classification.candidate.path
            if not classification.remove:
                result = result.merge(
                    TraversalResult(
                        decisions=(
                            Decision(
                                path=_relative(root, path),
                                kind=UnitKind.VERSION,
                                disposition=classification.disposition,
                            ),
                        )
                    )
                )
                continue
            result = result.merge(self._remove_version(root, path, classification.disposition))

        return result

    def _remove_version(self, root: Path, directory: Path, disposition: Disposition) -> TraversalResult:
        """Remove (or account for) a version directory designated for removal.

        With deletion enabled every file below the directory is deleted
        bottom-up, emptied subdirectories are removed, and finally the
        directory itself. A single failure leaves the directory in place
        and counts it as a potential version; files that were deleted still
        count as deleted.
        """
        removed_files = removed_size = kept_files = kept_size = 0
        failed = 0

        for dirpath, dirnames, filenames in directory.walk(top_down=False):
            # Symlinks to directories are not walked into, unlink them like files
            links = [d for d in dirnames if (dirpath / d).is_symlink()]
            for name in sorted(filenames + links):
                path = dirpath / name
                if self._delete_versions:
                    outcome = self._operator.remove_file(path)
                    if outcome.success:
                        removed_files += 1
                        removed_size += outcome.size
                        continue
                    failed += 1
                    kept_size += outcome.size
                else:
                    kept_size += file_size(path)
                kept_files += 1

            if self._delete_versions and not failed and dirpath != directory:
                if not self._operator.remove_directory(dirpath).success:
                    failed += 1

        removed = False
        if self._delete_versions and not failed:
            removed = self._operator.remove_directory(directory).success
            if not removed:
                failed += 1
        if self._delete_versions and not removed:
            logger.warning("Couldn't remove version directory: %s", directory)

        display = _relative(root, directory)
        logger.debug("%-16s %s", "Remove version:" if removed else "Removable version:", display)

        return TraversalResult(
            deleted_versions=UnitStats(count=int(removed), files=removed_files, size=removed_size),
            potential_versions=UnitStats(count=int(not removed), files=kept_files, size=kept_size),
            failed_removals=failed,
            decisions=(
                Decision(
                    path=display,
                    kind=UnitKind.VERSION,
                    disposition=disposition,
                    files=removed_files + kept_files,
                    size=removed_size + kept_size,
                    removed=removed,
                ),
            ),
        )


def traverse(
    root: Path,
    current_dir: Path,
    delete_builds: bool,
    delete_versions: bool,
    whitelist: Sequence[Filter],
    preserve_latest: Sequence[Filter],
    blacklist: Sequence[Filter],
) -> TraversalResult:
    """Traverse a repository subtree with the given rules.

    Convenience wrapper around :class:`RepositoryCleaner`.
    """
    cleaner = RepositoryCleaner(
        delete_builds=delete_builds,
        delete_versions=delete_versions,
        whitelist=whitelist,
        preserve_latest=preserve_latest,
        blacklist=blacklist,
    )
    return cleaner.traverse(Path(root), Path(current_dir))
