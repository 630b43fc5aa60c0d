"""Clustering of timestamped builds inside a version directory.

Snapshot version directories accumulate one set of files per deployed
build (``app-1.0-20230101.120000-1.jar``, ``.pom``, ``.jar.sha1``, ...)
next to the canonical ``app-1.0-SNAPSHOT.*`` files. Files of one build
share a name prefix, so clusters are formed by prefix relationship of
the file names stripped of their last extension.
"""

from collections.abc import Iterable
from pathlib import Path


def build_name(filename: str) -> str:
    """Strip the last ``.``-delimited extension from a file name."""
    index = filename.rfind(".")
    return filename if index < 0 else filename[:index]


def is_build_candidate(filename: str, artifact: str, version: str) -> bool:
    """Check whether a file belongs to a build other than the canonical one.

    Args:
        filename: File name inside the version directory.
        artifact: Artifact identifier (name of the parent directory).
        version: Version identifier (name of the version directory).

    Returns:
        True if the file starts with the artifact name but not with
        ``<artifact>-<version>``.
    """
    return filename.startswith(artifact) and not filename.startswith(f"{artifact}-{version}")


def group_builds(files: Iterable[Path], artifact: str, version: str) -> dict[str, list[Path]]:
    """Partition the build files of a version directory into build units.

    Files are visited in lexicographic name order. A file joins the first
    existing cluster (in first-seen order) whose representative name is a
    prefix of its build name or vice versa; the representative then
    becomes the shorter of both names and keeps its position. Otherwise
    the file opens a new cluster.

    Args:
        files: Regular files directly inside the version directory.
        artifact: Artifact identifier.
        version: Version identifier.

    Returns:
        Ordered mapping of representative build name to member files.
    """
    builds: dict[str, list[Path]] = {}

    for path in sorted(files, key=lambda p: p.name):
        if not is_build_candidate(path.name, artifact, version):
            continue

        candidate = build_name(path.name)
        found: str | None = None
        for representative in builds:
            if candidate.startswith(representative) or representative.startswith(candidate):
                found = representative
                break

        if found is None:
            builds[candidate] = [path]
            continue

        builds[found].append(path)
        if len(candidate) < len(found) and candidate not in builds:
            # Rename in place so the cluster keeps its first-seen position
            builds = {(candidate if key == found else key): members for key, members in builds.items()}

    return builds
