"""Wildcard filters over artifact coordinates.

A filter entry follows the grammar ``[[<group>:]<artifact>:]<version>``
where every segment may contain the wildcards ``?`` (exactly one
character) and ``*`` (any run of characters). All other characters,
including ``.``, are matched literally against the whole target string.
"""

import re
from collections.abc import Iterable
from dataclasses import dataclass

_SEPARATOR = ":"
_MAX_SEGMENTS = 3


class FilterSyntaxError(ValueError):
    """Raised when a filter entry does not follow the filter grammar."""


@dataclass(frozen=True, slots=True)
class Filter:
    """Compiled coordinate filter.

    Attributes:
        source: The entry string the filter was compiled from.
        version: Pattern for the version segment (always present).
        artifact: Pattern for the artifact segment, None if not given.
        group: Pattern for the group segment, None if not given.
    """

    source: str
    version: re.Pattern[str]
    artifact: re.Pattern[str] | None = None
    group: re.Pattern[str] | None = None

    def matches(self, group: str, artifact: str, version: str) -> bool:
        """Check whether the coordinates are matched by this filter.

        Segments missing from the filter match any value.

        Args:
            group: Dotted group identifier (e.g. "com.example").
            artifact: Artifact identifier.
            version: Version string.

        Returns:
            True if every present pattern matches its coordinate.
        """
        if self.version.fullmatch(version) is None:
            return False
        if self.artifact is not None and self.artifact.fullmatch(artifact) is None:
            return False
        return self.group is None or self.group.fullmatch(group) is not None

    def __str__(self) -> str:
        return self.source


def wildcard_to_regex(segment: str) -> str:
    """Translate a wildcard segment into an unanchored regular expression."""
    parts: list[str] = []
    for char in segment:
        if char == "*":
            parts.append(".*")
        elif char == "?":
            parts.append(".")
        else:
            parts.append(re.escape(char))
    return "".join(parts)


def compile_filter(pattern: str) -> Filter:
    """Compile a filter entry.

    Args:
        pattern: Entry of the form ``[[group:]artifact:]version``.

    Returns:
        Compiled Filter.

    Raises:
        FilterSyntaxError: If the entry is empty or has more than three segments.
    """
    entry = pattern.strip()
    if not entry:
        msg = "Filter syntax [[<group>:]<artifact>:]<version> not matched by an empty entry"
        raise FilterSyntaxError(msg)

    segments = entry.split(_SEPARATOR)
    if len(segments) > _MAX_SEGMENTS:
        msg = f'Filter syntax [[<group>:]<artifact>:]<version> not matched by "{pattern}"'
        raise FilterSyntaxError(msg)

    compiled = [re.compile(wildcard_to_regex(s), re.DOTALL) for s in segments]

    if len(compiled) == 1:
        return Filter(source=entry, version=compiled[0])
    if len(compiled) == 2:
        return Filter(source=entry, artifact=compiled[0], version=compiled[1])
    return Filter(source=entry, group=compiled[0], artifact=compiled[1], version=compiled[2])


def compile_filters(patterns: Iterable[str] | None) -> tuple[Filter, ...]:
    """Compile a list of filter entries, failing on the first malformed one."""
    if not patterns:
        return ()
    return tuple(compile_filter(p) for p in patterns)


def matches(filter_: Filter, group: str, artifact: str, version: str) -> bool:
    """Functional form of :meth:`Filter.matches`."""
    return filter_.matches(group, artifact, version)


def any_match(filters: Iterable[Filter], group: str, artifact: str, version: str) -> bool:
    """Check whether any filter matches the coordinates."""
    return any(f.matches(group, artifact, version) for f in filters)
