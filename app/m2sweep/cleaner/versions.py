"""Maven-style version ordering.

Versions are split into numeric and qualifier tokens at ``.``, ``-``,
``_`` and at every transition between digits and non-digits. Numeric
tokens compare by value, qualifier tokens by a fixed rank:

    alpha < beta < milestone < rc < snapshot < (unknown) < release < sp

Unknown qualifiers compare lexically among themselves. When one version
runs out of tokens, the missing token is taken as the neutral element of
the other side's type (0 for numbers, the release marker for
qualifiers), so ``1.0 == 1.0.0`` and ``1.0 > 1.0-alpha``.
"""

import functools
import re

Token = int | str

# Release marker: the implicit qualifier of a plain numeric version.
RELEASE = ""

_ALIASES: dict[str, str] = {
    "cr": "rc",
    "ga": RELEASE,
    "final": RELEASE,
    "release": RELEASE,
}

# Single-letter shorthands, only when directly followed by a number (e.g. "1.0-a1")
_SHORTHANDS: dict[str, str] = {
    "a": "alpha",
    "b": "beta",
    "m": "milestone",
}

_QUALIFIER_RANKS: dict[str, int] = {
    "alpha": 0,
    "beta": 1,
    "milestone": 2,
    "rc": 3,
    "snapshot": 4,
    RELEASE: 6,
    "sp": 7,
}
_UNKNOWN_RANK = 5

_TOKEN_PATTERN = re.compile(r"\d+|[^\d.\-_]+")


def tokenize(version: str) -> list[Token]:
    """Split a version string into normalized tokens.

    Args:
        version: Version string (e.g. "1.0-SNAPSHOT").

    Returns:
        Normalized list of int and str tokens.
    """
    raw: list[Token] = []
    for match in _TOKEN_PATTERN.finditer(version.lower()):
        text = match.group()
        raw.append(int(text) if text.isdigit() else text)

    tokens: list[Token] = []
    for index, token in enumerate(raw):
        if isinstance(token, str):
            followed_by_number = index + 1 < len(raw) and isinstance(raw[index + 1], int)
            if followed_by_number and token in _SHORTHANDS:
                token = _SHORTHANDS[token]
            token = _ALIASES.get(token, token)
        tokens.append(token)

    return _normalize(tokens)


def _normalize(tokens: list[Token]) -> list[Token]:
    """Drop neutral tokens so that equivalent spellings compare equal.

    Zeros directly before a qualifier or at the end, and release markers
    at the end, carry no ordering information.
    """
    result: list[Token] = []
    for token in reversed(tokens):
        next_token = result[-1] if result else None
        if token == 0 and (next_token is None or isinstance(next_token, str)):
            continue
        if token == RELEASE and next_token is None:
            continue
        result.append(token)
    result.reverse()
    return result


def _qualifier_key(qualifier: str) -> tuple[int, str]:
    rank = _QUALIFIER_RANKS.get(qualifier)
    if rank is None:
        return (_UNKNOWN_RANK, qualifier)
    return (rank, "")


def _compare_tokens(left: Token | None, right: Token | None) -> int:
    if left is None:
        left = 0 if isinstance(right, int) else RELEASE
    if right is None:
        right = 0 if isinstance(left, int) else RELEASE

    if isinstance(left, int) and isinstance(right, int):
        return (left > right) - (left < right)
    if isinstance(left, int):
        return 1
    if isinstance(right, int):
        return -1

    left_key = _qualifier_key(left)
    right_key = _qualifier_key(right)
    return (left_key > right_key) - (left_key < right_key)


def compare_tokens(left: list[Token], right: list[Token]) -> int:
    """Compare two normalized token lists (-1, 0 or 1)."""
    for index in range(max(len(left), len(right))):
        a = left[index] if index < len(left) else None
        b = right[index] if index < len(right) else None
        result = _compare_tokens(a, b)
        if result:
            return result
    return 0


def compare_versions(a: str, b: str) -> int:
    """Compare two version strings.

    Args:
        a: First version string.
        b: Second version string.

    Returns:
        -1 if a is older than b, 0 if equivalent, 1 if a is newer.
    """
    return compare_tokens(tokenize(a), tokenize(b))


@functools.total_ordering
class ComparableVersion:
    """Version string with Maven ordering semantics.

    Equivalent spellings ("1.0", "1.0.0", "1-ga") are equal and hash
    alike; the original string is kept for display.
    """

    __slots__ = ("_tokens", "value")

    def __init__(self, value: str) -> None:
        self.value = value
        self._tokens = tokenize(value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ComparableVersion):
            return NotImplemented
        return compare_tokens(self._tokens, other._tokens) == 0

    def __lt__(self, other: "ComparableVersion") -> bool:
        if not isinstance(other, ComparableVersion):
            return NotImplemented
        return compare_tokens(self._tokens, other._tokens) < 0

    def __hash__(self) -> int:
        return hash(tuple(self._tokens))

    def __repr__(self) -> str:
        return f"ComparableVersion({self.value!r})"

    def __str__(self) -> str:
        return self.value


def version_sort_key(version: str) -> ComparableVersion:
    """Sort key ordering version strings oldest first."""
    return ComparableVersion(version)
