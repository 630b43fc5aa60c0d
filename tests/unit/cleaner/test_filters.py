"""Tests for coordinate filter compilation and matching."""

import pytest
from m2sweep.cleaner.filters import (
    FilterSyntaxError,
    any_match,
    compile_filter,
    compile_filters,
    matches,
    wildcard_to_regex,
)


class TestCompileFilter:
    """Tests for compile_filter segment handling."""

    def test_version_only(self) -> None:
        """A single segment yields a version-only filter."""
        f = compile_filter("1.0")
        assert f.version is not None
        assert f.artifact is None
        assert f.group is None

    def test_artifact_and_version(self) -> None:
        """Two segments yield artifact and version patterns."""
        f = compile_filter("app:1.0")
        assert f.artifact is not None
        assert f.group is None
        assert f.matches("any.group", "app", "1.0") is True
        assert f.matches("any.group", "other", "1.0") is False

    def test_group_artifact_and_version(self) -> None:
        """Three segments yield group, artifact and version patterns."""
        f = compile_filter("com.example:app:1.0")
        assert f.group is not None
        assert f.matches("com.example", "app", "1.0") is True
        assert f.matches("org.example", "app", "1.0") is False

    def test_too_many_segments_rejected(self) -> None:
        """More than three segments is a syntax error."""
        with pytest.raises(FilterSyntaxError, match="not matched by"):
            compile_filter("a:b:c:d")

    def test_empty_entry_rejected(self) -> None:
        """An empty entry is a syntax error."""
        with pytest.raises(FilterSyntaxError):
            compile_filter("  ")

    def test_syntax_error_is_value_error(self) -> None:
        """FilterSyntaxError can be handled as ValueError."""
        with pytest.raises(ValueError):
            compile_filter("a:b:c:d")

    def test_source_preserved(self) -> None:
        """The entry string is kept for display."""
        assert str(compile_filter("com.example:*:1.*")) == "com.example:*:1.*"


class TestWildcards:
    """Tests for wildcard translation."""

    def test_star_matches_any_run(self) -> None:
        f = compile_filter("com.example:*:1.*")
        assert f.matches("com.example", "anything", "1.0") is True
        assert f.matches("com.example", "anything", "1.") is True
        assert f.matches("com.example", "anything", "2.0") is False

    def test_question_mark_matches_single_char(self) -> None:
        f = compile_filter("1.?")
        assert f.matches("g", "a", "1.5") is True
        assert f.matches("g", "a", "1.10") is False
        assert f.matches("g", "a", "1.") is False

    def test_dot_is_literal(self) -> None:
        """A dot does not match arbitrary characters."""
        f = compile_filter("1.0")
        assert f.matches("g", "a", "1.0") is True
        assert f.matches("g", "a", "1x0") is False

    def test_full_string_match(self) -> None:
        """Patterns must match the whole coordinate, not a substring."""
        f = compile_filter("1.0")
        assert f.matches("g", "a", "1.0.1") is False
        assert f.matches("g", "a", "11.0") is False

    def test_regex_metacharacters_literal(self) -> None:
        """Regex metacharacters other than the wildcards are literal."""
        f = compile_filter("1.0+[beta]")
        assert f.matches("g", "a", "1.0+[beta]") is True
        assert f.matches("g", "a", "1.00b") is False

    def test_snapshot_suffix(self) -> None:
        f = compile_filter("*-SNAPSHOT")
        assert f.matches("g", "a", "2.1-SNAPSHOT") is True
        assert f.matches("g", "a", "2.1") is False

    def test_group_wildcard_spans_subgroups(self) -> None:
        f = compile_filter("com.example.*:*:1.*")
        assert f.matches("com.example.sub", "app", "1.2") is True
        assert f.matches("com.example", "app", "1.2") is False

    def test_wildcard_to_regex(self) -> None:
        assert wildcard_to_regex("a.b*?") == r"a\.b.*."


class TestMatchingHelpers:
    """Tests for the functional helpers."""

    def test_version_only_filter_agnostic_to_group_and_artifact(self) -> None:
        f = compile_filter("1.*")
        assert matches(f, "", "", "1.3") is True
        assert matches(f, "org.other", "lib", "1.3") is True

    def test_compile_filters_empty(self) -> None:
        assert compile_filters(None) == ()
        assert compile_filters([]) == ()

    def test_compile_filters_fails_fast(self) -> None:
        with pytest.raises(FilterSyntaxError):
            compile_filters(["1.0", "a:b:c:d:e"])

    def test_any_match(self) -> None:
        filters = compile_filters(["2.*", "app:1.0"])
        assert any_match(filters, "g", "app", "1.0") is True
        assert any_match(filters, "g", "lib", "2.3") is True
        assert any_match(filters, "g", "lib", "1.0") is False
        assert any_match((), "g", "lib", "1.0") is False
