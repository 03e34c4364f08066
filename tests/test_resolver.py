"""Tests for runtime/resolver.py - dot-path resolution outcomes."""

from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st

from dotl10n.runtime.resolver import Found, MalformedKey, NotFound, resolve
from tests.strategies import json_values, key_segments

DOC = {
    "app": {"title": "My App", "menu": {"open": "Open"}, "count": 3},
    "items": ["a", "b"],
    "flag": False,
}


class TestFound:
    """Paths that address a value."""

    def test_top_level(self) -> None:
        assert resolve({"title": "T"}, "title") == Found("T")

    def test_nested(self) -> None:
        assert resolve(DOC, "app.menu.open") == Found("Open")

    def test_non_string_terminal(self) -> None:
        assert resolve(DOC, "app.count") == Found(3)
        assert resolve(DOC, "items") == Found(["a", "b"])
        assert resolve(DOC, "flag") == Found(False)

    def test_mapping_terminal(self) -> None:
        assert resolve(DOC, "app.menu") == Found({"open": "Open"})

    def test_first_segment_trimmed(self) -> None:
        assert resolve(DOC, "  app.title") == Found("My App")

    @given(path=st.lists(key_segments, min_size=1, max_size=5), value=json_values)
    def test_built_path_resolves(self, path: list[str], value: object) -> None:
        """Property: a value nested along a path is found at that path."""
        document: object = value
        for segment in reversed(path):
            document = {segment: document}
        assert resolve(document, ".".join(path)) == Found(value)  # type: ignore[arg-type]


class TestNotFound:
    """Paths that do not address a value."""

    def test_missing_top_level(self) -> None:
        assert resolve(DOC, "missing") == NotFound("missing", "missing", 0)

    def test_missing_nested(self) -> None:
        assert resolve(DOC, "app.missing") == NotFound("app.missing", "missing", 1)

    def test_descent_through_string(self) -> None:
        assert resolve(DOC, "app.title.x") == NotFound("app.title.x", "x", 2)

    def test_descent_through_list(self) -> None:
        assert resolve(DOC, "items.0") == NotFound("items.0", "0", 1)

    def test_later_segments_not_trimmed(self) -> None:
        assert resolve(DOC, "app. title") == NotFound("app. title", " title", 1)

    def test_trailing_dot(self) -> None:
        assert resolve(DOC, "app.") == NotFound("app.", "", 1)

    def test_no_document(self) -> None:
        assert resolve(None, "app.title") == NotFound("app.title", "app", 0)

    def test_empty_document(self) -> None:
        assert isinstance(resolve({}, "app"), NotFound)


class TestMalformedKey:
    """Paths whose first segment is empty."""

    def test_empty(self) -> None:
        assert resolve(DOC, "") == MalformedKey("")

    def test_whitespace(self) -> None:
        assert resolve(DOC, "   ") == MalformedKey("   ")

    def test_leading_dot(self) -> None:
        assert resolve(DOC, ".app") == MalformedKey(".app")

    def test_blank_first_segment(self) -> None:
        assert resolve(DOC, " .x") == MalformedKey(" .x")

    def test_non_string_key(self) -> None:
        assert resolve(DOC, 42) == MalformedKey("42")  # type: ignore[arg-type]

    def test_malformed_even_without_document(self) -> None:
        assert resolve(None, "") == MalformedKey("")
