"""Dot-path key resolution over nested translation documents.

Walks a key path such as ``"app.menu.title"`` through nested mappings and
reports one of three outcomes:

- Found: the terminal value (any type, not only strings)
- NotFound: some segment is missing, or a non-mapping was reached
- MalformedKey: the first segment is empty after trimming

Only the first segment is trimmed of surrounding whitespace. Later segments
are matched exactly, so ``" app.title"`` resolves but ``"app. title"`` does
not. This mirrors long-standing observed behavior and is kept for
compatibility.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

__all__ = ["Found", "MalformedKey", "NotFound", "Resolution", "resolve"]


@dataclass(frozen=True, slots=True)
class Found:
    """Key path resolved to a value.

    Attributes:
        value: Terminal value located at the key path
    """

    value: object


@dataclass(frozen=True, slots=True)
class NotFound:
    """Key path does not address a value.

    Attributes:
        key_path: Original key path, used as the display fallback
        segment: Segment that could not be matched
        depth: Index of that segment (0 for the top level)
    """

    key_path: str
    segment: str
    depth: int


@dataclass(frozen=True, slots=True)
class MalformedKey:
    """Key path whose first segment is empty after trimming.

    Attributes:
        key_path: Original key path (or its repr for non-string input)
    """

    key_path: str


type Resolution = Found | NotFound | MalformedKey


def resolve(document: Mapping[str, object] | None, key_path: str) -> Resolution:
    """Resolve a dot-separated key path against a document.

    Args:
        document: Translation document, or None when nothing is loaded
        key_path: Dot-separated path (e.g., "app.title")

    Returns:
        Found, NotFound or MalformedKey. Never raises.

    Examples:
        >>> doc = {"app": {"title": "My App"}}
        >>> resolve(doc, "app.title")
        Found(value='My App')
        >>> resolve(doc, "app.missing")
        NotFound(key_path='app.missing', segment='missing', depth=1)
        >>> resolve(doc, " .x")
        MalformedKey(key_path=' .x')
    """
    if not isinstance(key_path, str):
        return MalformedKey(repr(key_path))

    segments = key_path.split(".")
    first = segments[0].strip()
    if not first:
        return MalformedKey(key_path)

    if not isinstance(document, Mapping) or first not in document:
        return NotFound(key_path, first, 0)

    value = document[first]
    for depth, segment in enumerate(segments[1:], start=1):
        if not isinstance(value, Mapping) or segment not in value:
            return NotFound(key_path, segment, depth)
        value = value[segment]

    return Found(value)
