"""Deep merging of translation documents.

Two variants:
- deep_merge: permissive; builds a new document, later inputs win, new keys added
- strict_deep_merge: schema-preserving; mutates the target, only existing keys updated

Both treat a "document" as a mapping. Sequences and primitives are leaves:
they replace the existing value wholesale and are never merged element-wise.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from typing import TypeIs

__all__ = ["deep_merge", "is_document", "strict_deep_merge"]


def is_document(value: object) -> TypeIs[Mapping[str, object]]:
    """Check whether a value is a mergeable document (a mapping)."""
    return isinstance(value, Mapping)


def deep_merge(*documents: object) -> dict[str, object]:
    """Merge documents into a new document.

    Later documents win on conflict at every nesting level. When both the
    accumulated value and the incoming value at a key are documents, they
    are merged recursively; otherwise the incoming value replaces the
    accumulated one. Inputs that are not documents (None, lists, scalars)
    are skipped.

    No input is mutated, and nested mappings in the result are fresh dicts,
    so mutating the result never reaches back into an input.

    Args:
        *documents: Documents to merge, in increasing priority

    Returns:
        New merged document

    Example:
        >>> a = {"app": {"title": "App"}, "items": [1, 2]}
        >>> b = {"app": {"version": "1.0"}, "items": [3]}
        >>> deep_merge(a, b)
        {'app': {'title': 'App', 'version': '1.0'}, 'items': [3]}
    """
    result: dict[str, object] = {}

    for document in documents:
        if not is_document(document):
            continue

        for key, incoming in document.items():
            if is_document(incoming):
                current = result.get(key)
                result[key] = deep_merge(current if is_document(current) else {}, incoming)
            else:
                result[key] = incoming

    return result


def strict_deep_merge[T: MutableMapping[str, object]](target: T, *sources: object) -> T:
    """Update existing keys of a target document from sources, in place.

    Only keys already present in ``target`` are updated, at every depth;
    keys found only in a source are ignored. This keeps the target's key
    shape a fixed schema that sources may update but never extend. When both
    values at a key are documents, the nested target is updated recursively;
    otherwise the source value overwrites the target value. A nested
    document that cannot be mutated (such as a ``MappingProxyType``) is
    replaced by an updated dict copy holding the same keys.

    An empty target is returned unchanged without inspecting sources.
    Sources that are not documents are skipped.

    Args:
        target: Document to update (mutated)
        *sources: Documents to read updates from, in increasing priority

    Returns:
        The same ``target`` object

    Example:
        >>> target = {"a": 1, "b": 2}
        >>> strict_deep_merge(target, {"b": 3, "c": 4}) is target
        True
        >>> target
        {'a': 1, 'b': 3}
    """
    if not target:
        return target

    for source in sources:
        if not is_document(source):
            continue

        for key in list(target):
            if key not in source:
                continue

            current = target[key]
            incoming = source[key]
            if isinstance(current, MutableMapping) and is_document(incoming):
                strict_deep_merge(current, incoming)
            elif is_document(current) and is_document(incoming):
                # Read-only nested mapping: rebuild it with the same keys
                target[key] = strict_deep_merge(dict(current), incoming)
            else:
                target[key] = incoming

    return target
