"""Strategies for JSON-like translation documents and templates.

Events emitted (HypoFuzz-friendly):
- doc_depth=flat|nested
"""

from __future__ import annotations

import string
from typing import TYPE_CHECKING

from hypothesis import event
from hypothesis import strategies as st

if TYPE_CHECKING:
    from hypothesis.strategies import DrawFn, SearchStrategy

# Segment alphabet excludes "." so generated keys are single path segments.
_SEGMENT_CHARS = string.ascii_letters + string.digits + "_-"

key_segments: SearchStrategy[str] = st.text(alphabet=_SEGMENT_CHARS, min_size=1, max_size=8)

json_scalars: SearchStrategy[object] = st.one_of(
    st.none(),
    st.booleans(),
    st.integers(min_value=-10_000, max_value=10_000),
    st.floats(allow_nan=False, allow_infinity=False, width=32),
    st.text(max_size=20),
)

json_values: SearchStrategy[object] = st.recursive(
    json_scalars,
    lambda children: st.one_of(
        st.lists(children, max_size=4),
        st.dictionaries(key_segments, children, max_size=4),
    ),
    max_leaves=20,
)


@st.composite
def json_documents(draw: DrawFn, max_size: int = 5) -> dict[str, object]:
    """Generate a translation document (JSON object root)."""
    document = draw(st.dictionaries(key_segments, json_values, max_size=max_size))
    nested = any(isinstance(v, dict) for v in document.values())
    event(f"doc_depth={'nested' if nested else 'flat'}")
    return document


# Text that can never contain a "{{...}}" token: no "{" at all.
plain_templates: SearchStrategy[str] = st.text(
    alphabet=st.characters(exclude_characters="{"), max_size=50
)
