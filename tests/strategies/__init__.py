"""Hypothesis strategies for dotl10n property-based testing.

Usage:
    from tests.strategies import json_documents, key_segments, plain_templates
"""

from .documents import (
    json_documents,
    json_scalars,
    json_values,
    key_segments,
    plain_templates,
)

__all__ = [
    "json_documents",
    "json_scalars",
    "json_values",
    "key_segments",
    "plain_templates",
]
