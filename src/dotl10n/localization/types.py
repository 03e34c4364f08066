"""Type aliases for the localization domain.

Provides semantic type aliases used throughout the runtime and localization
packages and by user code when annotating call sites.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Mapping

__all__ = [
    "KeyPath",
    "LanguageId",
    "ResourceId",
    "TranslationDocument",
]

type TranslationDocument = Mapping[str, object]
"""Nested key-value tree holding all values for one language."""

type KeyPath = str
"""Dot-separated path into a translation document (e.g., 'app.title')."""

type LanguageId = str
"""Opaque language identifier (e.g., 'en', 'fr', 'pt-BR')."""

type ResourceId = str
"""Document file identifier (e.g., 'translation.json', 'errors.json')."""
