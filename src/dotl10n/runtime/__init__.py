"""Pure lookup engine: resolution, formatting, plural selection, merging.

Submodules:
    formatter    - format_template, stringify
    resolver     - resolve, Found, NotFound, MalformedKey
    plural_rules - PluralSelector, select_form
    merge        - deep_merge, strict_deep_merge
    engine       - TranslationEngine (state holder and lookup facade)
    rwlock       - RWLock guarding engine state

Python 3.13+.
"""

from .engine import EngineState, TranslationEngine
from .formatter import format_template, stringify
from .merge import deep_merge, is_document, strict_deep_merge
from .plural_rules import DEFAULT_PLURAL_SELECTOR, PluralSelector, select_form
from .resolver import Found, MalformedKey, NotFound, Resolution, resolve

__all__ = [
    "DEFAULT_PLURAL_SELECTOR",
    "EngineState",
    "Found",
    "MalformedKey",
    "NotFound",
    "PluralSelector",
    "Resolution",
    "TranslationEngine",
    "deep_merge",
    "format_template",
    "is_document",
    "resolve",
    "select_form",
    "strict_deep_merge",
    "stringify",
]
