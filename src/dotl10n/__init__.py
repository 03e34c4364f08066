"""dotl10n - dot-path localization over nested JSON translation documents.

Resolves dot-path keys ("app.menu.title") in nested translation documents,
substitutes indexed ``{{}}`` and named ``{{name}}`` placeholders, selects
singular/plural forms per language, and merges documents loaded from
several files into one.

Public API:
    Localization - Loads documents for the active language and serves lookups
    LocalizationConfig - Settings for Localization
    TranslationEngine - Lookup facade over an already-loaded document
    format_template - Placeholder substitution
    resolve - Dot-path resolution
    select_form - Singular/plural selection
    deep_merge - Permissive document merge
    strict_deep_merge - Schema-preserving in-place merge

Exceptions:
    LocalizationError - Base exception class
    DocumentLoadError - Document could not be fetched
    DocumentFormatError - Document is not a JSON object

Submodules:
    dotl10n.runtime - Pure engine components
    dotl10n.localization - Loaders, configuration, reload polling
"""

from .diagnostics import DocumentFormatError, DocumentLoadError, LocalizationError
from .enums import LoadStatus, PluralForm
from .localization import Localization, LocalizationConfig
from .runtime import (
    PluralSelector,
    TranslationEngine,
    deep_merge,
    format_template,
    resolve,
    select_form,
    strict_deep_merge,
)

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("dotl10n")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "DocumentFormatError",
    "DocumentLoadError",
    "LoadStatus",
    "Localization",
    "LocalizationConfig",
    "LocalizationError",
    "PluralForm",
    "PluralSelector",
    "TranslationEngine",
    "__version__",
    "deep_merge",
    "format_template",
    "resolve",
    "select_form",
    "strict_deep_merge",
]
