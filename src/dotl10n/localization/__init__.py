"""Document loading and orchestration around the translation engine.

Submodules:
    types        - PEP 695 type aliases (TranslationDocument, KeyPath, LanguageId, ResourceId)
    config       - LocalizationConfig
    loading      - DocumentLoader protocol, Path/Http/Mapping loaders,
                   ResourceLoadResult, LoadSummary
    polling      - ReloadPoller
    orchestrator - Localization

Python 3.13+.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

from dotl10n.enums import LoadStatus
from dotl10n.localization.config import LocalizationConfig
from dotl10n.localization.loading import (
    DocumentLoader,
    HttpDocumentLoader,
    LoadSummary,
    MappingDocumentLoader,
    PathDocumentLoader,
    ResourceLoadResult,
    loader_for,
)
from dotl10n.localization.orchestrator import Localization
from dotl10n.localization.polling import ReloadPoller
from dotl10n.localization.types import KeyPath, LanguageId, ResourceId, TranslationDocument

__all__ = [
    # Main orchestrator
    "Localization",
    "LocalizationConfig",
    # Loader protocol and implementations
    "DocumentLoader",
    "PathDocumentLoader",
    "HttpDocumentLoader",
    "MappingDocumentLoader",
    "loader_for",
    # Load tracking
    "LoadStatus",
    "LoadSummary",
    "ResourceLoadResult",
    # Reload polling
    "ReloadPoller",
    # Type aliases for user code type annotations
    "KeyPath",
    "LanguageId",
    "ResourceId",
    "TranslationDocument",
]
