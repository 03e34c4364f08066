"""Document loading infrastructure for Localization.

Provides the protocol for translation document loaders, filesystem, HTTP
and in-memory implementations, and result/summary data structures for
tracking load attempts.

Components:
    DocumentLoader - Protocol for loading documents (structural typing)
    PathDocumentLoader - Disk-based loader with path-traversal prevention
    HttpDocumentLoader - httpx-based loader for documents served over HTTP
    MappingDocumentLoader - In-memory loader
    ResourceLoadResult - Immutable result of a single document load attempt
    LoadSummary - Immutable aggregate of the results of one load pass
    loader_for - Pick a loader for a base location

Every loader resolves documents at ``<base>/<language>/<resource_id>`` and
returns the parsed JSON object. Roots that are not objects are rejected.

Python 3.13+. Depends on httpx for the HTTP loader.
"""

from __future__ import annotations

import json
import logging
import threading
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

import httpx

from dotl10n.constants import DEFAULT_HTTP_TIMEOUT
from dotl10n.diagnostics import DocumentFormatError, DocumentLoadError
from dotl10n.enums import LoadStatus
from dotl10n.localization.types import LanguageId, ResourceId, TranslationDocument

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Protocol
    "DocumentLoader",
    # Concrete loaders
    "PathDocumentLoader",
    "HttpDocumentLoader",
    "MappingDocumentLoader",
    "loader_for",
    # Load result types
    "ResourceLoadResult",
    "LoadSummary",
]

logger = logging.getLogger(__name__)


def _parse_document(
    text: str | bytes, *, language: str, resource_id: str, source_path: str
) -> dict[str, object]:
    """Decode JSON text and require an object root."""
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        msg = f"Invalid JSON in {source_path}: {e}"
        raise DocumentFormatError(
            msg, language=language, resource_id=resource_id, source_path=source_path
        ) from e

    if not isinstance(data, dict):
        msg = f"Document root must be a JSON object, got {type(data).__name__} in {source_path}"
        raise DocumentFormatError(
            msg, language=language, resource_id=resource_id, source_path=source_path
        )
    return data


def _validate_language(language: LanguageId) -> None:
    if not language:
        msg = "Language identifier cannot be empty"
        raise ValueError(msg)
    if ".." in language:
        msg = f"Path traversal sequences not allowed in language: '{language}'"
        raise ValueError(msg)
    if "/" in language or "\\" in language:
        msg = f"Path separators not allowed in language: '{language}'"
        raise ValueError(msg)


def _validate_resource_id(resource_id: ResourceId) -> None:
    if not resource_id or resource_id.strip() != resource_id:
        msg = f"Resource ID must be non-empty without surrounding whitespace: {resource_id!r}"
        raise ValueError(msg)
    if resource_id.startswith(("/", "\\")) or Path(resource_id).is_absolute():
        msg = f"Absolute paths not allowed in resource_id: '{resource_id}'"
        raise ValueError(msg)
    if ".." in resource_id:
        msg = f"Path traversal sequences not allowed in resource_id: '{resource_id}'"
        raise ValueError(msg)


class DocumentLoader(Protocol):
    """Protocol for loading translation documents for a language.

    This is a Protocol (structural typing) rather than ABC so any object
    with matching methods can serve as a loader.

    Example:
        >>> class StaticLoader:
        ...     def load(self, language, resource_id):
        ...         return {"app": {"title": "Static"}}
        ...     def describe_path(self, language, resource_id):
        ...         return f"static/{language}/{resource_id}"
        ...     def freshness(self, language, resource_id):
        ...         return None
    """

    def load(self, language: LanguageId, resource_id: ResourceId) -> TranslationDocument:
        """Load one document.

        Args:
            language: Language identifier (e.g., 'en')
            resource_id: Document name (e.g., 'translation.json')

        Returns:
            Parsed document

        Raises:
            FileNotFoundError: If the document does not exist
            DocumentLoadError: If the document cannot be fetched
            DocumentFormatError: If the content is not a JSON object
            ValueError: If language or resource_id is unsafe
        """
        ...

    def describe_path(self, language: LanguageId, resource_id: ResourceId) -> str:
        """Return a human-readable location for diagnostics."""
        ...

    def freshness(self, language: LanguageId, resource_id: ResourceId) -> str | None:
        """Return a cheap change stamp for a document.

        Used by the reload poller to avoid refetching unchanged documents.
        Two different stamps mean the document changed; None means the
        stamp is unavailable.
        """
        ...


@dataclass(frozen=True, slots=True)
class PathDocumentLoader:
    """File system loader for ``<base_dir>/<language>/<resource_id>``.

    Security:
        Rejects languages containing separators or "..", resource IDs that
        are absolute or contain "..", and any resolved path escaping base_dir.

    Example:
        >>> loader = PathDocumentLoader("locales")
        >>> document = loader.load("en", "translation.json")
        # Loads from: locales/en/translation.json

    Attributes:
        base_dir: Directory holding one subdirectory per language
    """

    base_dir: str | Path
    _root: Path = field(init=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_root", Path(self.base_dir).resolve())

    def _path(self, language: LanguageId, resource_id: ResourceId) -> Path:
        _validate_language(language)
        _validate_resource_id(resource_id)

        full_path = (self._root / language / resource_id).resolve()
        try:
            full_path.relative_to(self._root)
        except ValueError:
            msg = (
                "Path traversal detected: resolved path escapes base directory. "
                f"language='{language}', resource_id='{resource_id}'"
            )
            raise ValueError(msg) from None
        return full_path

    def describe_path(self, language: LanguageId, resource_id: ResourceId) -> str:
        return str(Path(self.base_dir) / language / resource_id)

    def load(self, language: LanguageId, resource_id: ResourceId) -> TranslationDocument:
        path = self._path(language, resource_id)
        return _parse_document(
            path.read_text(encoding="utf-8"),
            language=language,
            resource_id=resource_id,
            source_path=self.describe_path(language, resource_id),
        )

    def freshness(self, language: LanguageId, resource_id: ResourceId) -> str | None:
        try:
            return str(self._path(language, resource_id).stat().st_mtime_ns)
        except FileNotFoundError:
            return None


class HttpDocumentLoader:
    """HTTP loader for ``<base_url>/<language>/<resource_id>``.

    Uses a synchronous httpx.Client. Freshness is the ``Last-Modified``
    header of a HEAD request, so polling does not download bodies.

    Example:
        >>> loader = HttpDocumentLoader("https://cdn.example.com/locales")
        >>> document = loader.load("fr", "translation.json")
        >>> loader.close()

    Args:
        base_url: Base URL without trailing slash requirements
        no_cache: Send ``Cache-Control: no-cache`` so edits are seen at once
        timeout: Request timeout in seconds
        client: Preconfigured client (the loader does not close it)
    """

    __slots__ = ("_base_url", "_client", "_no_cache", "_owns_client")

    def __init__(
        self,
        base_url: str,
        *,
        no_cache: bool = False,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
        client: httpx.Client | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._no_cache = no_cache
        self._owns_client = client is None
        self._client = client if client is not None else httpx.Client(
            timeout=httpx.Timeout(timeout),
            headers={
                "Content-Type": "application/json",
                "Accept": "application/json",
            },
        )

    def __repr__(self) -> str:
        return f"HttpDocumentLoader(base_url={self._base_url!r}, no_cache={self._no_cache})"

    def __enter__(self) -> HttpDocumentLoader:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        self.close()

    @property
    def base_url(self) -> str:
        return self._base_url

    def close(self) -> None:
        """Close the underlying client if this loader created it."""
        if self._owns_client:
            self._client.close()

    def describe_path(self, language: LanguageId, resource_id: ResourceId) -> str:
        return f"{self._base_url}/{language}/{resource_id}"

    def _headers(self) -> dict[str, str]:
        return {"Cache-Control": "no-cache"} if self._no_cache else {}

    def load(self, language: LanguageId, resource_id: ResourceId) -> TranslationDocument:
        _validate_language(language)
        _validate_resource_id(resource_id)
        url = self.describe_path(language, resource_id)

        try:
            response = self._client.get(url, headers=self._headers())
        except httpx.HTTPError as e:
            msg = f"Failed to load {resource_id} for language: {language} ({e})"
            raise DocumentLoadError(
                msg, language=language, resource_id=resource_id, source_path=url
            ) from e

        if response.status_code == httpx.codes.NOT_FOUND:
            msg = f"{url} returned 404"
            raise FileNotFoundError(msg)
        if not response.is_success:
            msg = f"Failed to load {resource_id} for language: {language} (HTTP {response.status_code})"
            raise DocumentLoadError(
                msg, language=language, resource_id=resource_id, source_path=url
            )

        return _parse_document(
            response.content, language=language, resource_id=resource_id, source_path=url
        )

    def freshness(self, language: LanguageId, resource_id: ResourceId) -> str | None:
        _validate_language(language)
        _validate_resource_id(resource_id)
        url = self.describe_path(language, resource_id)

        try:
            response = self._client.head(url, headers={"Cache-Control": "no-cache"})
        except httpx.HTTPError as e:
            msg = f"Freshness check failed for {url}: {e}"
            raise DocumentLoadError(
                msg, language=language, resource_id=resource_id, source_path=url
            ) from e

        if not response.is_success:
            return None
        return response.headers.get("Last-Modified")


class MappingDocumentLoader:
    """In-memory loader over ``{language: {resource_id: document}}``.

    update() replaces a document and bumps its freshness stamp, which makes
    this loader a convenient stand-in for live-edited files.

    Example:
        >>> loader = MappingDocumentLoader({"en": {"translation.json": {"hi": "Hi"}}})
        >>> loader.load("en", "translation.json")
        {'hi': 'Hi'}
    """

    __slots__ = ("_documents", "_lock", "_versions")

    def __init__(
        self, documents: Mapping[LanguageId, Mapping[ResourceId, TranslationDocument]] | None = None
    ) -> None:
        self._lock = threading.Lock()
        self._documents: dict[tuple[str, str], TranslationDocument] = {}
        self._versions: dict[tuple[str, str], int] = {}
        for language, resources in (documents or {}).items():
            for resource_id, document in resources.items():
                self._documents[(language, resource_id)] = document
                self._versions[(language, resource_id)] = 1

    def __repr__(self) -> str:
        return f"MappingDocumentLoader(documents={len(self._documents)})"

    def update(
        self, language: LanguageId, resource_id: ResourceId, document: TranslationDocument
    ) -> None:
        """Add or replace a document and bump its freshness stamp."""
        key = (language, resource_id)
        with self._lock:
            self._documents[key] = document
            self._versions[key] = self._versions.get(key, 0) + 1

    def describe_path(self, language: LanguageId, resource_id: ResourceId) -> str:
        return f"memory://{language}/{resource_id}"

    def load(self, language: LanguageId, resource_id: ResourceId) -> TranslationDocument:
        with self._lock:
            document = self._documents.get((language, resource_id))
        if document is None:
            msg = f"No document {resource_id} for language: {language}"
            raise FileNotFoundError(msg)
        if not isinstance(document, Mapping):
            msg = f"Document root must be a mapping, got {type(document).__name__}"
            raise DocumentFormatError(
                msg,
                language=language,
                resource_id=resource_id,
                source_path=self.describe_path(language, resource_id),
            )
        return document

    def freshness(self, language: LanguageId, resource_id: ResourceId) -> str | None:
        with self._lock:
            version = self._versions.get((language, resource_id))
        return None if version is None else str(version)


def loader_for(base_location: str, *, no_cache: bool = False) -> DocumentLoader:
    """Choose a loader for a base location.

    Args:
        base_location: http(s) base URL or filesystem directory
        no_cache: Forwarded to HttpDocumentLoader

    Returns:
        HttpDocumentLoader for http:// and https:// locations,
        PathDocumentLoader otherwise
    """
    if base_location.startswith(("http://", "https://")):
        return HttpDocumentLoader(base_location, no_cache=no_cache)
    return PathDocumentLoader(base_location)


@dataclass(frozen=True, slots=True)
class ResourceLoadResult:
    """Result of loading a single document.

    Attributes:
        language: Language the document was requested for
        resource_id: Document name (e.g., 'translation.json')
        status: Load status (success, not_found, error, skipped)
        error: Exception if status is NOT_FOUND or ERROR, None otherwise
        source_path: Human-readable location of the document
    """

    language: LanguageId
    resource_id: ResourceId
    status: LoadStatus
    error: Exception | None = None
    source_path: str | None = None

    @property
    def is_success(self) -> bool:
        """Check if document loaded successfully."""
        return self.status == LoadStatus.SUCCESS

    @property
    def is_not_found(self) -> bool:
        """Check if document was not found."""
        return self.status == LoadStatus.NOT_FOUND

    @property
    def is_error(self) -> bool:
        """Check if document load failed with an error."""
        return self.status == LoadStatus.ERROR

    @property
    def is_skipped(self) -> bool:
        """Check if the language was not managed."""
        return self.status == LoadStatus.SKIPPED


@dataclass(frozen=True, slots=True)
class LoadSummary:
    """Immutable aggregate of the results of one load pass.

    Example:
        >>> summary = l10n.load()
        >>> if not summary.all_successful:
        ...     for result in summary.get_errors():
        ...         print(f"Failed: {result.source_path}: {result.error}")

    Attributes:
        language: Language the pass loaded
        results: Individual load results (immutable tuple)
    """

    language: LanguageId
    results: tuple[ResourceLoadResult, ...] = ()

    def __repr__(self) -> str:
        return (
            f"LoadSummary(language={self.language!r}, "
            f"total={self.total_attempted}, "
            f"ok={self.successful}, "
            f"not_found={self.not_found}, "
            f"errors={self.errors}, "
            f"skipped={self.skipped})"
        )

    @property
    def total_attempted(self) -> int:
        """Total number of load attempts."""
        return len(self.results)

    @property
    def successful(self) -> int:
        """Number of successful loads."""
        return sum(1 for r in self.results if r.is_success)

    @property
    def not_found(self) -> int:
        """Number of documents not found."""
        return sum(1 for r in self.results if r.is_not_found)

    @property
    def errors(self) -> int:
        """Number of load errors."""
        return sum(1 for r in self.results if r.is_error)

    @property
    def skipped(self) -> int:
        """Number of skipped loads."""
        return sum(1 for r in self.results if r.is_skipped)

    def get_errors(self) -> tuple[ResourceLoadResult, ...]:
        """Get all results with errors."""
        return tuple(r for r in self.results if r.is_error)

    def get_not_found(self) -> tuple[ResourceLoadResult, ...]:
        """Get all results where the document was not found."""
        return tuple(r for r in self.results if r.is_not_found)

    def get_successful(self) -> tuple[ResourceLoadResult, ...]:
        """Get all successful load results."""
        return tuple(r for r in self.results if r.is_success)

    @property
    def all_successful(self) -> bool:
        """True when every attempted document loaded and nothing was skipped.

        A pass with no attempts is not successful.
        """
        return bool(self.results) and self.successful == self.total_attempted
