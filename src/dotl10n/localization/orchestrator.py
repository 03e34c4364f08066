"""Load orchestration around the translation engine.

Localization is the I/O shell: for the active language it fetches every
configured resource document, merges them, and republishes the result to a
TranslationEngine. It also owns the opt-in reload poller.

Key decisions:
- Eager initial load: the initial language is loaded at construction
  unless autoload=False
- Protocol-based DocumentLoader (dependency inversion)
- All-or-nothing loads: if any resource document fails, the engine gets an
  empty document rather than a partial merge
- Unmanaged languages are never fetched; the last document stays active
- Loads never raise for I/O problems; outcomes are reported in LoadSummary

Python 3.13+.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from concurrent.futures import ThreadPoolExecutor

from dotl10n.diagnostics import LocalizationError
from dotl10n.enums import LoadStatus
from dotl10n.localization.config import LocalizationConfig
from dotl10n.localization.loading import (
    DocumentLoader,
    LoadSummary,
    ResourceLoadResult,
    loader_for,
)
from dotl10n.localization.polling import ReloadPoller
from dotl10n.localization.types import LanguageId, ResourceId, TranslationDocument
from dotl10n.runtime.engine import TranslationEngine
from dotl10n.runtime.merge import deep_merge, strict_deep_merge
from dotl10n.runtime.plural_rules import PluralSelector

__all__ = ["Localization"]

logger = logging.getLogger(__name__)

# Upper bound on concurrent fetches of one language's resource documents.
_MAX_FETCH_WORKERS = 8


class Localization:
    """Loads, merges and serves translation documents for one active language.

    Example - Directory of JSON documents:
        >>> config = LocalizationConfig(language="en", base_location="locales")
        >>> l10n = Localization(config)
        >>> l10n.ln("greetings.hello", "John")
        'Hello John!'
        >>> l10n.set_language("fr")
        >>> l10n.ln_plural("messages.notification", 0)
        'Vous avez 0 nouveau message'

    Example - Live reloading:
        >>> config = LocalizationConfig(base_location="locales", enable_reload=True)
        >>> with Localization(config) as l10n:
        ...     ...  # documents are re-fetched when they change on disk

    Thread Safety:
        Lookups are lock-free snapshots of engine state. Loads may run
        concurrently (e.g. the poller and set_language); the engine's load
        tickets ensure the most recently started load is the one that sticks.
    """

    __slots__ = (
        "_config",
        "_engine",
        "_last_summary",
        "_loader",
        "_lock",
        "_owns_loader",
        "_poller",
        "_stamps",
    )

    def __init__(
        self,
        config: LocalizationConfig | None = None,
        loader: DocumentLoader | None = None,
        *,
        selector: PluralSelector | None = None,
        autoload: bool = True,
    ) -> None:
        """Initialize localization.

        Args:
            config: Settings; defaults to LocalizationConfig()
            loader: Document loader; chosen from config.base_location if None
            selector: Plural rule table for the engine
            autoload: Load the initial language before returning
        """
        self._config = config if config is not None else LocalizationConfig()
        self._owns_loader = loader is None
        self._loader: DocumentLoader = (
            loader
            if loader is not None
            else loader_for(self._config.base_location, no_cache=self._config.enable_reload)
        )
        # Nothing loaded yet counts as loading: lookups render "" until the first load.
        self._engine = TranslationEngine(self._config.language, loading=True, selector=selector)
        self._lock = threading.Lock()
        self._stamps: dict[tuple[LanguageId, ResourceId], str] = {}
        self._last_summary = LoadSummary(self._config.language)
        self._poller: ReloadPoller | None = None

        if autoload:
            self.load()

    def __repr__(self) -> str:
        return (
            f"Localization(language={self.language!r}, loading={self.loading}, "
            f"loader={self._loader!r})"
        )

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def config(self) -> LocalizationConfig:
        return self._config

    @property
    def engine(self) -> TranslationEngine:
        return self._engine

    @property
    def loader(self) -> DocumentLoader:
        return self._loader

    @property
    def language(self) -> LanguageId:
        """Active language identifier."""
        return self._engine.language

    @property
    def loading(self) -> bool:
        """True while a load is in flight."""
        return self._engine.loading

    @property
    def resource(self) -> TranslationDocument | None:
        """Merged document for the active language (None before any load)."""
        return self._engine.document

    @property
    def managed_languages(self) -> tuple[LanguageId, ...]:
        return tuple(self._config.managed_languages)

    @property
    def is_polling(self) -> bool:
        poller = self._poller
        return poller is not None and poller.is_running

    def get_load_summary(self) -> LoadSummary:
        """Get the summary of the most recent load pass."""
        with self._lock:
            return self._last_summary

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def lookup(self, key_path: str, *args: object) -> object:
        """Resolve and format a key path. See TranslationEngine.lookup."""
        return self._engine.lookup(key_path, *args)

    def lookup_plural(self, key_path: str, count: object, *args: object) -> object:
        """Resolve a plural entry. See TranslationEngine.lookup_plural."""
        return self._engine.lookup_plural(key_path, count, *args)

    ln = lookup
    ln_plural = lookup_plural

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self) -> LoadSummary:
        """Fetch, merge and publish the documents of the active language.

        Returns:
            Summary of this load pass
        """
        return self._load(self.language)

    def set_language(self, language: LanguageId) -> LoadSummary:
        """Switch the active language and load its documents.

        Setting the language that is already active and loaded does nothing.

        Args:
            language: Language identifier

        Returns:
            Summary of the load pass (the previous one if nothing was done)
        """
        state = self._engine.state
        if language == state.language and state.document is not None:
            return self.get_load_summary()
        logger.info("Switching language: %s -> %s", state.language, language)
        return self._load(language)

    def _record(self, summary: LoadSummary) -> LoadSummary:
        with self._lock:
            self._last_summary = summary
        return summary

    def _load(self, language: LanguageId) -> LoadSummary:
        return self._run_load(language, self._engine.begin_load(language))

    def _run_load(self, language: LanguageId, ticket: int) -> LoadSummary:
        if not self._config.is_managed(language):
            logger.warning(
                "Language '%s' is not in managed languages %s. Skipping translation load.",
                language,
                self.managed_languages,
            )
            self._engine.on_load_skipped(ticket)
            return self._record(
                LoadSummary(
                    language,
                    tuple(
                        ResourceLoadResult(language, resource_id, LoadStatus.SKIPPED)
                        for resource_id in self._config.resource_files
                    ),
                )
            )

        try:
            outcomes = self._fetch_all(language)
        except BaseException:
            self._engine.on_load_failed(ticket)
            raise

        summary = LoadSummary(language, tuple(result for result, _ in outcomes))
        if summary.all_successful:
            merged = deep_merge({}, *(document for _, document in outcomes))
            if self._engine.on_document_ready(merged, ticket):
                logger.info(
                    "Loaded %d document(s) for language '%s'", summary.successful, language
                )
        else:
            for result in summary.results:
                if not result.is_success:
                    logger.error(
                        "Error loading translations from %s: %s", result.source_path, result.error
                    )
            self._engine.on_load_failed(ticket)

        return self._record(summary)

    def _fetch_all(
        self, language: LanguageId
    ) -> list[tuple[ResourceLoadResult, TranslationDocument | None]]:
        resource_ids = tuple(self._config.resource_files)
        if len(resource_ids) == 1:
            return [self._fetch_one(language, resource_ids[0])]

        workers = min(len(resource_ids), _MAX_FETCH_WORKERS)
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="dotl10n-fetch") as pool:
            return list(pool.map(lambda rid: self._fetch_one(language, rid), resource_ids))

    def _fetch_one(
        self, language: LanguageId, resource_id: ResourceId
    ) -> tuple[ResourceLoadResult, TranslationDocument | None]:
        """Load a single document and record the result."""
        source_path = self._loader.describe_path(language, resource_id)

        try:
            document = self._loader.load(language, resource_id)
        except FileNotFoundError as e:
            return (
                ResourceLoadResult(
                    language, resource_id, LoadStatus.NOT_FOUND, error=e, source_path=source_path
                ),
                None,
            )
        except (OSError, ValueError, LocalizationError) as e:
            return (
                ResourceLoadResult(
                    language, resource_id, LoadStatus.ERROR, error=e, source_path=source_path
                ),
                None,
            )

        return (
            ResourceLoadResult(language, resource_id, LoadStatus.SUCCESS, source_path=source_path),
            document,
        )

    # ------------------------------------------------------------------
    # Partial updates
    # ------------------------------------------------------------------

    def apply_overrides(self, *fragments: Mapping[str, object]) -> bool:
        """Update values of the active document without adding keys.

        Fragments are strict-merged into a copy of the active document, and
        the copy replaces it atomically. Keys that the active document does
        not already have are ignored at every depth.

        Args:
            *fragments: Partial documents, in increasing priority

        Returns:
            True if applied, False when no document is loaded

        Example:
            >>> l10n.apply_overrides({"app": {"title": "Beta"}, "unknown": "ignored"})
            True
        """

        def overlay(document: Mapping[str, object]) -> Mapping[str, object]:
            return strict_deep_merge(deep_merge(document), *fragments)

        return self._engine.transform_document(overlay)

    # ------------------------------------------------------------------
    # Reload polling
    # ------------------------------------------------------------------

    def check_for_updates(self) -> bool:
        """Reload the active language if any of its documents changed.

        Compares each document's freshness stamp with the one seen on the
        previous check. The first observation of a document only records
        its stamp.

        A reload never changes the active language. If the language is
        switched while the check runs, the reload is dropped; the switch
        already loads fresh documents.

        Returns:
            True if a reload was performed
        """
        language = self.language
        if not self._config.is_managed(language):
            return False

        changed = False
        for resource_id in self._config.resource_files:
            stamp = self._loader.freshness(language, resource_id)
            key = (language, resource_id)
            with self._lock:
                previous = self._stamps.get(key)
                if stamp is not None:
                    self._stamps[key] = stamp
            if previous is not None and stamp is not None and previous != stamp:
                changed = True

        if not changed:
            return False

        ticket = self._engine.begin_reload(language)
        if ticket is None:
            return False
        logger.info("Translation file modified (%s), reloading...", language)
        self._run_load(language, ticket)
        return True

    def start_polling(self) -> bool:
        """Start reload polling if config.enable_reload is set.

        Returns:
            True if polling is running after the call
        """
        if not self._config.enable_reload:
            logger.debug("Reload polling not enabled; not starting")
            return False
        if self._poller is None:
            self._poller = ReloadPoller(self.check_for_updates, self._config.reload_interval)
        self._poller.start()
        return True

    def stop_polling(self) -> None:
        """Stop reload polling. Idempotent."""
        if self._poller is not None:
            self._poller.stop()

    def close(self) -> None:
        """Stop polling and release a loader this instance created."""
        self.stop_polling()
        if self._owns_loader:
            close = getattr(self._loader, "close", None)
            if callable(close):
                close()

    def __enter__(self) -> Localization:
        self.start_polling()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        self.close()
