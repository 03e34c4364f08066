"""Translation engine: lookups over the currently loaded document.

Composes the key resolver, plural selector and placeholder formatter over a
single state slot (document, language, loading flag). The slot is replaced
wholesale on every transition and never patched in place, so a reader sees
either the previous document or the next one, never a mix.

Failure policy:
    Lookups never raise. Missing keys fall back to caller-supplied default
    text or to the key path itself; a malformed key renders "unknown"; while
    a document is loading, lookups render an empty string so raw keys do not
    flash on screen.

Load tickets:
    begin_load() hands out increasing tickets. Completing a ticket older
    than the newest one issued is discarded, so a slow load that finishes
    after a newer one cannot overwrite it. Passing no ticket applies the
    completion unconditionally (last write wins).

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, replace

from dotl10n.constants import (
    DEFAULT_LANGUAGE,
    DEFAULT_TEXT_KEY,
    FALLBACK_LOADING,
    FALLBACK_MALFORMED_KEY,
)
from dotl10n.runtime.formatter import format_template, stringify
from dotl10n.runtime.plural_rules import DEFAULT_PLURAL_SELECTOR, PluralSelector
from dotl10n.runtime.resolver import Found, MalformedKey, NotFound, resolve
from dotl10n.runtime.rwlock import RWLock

__all__ = ["EngineState", "TranslationEngine"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class EngineState:
    """Immutable snapshot of engine state.

    Attributes:
        document: Active translation document, or None before the first load
        language: Active language identifier
        loading: True while a load is in flight
    """

    document: Mapping[str, object] | None
    language: str
    loading: bool


def _default_text(args: tuple[object, ...]) -> tuple[bool, object]:
    """Extract the defaultTxt override from a trailing argument bag."""
    if args and isinstance(args[-1], Mapping) and DEFAULT_TEXT_KEY in args[-1]:
        return True, args[-1][DEFAULT_TEXT_KEY]
    return False, None


class TranslationEngine:
    """Lookup facade over a replace-on-load document.

    Example:
        >>> engine = TranslationEngine("en")
        >>> engine.on_document_ready({"greetings": {"hello": "Hello {{}}!"}})
        True
        >>> engine.lookup("greetings.hello", "John")
        'Hello John!'
        >>> engine.lookup("missing.key")
        'missing.key'
        >>> engine.lookup("missing.key", {"defaultTxt": "Fallback"})
        'Fallback'

    Thread Safety:
        All methods are thread-safe. Lookups hold the read lock only long
        enough to take a state snapshot.
    """

    __slots__ = ("_latest_ticket", "_lock", "_selector", "_state")

    def __init__(
        self,
        language: str = DEFAULT_LANGUAGE,
        document: Mapping[str, object] | None = None,
        *,
        loading: bool = False,
        selector: PluralSelector | None = None,
    ) -> None:
        """Initialize engine.

        Args:
            language: Initial language identifier
            document: Initial document (None means nothing loaded yet)
            loading: Initial loading flag
            selector: Plural rule table; the built-in table if None
        """
        self._state = EngineState(document, language, loading)
        self._selector = selector if selector is not None else DEFAULT_PLURAL_SELECTOR
        self._lock = RWLock()
        self._latest_ticket = 0

    def __repr__(self) -> str:
        state = self.state
        keys = "none" if state.document is None else len(state.document)
        return (
            f"TranslationEngine(language={state.language!r}, "
            f"loading={state.loading}, keys={keys})"
        )

    # ------------------------------------------------------------------
    # State access
    # ------------------------------------------------------------------

    @property
    def state(self) -> EngineState:
        """Current state snapshot."""
        with self._lock.read():
            return self._state

    @property
    def document(self) -> Mapping[str, object] | None:
        """Active document (None before the first load)."""
        return self.state.document

    @property
    def language(self) -> str:
        """Active language identifier."""
        return self.state.language

    @property
    def loading(self) -> bool:
        """True while a load is in flight."""
        return self.state.loading

    @property
    def selector(self) -> PluralSelector:
        """Plural rule table used by lookup_plural."""
        return self._selector

    # ------------------------------------------------------------------
    # Load notifications
    # ------------------------------------------------------------------

    def begin_load(self, language: str | None = None) -> int:
        """Mark a load as started.

        Sets the loading flag and, if given, switches the active language.
        The current document stays visible until the load completes.

        Args:
            language: New active language, or None to keep the current one

        Returns:
            Ticket identifying this load
        """
        with self._lock.write():
            self._latest_ticket += 1
            changes: dict[str, object] = {"loading": True}
            if language is not None:
                changes["language"] = language
            self._state = replace(self._state, **changes)  # type: ignore[arg-type]
            return self._latest_ticket

    def begin_reload(self, language: str) -> int | None:
        """Mark a reload of the documents of ``language`` as started.

        Unlike begin_load(), never changes the active language. If the
        active language is no longer ``language`` (a switch happened since
        the caller decided to reload), nothing changes and no ticket is
        issued.

        Args:
            language: Language the caller found stale

        Returns:
            Ticket identifying this load, or None if the reload is obsolete
        """
        with self._lock.write():
            if self._state.language != language:
                logger.debug(
                    "Skipping reload of '%s'; active language is now '%s'",
                    language,
                    self._state.language,
                )
                return None
            self._latest_ticket += 1
            self._state = replace(self._state, loading=True)
            return self._latest_ticket

    def _complete(
        self,
        ticket: int | None,
        document: Mapping[str, object] | None,
        *,
        keep_document: bool,
        outcome: str,
    ) -> bool:
        with self._lock.write():
            if ticket is not None and ticket < self._latest_ticket:
                logger.debug(
                    "Discarding stale load %d (%s); newest is %d",
                    ticket,
                    outcome,
                    self._latest_ticket,
                )
                return False
            new_document = self._state.document if keep_document else document
            self._state = EngineState(new_document, self._state.language, False)
            return True

    def on_document_ready(
        self, document: Mapping[str, object], ticket: int | None = None
    ) -> bool:
        """Replace the active document and clear the loading flag.

        Args:
            document: Fully merged document
            ticket: Ticket from begin_load(), or None to apply unconditionally

        Returns:
            True if applied, False if the ticket was stale
        """
        return self._complete(ticket, document, keep_document=False, outcome="ready")

    def on_load_failed(self, ticket: int | None = None) -> bool:
        """Replace the active document with an empty one and clear loading.

        Args:
            ticket: Ticket from begin_load(), or None to apply unconditionally

        Returns:
            True if applied, False if the ticket was stale
        """
        return self._complete(ticket, {}, keep_document=False, outcome="failed")

    def on_load_skipped(self, ticket: int | None = None) -> bool:
        """Clear the loading flag and keep the last known document.

        Args:
            ticket: Ticket from begin_load(), or None to apply unconditionally

        Returns:
            True if applied, False if the ticket was stale
        """
        return self._complete(ticket, None, keep_document=True, outcome="skipped")

    def transform_document(
        self, transform: Callable[[Mapping[str, object]], Mapping[str, object]]
    ) -> bool:
        """Replace the active document with a function of itself, atomically.

        Runs under the write lock, so no load completion can interleave.
        The loading flag and load tickets are left untouched. The transform
        must build a new document rather than mutate its argument.

        Args:
            transform: Receives the current document, returns its replacement

        Returns:
            True if applied, False when no document is loaded
        """
        with self._lock.write():
            if self._state.document is None:
                return False
            self._state = replace(self._state, document=transform(self._state.document))
            return True

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def lookup(self, key_path: str, *args: object) -> object:
        """Resolve a key path and format the result.

        Supports dot notation for nested keys and ``{{}}`` / ``{{name}}``
        placeholders. A trailing mapping argument supplies named values and
        may carry a ``defaultTxt`` fallback.

        Args:
            key_path: Dot-separated key path (e.g., "greetings.hello")
            *args: Positional values, optionally followed by a mapping

        Returns:
            Formatted string for string values; any other value as-is.
            Fallbacks: "" while loading, "unknown" for a malformed key,
            the formatted default text or the key path for a missing key.

        Example:
            >>> engine = TranslationEngine(document={"p": {"info": "{{first}} {{last}}"}})
            >>> engine.lookup("p.info", {"first": "John", "last": "Doe"})
            'John Doe'
        """
        state = self.state
        has_default, default_text = _default_text(args)

        if has_default and (state.document is None or state.loading):
            return FALLBACK_LOADING
        if state.document is None and state.loading:
            return FALLBACK_LOADING

        match resolve(state.document, key_path):
            case Found(value=str() as text):
                return format_template(text, args)
            case Found(value=value):
                return value
            case MalformedKey():
                return FALLBACK_MALFORMED_KEY
            case NotFound(depth=depth, segment=segment):
                logger.debug(
                    "Key '%s' not found at segment '%s' (depth %d)", key_path, segment, depth
                )
                if default_text:
                    return format_template(stringify(default_text), args)
                return key_path

        return key_path  # pragma: no cover - match is exhaustive

    def lookup_plural(self, key_path: str, count: object, *args: object) -> object:
        """Resolve the singular or plural child of a key path.

        The form is chosen by the active language's plural rule and appended
        to the key path. The count is passed as the first positional
        argument, so ``{{}}`` in the template renders it.

        Args:
            key_path: Key path of a plural entry (without .singular/.plural)
            count: Count deciding the form
            *args: Further positional values, optionally followed by a mapping

        Returns:
            Whatever lookup() returns for the selected child

        Example:
            >>> engine = TranslationEngine("en", {"msg": {
            ...     "singular": "You have {{}} new message",
            ...     "plural": "You have {{}} new messages",
            ... }})
            >>> engine.lookup_plural("msg", 5)
            'You have 5 new messages'
        """
        form = self._selector.select(self.language, count)
        return self.lookup(f"{stringify(key_path)}.{form}", count, *args)

    ln = lookup
    ln_plural = lookup_plural
