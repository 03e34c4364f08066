"""Tests for runtime/engine.py - lookup facade and load transitions."""

from __future__ import annotations

import threading

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from dotl10n.runtime.engine import EngineState, TranslationEngine
from dotl10n.runtime.plural_rules import PluralSelector, zero_or_one_is_singular
from tests.strategies import json_documents, json_values, key_segments

DOCUMENT = {
    "greetings": {"hello": "Hello {{}}!", "welcome": "Welcome"},
    "user": {"info": "{{firstName}} {{lastName}}"},
    "messages": {
        "notification": {
            "singular": "You have {{}} new message",
            "plural": "You have {{}} new messages",
        },
        "from": {
            "singular": "{{}} message from {{sender}}",
            "plural": "{{}} messages from {{sender}}",
        },
    },
    "count": 3,
    "items": ["a", "b"],
    "empty": "",
}

FRENCH = {
    "messages": {
        "notification": {
            "singular": "Vous avez {{}} nouveau message",
            "plural": "Vous avez {{}} nouveaux messages",
        }
    }
}


@pytest.fixture
def engine() -> TranslationEngine:
    return TranslationEngine("en", DOCUMENT)


class TestLookup:
    """Resolution and formatting."""

    def test_positional(self, engine: TranslationEngine) -> None:
        assert engine.lookup("greetings.hello", "John") == "Hello John!"

    def test_named(self, engine: TranslationEngine) -> None:
        result = engine.lookup("user.info", {"firstName": "John", "lastName": "Doe"})
        assert result == "John Doe"

    def test_no_args(self, engine: TranslationEngine) -> None:
        assert engine.lookup("greetings.welcome") == "Welcome"

    def test_non_string_values_returned_as_is(self, engine: TranslationEngine) -> None:
        assert engine.lookup("count") == 3
        assert engine.lookup("items") == ["a", "b"]
        assert engine.lookup("greetings") == DOCUMENT["greetings"]

    def test_empty_string_value(self, engine: TranslationEngine) -> None:
        assert engine.lookup("empty", "x") == ""

    def test_ln_alias(self, engine: TranslationEngine) -> None:
        assert engine.ln("greetings.hello", "Ann") == "Hello Ann!"


class TestFallbacks:
    """Missing, malformed and loading fallbacks."""

    def test_missing_key_returns_key_path(self, engine: TranslationEngine) -> None:
        assert engine.lookup("missing.key") == "missing.key"

    def test_missing_nested_key(self, engine: TranslationEngine) -> None:
        assert engine.lookup("greetings.missing") == "greetings.missing"

    def test_default_text(self, engine: TranslationEngine) -> None:
        assert engine.lookup("missing.key", {"defaultTxt": "Fallback"}) == "Fallback"

    def test_default_text_is_formatted(self, engine: TranslationEngine) -> None:
        result = engine.lookup("missing", "Ann", {"defaultTxt": "Hi {{}} {{x}}", "x": "!"})
        assert result == "Hi Ann !"

    def test_empty_default_text_falls_back_to_key(self, engine: TranslationEngine) -> None:
        assert engine.lookup("missing", {"defaultTxt": ""}) == "missing"

    def test_default_text_ignored_when_found(self, engine: TranslationEngine) -> None:
        assert engine.lookup("greetings.welcome", {"defaultTxt": "Other"}) == "Welcome"

    @pytest.mark.parametrize("key_path", ["", "   ", ".x", " .x"])
    def test_malformed_key(self, engine: TranslationEngine, key_path: str) -> None:
        assert engine.lookup(key_path) == "unknown"

    def test_non_string_key(self, engine: TranslationEngine) -> None:
        assert engine.lookup(None) == "unknown"  # type: ignore[arg-type]

    def test_empty_document_default_text(self) -> None:
        engine = TranslationEngine("en", {})
        assert engine.lookup("missing.key", {"defaultTxt": "Fallback"}) == "Fallback"
        assert engine.lookup("missing.key") == "missing.key"

    def test_nothing_loaded_not_loading(self) -> None:
        assert TranslationEngine().lookup("a.b") == "a.b"

    def test_nothing_loaded_while_loading(self) -> None:
        engine = TranslationEngine()
        engine.begin_load()
        assert engine.lookup("a.b") == ""

    def test_default_text_while_loading(self, engine: TranslationEngine) -> None:
        engine.begin_load()
        assert engine.lookup("greetings.welcome", {"defaultTxt": "x"}) == ""

    def test_default_text_without_document(self) -> None:
        assert TranslationEngine().lookup("a", {"defaultTxt": "x"}) == ""

    def test_reload_keeps_previous_document_visible(self, engine: TranslationEngine) -> None:
        engine.begin_load()
        assert engine.lookup("greetings.welcome") == "Welcome"

    @given(key=st.text(alphabet="abc.", min_size=1, max_size=12))
    def test_lookup_never_raises(self, key: str) -> None:
        """Property: any key path yields a value without raising."""
        result = TranslationEngine("en", DOCUMENT).lookup(key, "x", {"n": 1})
        assert result is not None


class TestPlural:
    """Singular/plural selection on top of lookup."""

    @pytest.mark.parametrize(
        ("count", "expected"),
        [
            (0, "You have 0 new messages"),
            (1, "You have 1 new message"),
            (5, "You have 5 new messages"),
        ],
    )
    def test_english(self, engine: TranslationEngine, count: int, expected: str) -> None:
        assert engine.lookup_plural("messages.notification", count) == expected

    @pytest.mark.parametrize(
        ("count", "expected"),
        [
            (0, "Vous avez 0 nouveau message"),
            (1, "Vous avez 1 nouveau message"),
            (2, "Vous avez 2 nouveaux messages"),
        ],
    )
    def test_french(self, count: int, expected: str) -> None:
        engine = TranslationEngine("fr", FRENCH)
        assert engine.lookup_plural("messages.notification", count) == expected

    def test_named_arguments(self, engine: TranslationEngine) -> None:
        result = engine.ln_plural("messages.from", 3, {"sender": "Bob"})
        assert result == "3 messages from Bob"

    def test_missing_plural_entry(self, engine: TranslationEngine) -> None:
        assert engine.lookup_plural("messages.none", 2) == "messages.none.plural"

    def test_custom_selector(self) -> None:
        selector = PluralSelector({"en": zero_or_one_is_singular})
        engine = TranslationEngine("en", DOCUMENT, selector=selector)
        assert engine.selector is selector
        assert engine.lookup_plural("messages.notification", 0) == "You have 0 new message"

    def test_non_numeric_count(self, engine: TranslationEngine) -> None:
        assert engine.lookup_plural("messages.notification", "1") == "You have 1 new messages"


class TestTransitions:
    """begin_load and the completion notifications."""

    def test_begin_load_sets_flag_and_language(self, engine: TranslationEngine) -> None:
        engine.begin_load("fr")
        assert engine.loading
        assert engine.language == "fr"
        assert engine.document is DOCUMENT

    def test_begin_load_keeps_language(self, engine: TranslationEngine) -> None:
        engine.begin_load()
        assert engine.language == "en"

    def test_document_ready(self) -> None:
        engine = TranslationEngine()
        ticket = engine.begin_load()
        assert engine.on_document_ready(DOCUMENT, ticket)
        assert engine.state == EngineState(DOCUMENT, "en", False)

    def test_load_failed_sets_empty_document(self, engine: TranslationEngine) -> None:
        ticket = engine.begin_load()
        assert engine.on_load_failed(ticket)
        assert engine.document == {}
        assert not engine.loading
        assert engine.lookup("greetings.welcome") == "greetings.welcome"

    def test_load_skipped_keeps_document(self, engine: TranslationEngine) -> None:
        ticket = engine.begin_load("xx")
        assert engine.on_load_skipped(ticket)
        assert engine.document is DOCUMENT
        assert engine.language == "xx"
        assert not engine.loading

    def test_stale_ticket_discarded(self) -> None:
        engine = TranslationEngine()
        first = engine.begin_load("en")
        second = engine.begin_load("fr")
        assert engine.on_document_ready(FRENCH, second)
        assert not engine.on_document_ready(DOCUMENT, first)
        assert engine.document is FRENCH
        assert engine.language == "fr"

    def test_stale_ticket_keeps_loading_flag(self) -> None:
        engine = TranslationEngine()
        first = engine.begin_load()
        engine.begin_load()
        assert not engine.on_load_failed(first)
        assert engine.loading

    def test_no_ticket_applies_unconditionally(self) -> None:
        engine = TranslationEngine()
        engine.begin_load()
        engine.begin_load()
        assert engine.on_document_ready(DOCUMENT)
        assert engine.document is DOCUMENT

    def test_begin_reload_keeps_language(self, engine: TranslationEngine) -> None:
        ticket = engine.begin_reload("en")
        assert ticket is not None
        assert engine.loading
        assert engine.language == "en"
        assert engine.on_document_ready(FRENCH, ticket)
        assert engine.language == "en"

    def test_begin_reload_after_switch_is_dropped(self, engine: TranslationEngine) -> None:
        ticket = engine.begin_load("fr")
        assert engine.begin_reload("en") is None
        assert engine.language == "fr"
        assert engine.on_document_ready(FRENCH, ticket)

    def test_reload_superseded_by_switch(self, engine: TranslationEngine) -> None:
        reload_ticket = engine.begin_reload("en")
        switch_ticket = engine.begin_load("fr")
        assert engine.on_document_ready(FRENCH, switch_ticket)
        assert not engine.on_document_ready(DOCUMENT, reload_ticket)
        assert engine.state == EngineState(FRENCH, "fr", False)

    def test_tickets_increase(self) -> None:
        engine = TranslationEngine()
        assert engine.begin_load() < engine.begin_load()

    def test_initial_state(self) -> None:
        engine = TranslationEngine("de", loading=True)
        assert engine.state == EngineState(None, "de", True)

    def test_repr(self, engine: TranslationEngine) -> None:
        assert "language='en'" in repr(engine)


class TestTransformDocument:
    """Atomic in-place-style replacement of the active document."""

    def test_replaces_document(self, engine: TranslationEngine) -> None:
        assert engine.transform_document(lambda doc: {**doc, "extra": "x"})
        assert engine.lookup("extra") == "x"

    def test_no_document(self) -> None:
        assert not TranslationEngine().transform_document(lambda doc: {"a": 1})

    def test_loading_flag_untouched(self, engine: TranslationEngine) -> None:
        ticket = engine.begin_load()
        engine.transform_document(lambda doc: {"a": 1})
        assert engine.loading
        assert engine.on_load_skipped(ticket)


class TestConcurrency:
    """Lookups concurrent with document replacement."""

    def test_readers_see_whole_documents(self) -> None:
        first = {"a": "1", "b": "1"}
        second = {"a": "2", "b": "2"}
        engine = TranslationEngine("en", first)
        mixed: list[tuple[object, object]] = []
        stop = threading.Event()

        def read() -> None:
            while not stop.is_set():
                state = engine.state
                pair = (state.document["a"], state.document["b"])  # type: ignore[index]
                if pair[0] != pair[1]:
                    mixed.append(pair)

        readers = [threading.Thread(target=read) for _ in range(4)]
        for thread in readers:
            thread.start()
        for i in range(200):
            engine.on_document_ready(second if i % 2 else first)
        stop.set()
        for thread in readers:
            thread.join()

        assert mixed == []


class TestLookupFuzz:
    """Long-running robustness checks (run with: pytest -m fuzz)."""

    @pytest.mark.fuzz
    @settings(max_examples=2000, deadline=None)
    @given(
        document=json_documents(),
        key=st.text(max_size=30),
        args=st.lists(st.one_of(json_values, st.dictionaries(key_segments, json_values))),
    )
    def test_lookup_never_raises(
        self, document: dict[str, object], key: str, args: list[object]
    ) -> None:
        engine = TranslationEngine("en", document)
        engine.lookup(key, *args)
        engine.lookup_plural(key, len(args), *args)
