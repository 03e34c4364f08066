"""Two-form plural selection by language.

Maps a language identifier and a count to ``singular`` or ``plural``. The
rule table is an immutable value owned by a PluralSelector; nothing here is
process-wide mutable state.

Built-in rules:
- fr: count <= 1 is singular (0 and 1 take the singular form)
- en, es, de, it, pt, nl and every unlisted language: count == 1 is singular

Only two forms exist. Languages with three or more CLDR plural categories
are approximated by the default rule; that is a documented limitation.

Language identifiers are opaque: ``fr-CA`` or ``FR`` are not ``fr`` and use
the default rule unless the table lists them. Callers needing region mapping
inject a PluralSelector whose table names the regional identifiers.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from decimal import Decimal
from types import MappingProxyType

from dotl10n.enums import PluralForm

__all__ = [
    "BUILTIN_RULES",
    "DEFAULT_PLURAL_SELECTOR",
    "PluralRule",
    "PluralSelector",
    "one_is_singular",
    "select_form",
    "zero_or_one_is_singular",
]

logger = logging.getLogger(__name__)

type PluralRule = Callable[[int | float | Decimal], PluralForm]


def one_is_singular(count: int | float | Decimal) -> PluralForm:
    """Singular for exactly one, plural otherwise (English-style)."""
    return PluralForm.SINGULAR if count == 1 else PluralForm.PLURAL


def zero_or_one_is_singular(count: int | float | Decimal) -> PluralForm:
    """Singular for counts up to one, plural otherwise (French-style)."""
    return PluralForm.SINGULAR if count <= 1 else PluralForm.PLURAL


BUILTIN_RULES: Mapping[str, PluralRule] = MappingProxyType({
    "fr": zero_or_one_is_singular,
    "es": one_is_singular,
    "en": one_is_singular,
    "de": one_is_singular,
    "it": one_is_singular,
    "pt": one_is_singular,
    "nl": one_is_singular,
})


@dataclass(frozen=True, slots=True)
class PluralSelector:
    """Immutable language-to-rule table with a default rule.

    Lookup is an exact match in the table, falling back to the default rule.

    Example:
        >>> selector = PluralSelector()
        >>> selector.select("fr", 0)
        <PluralForm.SINGULAR: 'singular'>
        >>> custom = PluralSelector({"lv": zero_or_one_is_singular})
        >>> custom.select("lv", 1)
        <PluralForm.SINGULAR: 'singular'>

    Attributes:
        rules: Mapping from language identifier to rule (copied read-only)
        default: Rule for languages absent from the table
    """

    rules: Mapping[str, PluralRule] = BUILTIN_RULES
    default: PluralRule = one_is_singular

    def __post_init__(self) -> None:
        if not isinstance(self.rules, MappingProxyType):
            object.__setattr__(self, "rules", MappingProxyType(dict(self.rules)))

    def rule_for(self, language: str) -> PluralRule:
        """Get the rule that applies to a language identifier.

        Args:
            language: Language identifier

        Returns:
            Plural rule callable
        """
        if not isinstance(language, str):
            return self.default
        return self.rules.get(language, self.default)

    def select(self, language: str, count: object) -> PluralForm:
        """Select the plural form for a count in a language.

        Args:
            language: Language identifier
            count: Numeric count; non-numeric values select PLURAL

        Returns:
            PluralForm.SINGULAR or PluralForm.PLURAL
        """
        if isinstance(count, bool) or not isinstance(count, int | float | Decimal):
            logger.warning(
                "Non-numeric plural count %r for language '%s'; using plural form",
                count,
                language,
            )
            return PluralForm.PLURAL
        if isinstance(count, Decimal) and count.is_nan():
            return PluralForm.PLURAL
        return self.rule_for(language)(count)


DEFAULT_PLURAL_SELECTOR: PluralSelector = PluralSelector()


def select_form(language: str, count: int | float | Decimal) -> PluralForm:
    """Select the plural form using the built-in rule table.

    Args:
        language: Language identifier (e.g., "en", "fr", "pt-BR")
        count: Numeric count

    Returns:
        PluralForm.SINGULAR or PluralForm.PLURAL

    Examples:
        >>> select_form("en", 0)
        <PluralForm.PLURAL: 'plural'>
        >>> select_form("fr", 0)
        <PluralForm.SINGULAR: 'singular'>
        >>> select_form("xx", 1)
        <PluralForm.SINGULAR: 'singular'>
    """
    return DEFAULT_PLURAL_SELECTOR.select(language, count)
