"""Placeholder substitution for translation strings.

Supports two placeholder kinds inside a template:
- Indexed ``{{}}``: consumes the next positional argument, left to right
- Named ``{{name}}``: looks the name up in a trailing mapping argument

Substituted values are never re-scanned, so a value containing ``{{}}``
is inserted literally.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Mapping, Sequence
from decimal import Decimal

from dotl10n.constants import OBJECT_PLACEHOLDER

__all__ = ["PLACEHOLDER_PATTERN", "format_template", "stringify"]

logger = logging.getLogger(__name__)

PLACEHOLDER_PATTERN: re.Pattern[str] = re.compile(r"\{\{([A-Za-z0-9]*)\}\}")
"""Matches ``{{}}`` and ``{{name}}`` with an ASCII alphanumeric name."""


def _has_custom_repr(value: object) -> bool:
    cls = type(value)
    return cls.__str__ is not object.__str__ or cls.__repr__ is not object.__repr__


def _format_float(value: float) -> str:
    """Render a float the way JSON producers print numbers.

    Uses the shortest round-trip digits: plain notation for magnitudes
    from 1e-6 up to below 1e21, exponent notation (``1e+21``, ``1e-7``)
    outside that range.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    # repr() yields the shortest round-trip digits; normalize() strips zeros
    parts = Decimal(repr(abs(value))).normalize().as_tuple()
    digits = "".join(map(str, parts.digits))
    k = len(digits)
    n = int(parts.exponent) + k  # position of the decimal point

    if k <= n <= 21:
        return sign + digits + "0" * (n - k)
    if 0 < n <= 21:
        return f"{sign}{digits[:n]}.{digits[n:]}"
    if -6 < n <= 0:
        return f"{sign}0.{'0' * -n}{digits}"

    exponent = n - 1
    mantissa = digits if k == 1 else f"{digits[0]}.{digits[1:]}"
    return f"{sign}{mantissa}e{'+' if exponent >= 0 else '-'}{abs(exponent)}"


def stringify(value: object) -> str:
    """Convert a document or argument value to its canonical string form.

    Values come from JSON documents, so JSON spellings are used for the
    literals: ``None`` renders as ``"null"`` and booleans as ``"true"`` /
    ``"false"``. Floats use the shortest round-trip digits in JSON number
    notation: integral floats drop the trailing ``.0``, magnitudes from
    1e21 up or below 1e-6 use exponents (``1e+21``, ``1e-7``), and
    non-finite values render as ``NaN`` / ``Infinity``. Mappings and
    objects without their own string form render as a fixed placeholder.

    Never raises: a failing ``__str__`` also yields the placeholder.

    Args:
        value: Any value

    Returns:
        String representation

    Examples:
        >>> stringify(None)
        'null'
        >>> stringify(5.0)
        '5'
        >>> stringify(99.99)
        '99.99'
        >>> stringify({"a": 1})
        '[object Object]'
    """
    match value:
        case str():
            return value
        case bool():
            return "true" if value else "false"
        case None:
            return "null"
        case int() | Decimal():
            return str(value)
        case float():
            return _format_float(value)
        case Mapping():
            return OBJECT_PLACEHOLDER
        case list() | tuple():
            return ",".join("" if item is None else stringify(item) for item in value)

    if not _has_custom_repr(value):
        return OBJECT_PLACEHOLDER
    try:
        return str(value)
    except Exception:  # noqa: BLE001 - best-effort rendering must not raise
        logger.debug("Cannot stringify %s instance", type(value).__name__, exc_info=True)
        return OBJECT_PLACEHOLDER


def format_template(template: str, args: Sequence[object] = ()) -> str:
    """Substitute indexed and named placeholders into a template.

    If the last element of ``args`` is a mapping, it is the named-argument
    bag and is excluded from positional substitution.

    Unresolvable placeholders stay in the output verbatim, braces included:
    an indexed placeholder with no positional argument left, or a named
    placeholder whose name is absent from the bag. Surplus positional
    arguments are ignored.

    Args:
        template: Template text
        args: Positional values, optionally followed by a mapping of named values

    Returns:
        Formatted text

    Examples:
        >>> format_template("{{}} {{}} {{}}", ["a", "b"])
        'a b {{}}'
        >>> format_template("Hello {{name}}!", [{"name": "Ann"}])
        'Hello Ann!'
        >>> format_template("Hello {{name}}!", [{"other": "x"}])
        'Hello {{name}}!'
    """
    if not template:
        return ""

    positional = list(args)
    named: Mapping[str, object] = {}
    if positional and isinstance(positional[-1], Mapping):
        named = positional.pop()  # type: ignore[assignment]

    remaining = iter(positional)
    exhausted = object()

    def substitute(match: re.Match[str]) -> str:
        name = match.group(1)
        if not name:
            value = next(remaining, exhausted)
            return match.group(0) if value is exhausted else stringify(value)
        if name in named:
            return stringify(named[name])
        return match.group(0)

    return PLACEHOLDER_PATTERN.sub(substitute, template)
