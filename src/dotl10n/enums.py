"""Enumerations for dotl10n type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, so a PluralForm can be appended
to a key path directly.

Python 3.13+.
"""

from enum import StrEnum


class PluralForm(StrEnum):
    """Form tag selected by a plural rule.

    StrEnum provides automatic string conversion: str(PluralForm.SINGULAR) == "singular"
    """

    SINGULAR = "singular"
    """Child key holding the singular form of a plural entry"""

    PLURAL = "plural"
    """Child key holding the plural form of a plural entry"""


class LoadStatus(StrEnum):
    """Outcome of loading one resource document.

    StrEnum provides automatic string conversion: str(LoadStatus.SUCCESS) == "success"
    """

    SUCCESS = "success"
    """Document fetched and parsed"""

    NOT_FOUND = "not_found"
    """Document does not exist for this language"""

    ERROR = "error"
    """Transport, permission or format failure"""

    SKIPPED = "skipped"
    """Language is not managed; no fetch attempted"""


__all__ = [
    "LoadStatus",
    "PluralForm",
]
