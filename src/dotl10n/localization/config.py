"""Configuration for the Localization orchestrator.

Frozen dataclass validated at construction (fail fast). Collections are
normalized to tuples so a config can be shared between threads safely.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from dotl10n.constants import (
    DEFAULT_BASE_LOCATION,
    DEFAULT_LANGUAGE,
    DEFAULT_MANAGED_LANGUAGES,
    DEFAULT_RELOAD_INTERVAL,
    DEFAULT_RESOURCE_FILES,
)
from dotl10n.localization.types import LanguageId, ResourceId

__all__ = ["LocalizationConfig"]

# camelCase spellings accepted by from_mapping() for configs written
# for browser-side deployments of the same document layout.
_ALIASES: Mapping[str, str] = {
    "lang": "language",
    "translationsUrl": "base_location",
    "managedLanguages": "managed_languages",
    "resourceFiles": "resource_files",
    "enableHMR": "enable_reload",
    "reloadInterval": "reload_interval",
}


@dataclass(frozen=True, slots=True)
class LocalizationConfig:
    """Settings consumed by Localization.

    Attributes:
        language: Initial language identifier
        base_location: Directory or http(s) base URL holding one
            subdirectory per language
        managed_languages: Languages that may be loaded; others are skipped
        resource_files: Documents fetched and merged per language, in
            increasing priority
        enable_reload: Opt in to periodic freshness polling
        reload_interval: Seconds between freshness checks

    Example:
        >>> config = LocalizationConfig(
        ...     language="fr",
        ...     base_location="https://cdn.example.com/locales",
        ...     managed_languages=["en", "fr"],
        ...     resource_files=["common.json", "app.json"],
        ... )
        >>> config.managed_languages
        ('en', 'fr')
    """

    language: LanguageId = DEFAULT_LANGUAGE
    base_location: str = DEFAULT_BASE_LOCATION
    managed_languages: Iterable[LanguageId] = DEFAULT_MANAGED_LANGUAGES
    resource_files: Iterable[ResourceId] = DEFAULT_RESOURCE_FILES
    enable_reload: bool = False
    reload_interval: float = DEFAULT_RELOAD_INTERVAL

    def __post_init__(self) -> None:
        """Normalize collections and validate values.

        Raises:
            ValueError: If language is empty, resource_files is empty,
                or reload_interval is not positive
        """
        if isinstance(self.managed_languages, str) or isinstance(self.resource_files, str):
            msg = "managed_languages and resource_files must be collections, not strings"
            raise ValueError(msg)

        # dict.fromkeys() removes duplicates while maintaining insertion order
        object.__setattr__(
            self, "managed_languages", tuple(dict.fromkeys(self.managed_languages))
        )
        object.__setattr__(self, "resource_files", tuple(dict.fromkeys(self.resource_files)))

        if not self.language:
            msg = "language cannot be empty"
            raise ValueError(msg)
        if not self.resource_files:
            msg = "At least one resource file is required"
            raise ValueError(msg)
        if self.reload_interval <= 0:
            msg = f"reload_interval must be positive, got {self.reload_interval}"
            raise ValueError(msg)

    def is_managed(self, language: LanguageId) -> bool:
        """Check whether a language may be loaded."""
        return language in self.managed_languages

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> LocalizationConfig:
        """Build a config from a mapping, e.g. a parsed JSON settings file.

        Accepts the field names above and the camelCase aliases ``lang``,
        ``translationsUrl``, ``managedLanguages``, ``resourceFiles``,
        ``enableHMR`` and ``reloadInterval``.

        Args:
            data: Settings mapping

        Returns:
            Validated configuration

        Raises:
            ValueError: If a key is unknown or a value is invalid
        """
        known = set(cls.__dataclass_fields__)
        kwargs: dict[str, object] = {}
        for key, value in data.items():
            name = _ALIASES.get(key, key)
            if name not in known:
                msg = f"Unknown configuration key: '{key}'"
                raise ValueError(msg)
            kwargs[name] = value
        return cls(**kwargs)  # type: ignore[arg-type]
