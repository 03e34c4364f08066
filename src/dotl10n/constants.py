"""Shared constants for dotl10n.

Centralized defaults and sentinel strings used across the runtime and
localization packages. Placing constants here avoids circular imports and
provides a single source of truth.

Constants are grouped by domain:
- Lookup sentinels: Values returned instead of raising
- Configuration defaults: Values used when the caller supplies none
- Reload polling: Timer settings for the opt-in reload poller

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Lookup sentinels
    "FALLBACK_MALFORMED_KEY",
    "FALLBACK_LOADING",
    "OBJECT_PLACEHOLDER",
    "DEFAULT_TEXT_KEY",
    # Configuration defaults
    "DEFAULT_LANGUAGE",
    "DEFAULT_BASE_LOCATION",
    "DEFAULT_MANAGED_LANGUAGES",
    "DEFAULT_RESOURCE_FILES",
    "DEFAULT_HTTP_TIMEOUT",
    # Reload polling
    "DEFAULT_RELOAD_INTERVAL",
]

# ============================================================================
# LOOKUP SENTINELS
# ============================================================================

# Returned when the first key path segment is empty after trimming.
FALLBACK_MALFORMED_KEY: str = "unknown"

# Returned while a document is loading, so raw keys never flash in a UI.
FALLBACK_LOADING: str = ""

# Rendering of values that have no meaningful string form (mappings and
# objects without a custom __str__/__repr__).
OBJECT_PLACEHOLDER: str = "[object Object]"

# Key in the trailing named-argument bag that carries fallback text.
DEFAULT_TEXT_KEY: str = "defaultTxt"

# ============================================================================
# CONFIGURATION DEFAULTS
# ============================================================================

DEFAULT_LANGUAGE: str = "en"

# Base location for documents: a directory path or an http(s) base URL.
# Documents live at <base>/<language>/<resource file>.
DEFAULT_BASE_LOCATION: str = "/locales"

DEFAULT_MANAGED_LANGUAGES: tuple[str, ...] = ("en", "fr", "es")

DEFAULT_RESOURCE_FILES: tuple[str, ...] = ("translation.json",)

# Seconds before an HTTP request for a document is abandoned.
DEFAULT_HTTP_TIMEOUT: float = 10.0

# ============================================================================
# RELOAD POLLING
# ============================================================================

# Seconds between freshness checks when reload polling is enabled.
DEFAULT_RELOAD_INTERVAL: float = 2.0
