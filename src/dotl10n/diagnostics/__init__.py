"""Error types for the loading layer.

Exports:
    LocalizationError - Base exception class
    DocumentLoadError - Document could not be fetched
    DocumentFormatError - Document is not a JSON object

Python 3.13+. Zero external dependencies.
"""

from .errors import DocumentFormatError, DocumentLoadError, LocalizationError

__all__ = [
    "DocumentFormatError",
    "DocumentLoadError",
    "LocalizationError",
]
