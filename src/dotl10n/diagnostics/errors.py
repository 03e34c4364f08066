"""Exception hierarchy for document loading.

Lookups never raise; these exceptions belong to the I/O shell. Loaders raise
them, and the orchestrator absorbs them into load results and an empty
document.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations


class LocalizationError(Exception):
    """Base exception for all dotl10n errors."""


class DocumentLoadError(LocalizationError):
    """A translation document could not be fetched.

    Attributes:
        language: Language the document was requested for
        resource_id: Requested document name
        source_path: Human-readable location of the document
    """

    def __init__(
        self,
        message: str,
        *,
        language: str = "",
        resource_id: str = "",
        source_path: str = "",
    ) -> None:
        """Initialize DocumentLoadError.

        Args:
            message: Error message
            language: Language the document was requested for
            resource_id: Requested document name
            source_path: Human-readable location of the document
        """
        super().__init__(message)
        self.language = language
        self.resource_id = resource_id
        self.source_path = source_path


class DocumentFormatError(DocumentLoadError):
    """Fetched content is not a JSON object.

    Raised for undecodable bodies and for JSON roots that are arrays or
    scalars, since only an object can serve as a translation document.
    """
