"""Exception hierarchy for DocArchive.

Every failure the archive service can report derives from ``ArchiveError`` so
the HTTP layer can translate them into status codes in one place.
"""

from __future__ import annotations

from pathlib import Path


class ArchiveError(Exception):
    """Base exception for all DocArchive errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConfigurationError(ArchiveError):
    """Raised when configuration is invalid or missing."""


class ArchiveScanError(ArchiveError):
    """Raised when the archive root itself cannot be enumerated."""


class PdfError(ArchiveError):
    """Raised when the PDF backend cannot open, read or render a document."""

    def __init__(self, message: str, path: Path) -> None:
        super().__init__(message)
        self.path = path


class ExtractionError(ArchiveError):
    """Raised when a document record cannot be built for a path."""

    def __init__(self, message: str, path: Path) -> None:
        super().__init__(message)
        self.path = path


class RenderError(ArchiveError):
    """Raised when a thumbnail cannot be rendered or encoded."""

    def __init__(self, message: str, doc_id: int) -> None:
        super().__init__(message)
        self.doc_id = doc_id


class InvalidDocumentIdError(ArchiveError):
    """Raised when a document id is not a decimal unsigned 64-bit integer."""

    def __init__(self, raw_id: str) -> None:
        super().__init__(f"Invalid docid: {raw_id}")
        self.raw_id = raw_id


class UnknownDocumentError(ArchiveError):
    """Raised when a document id has no cached record."""

    def __init__(self, doc_id: int, message: str | None = None) -> None:
        super().__init__(message or f"Requesting unknown document: {doc_id}")
        self.doc_id = doc_id
