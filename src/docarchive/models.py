"""Core DocArchive data models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path


@dataclass(slots=True, frozen=True)
class DocumentRecord:
    """Metadata describing one archived PDF.

    ``created`` is the filesystem modification time, ``file_date`` the logical
    date parsed from the filename (or ``created`` when the name has none).
    ``content`` holds the base64 encoded text of the first page. ``path`` is
    internal and never leaves the process.
    """

    id: int
    name: str
    size: int
    created: datetime
    file_date: datetime
    pages: int
    content: str
    path: Path


@dataclass(slots=True, frozen=True)
class CategoryInfo:
    """A category folder and the number of PDFs directly inside it."""

    name: str
    elements: int


@dataclass(slots=True, frozen=True)
class ThumbnailRecord:
    """Encoded first-page raster for a cached document."""

    id: int
    data: bytes
