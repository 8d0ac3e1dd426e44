"""Discovery of category folders and PDFs inside the archive root."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Tuple

from docarchive.errors import ArchiveScanError
from docarchive.utils.files import is_hidden, is_pdf_file

LOGGER = logging.getLogger(__name__)


class ArchiveScanner:
    """Enumerates an archive laid out as ``<root>/<category>/<document>.pdf``.

    Failing to read the root is fatal and raises ``ArchiveScanError``; a single
    unreadable category is logged and skipped.
    """

    def __init__(self, root: Path) -> None:
        self.root = Path(root)

    def _root_entries(self) -> List[Path]:
        try:
            return sorted(self.root.iterdir(), key=lambda entry: entry.name)
        except OSError as exc:
            raise ArchiveScanError(f"Error finding archive content in {self.root}: {exc}") from exc

    def list_categories(self) -> List[Tuple[str, Path]]:
        """Return ``(name, path)`` for each visible directory below the root."""
        categories: List[Tuple[str, Path]] = []
        for entry in self._root_entries():
            if is_hidden(entry):
                continue
            try:
                if not entry.is_dir():
                    continue
            except OSError as exc:
                LOGGER.warning("Skipping category %s: %s", entry, exc)
                continue
            categories.append((entry.name, entry))
        LOGGER.info("Found %d categories in %s", len(categories), self.root)
        return categories

    def list_category_documents(self, category: Path) -> List[Path]:
        """Return PDF files directly inside ``category``, sorted by name.

        Raises ``OSError`` when the category itself cannot be read.
        """
        documents: List[Path] = []
        for entry in sorted(category.iterdir(), key=lambda entry: entry.name):
            try:
                if is_pdf_file(entry):
                    documents.append(entry)
            except OSError as exc:
                LOGGER.warning("Skipping document %s: %s", entry, exc)
        return documents

    def count_category_documents(self) -> List[Tuple[str, int]]:
        """Return ``(name, pdf count)`` for each readable category."""
        counts: List[Tuple[str, int]] = []
        for name, category in self.list_categories():
            try:
                counts.append((name, len(self.list_category_documents(category))))
            except OSError as exc:
                LOGGER.warning("Skipping category %s: %s", category, exc)
        return counts

    def list_document_paths(self) -> List[Path]:
        """Return every PDF one level below the root in discovery order."""
        paths: List[Path] = []
        for _, category in self.list_categories():
            try:
                paths.extend(self.list_category_documents(category))
            except OSError as exc:
                LOGGER.warning("Skipping category %s: %s", category, exc)
        LOGGER.info("Found %d documents in %s", len(paths), self.root)
        return paths
