"""Build document records from archive files."""

from __future__ import annotations

import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Callable

from docarchive.errors import ExtractionError, PdfError
from docarchive.index.cache import DocumentCache
from docarchive.ingestion.pdf_loader import PdfSummary, read_summary
from docarchive.models import DocumentRecord
from docarchive.utils.files import compute_fingerprint
from docarchive.utils.text import encode_content, parse_filename_timestamp

LOGGER = logging.getLogger(__name__)

SummaryReader = Callable[[Path], PdfSummary]


class MetadataExtractor:
    """Turns a PDF path into a cached ``DocumentRecord``.

    Extraction is idempotent: a path whose fingerprint is already cached is
    answered from the cache without touching the file again.
    """

    def __init__(self, cache: DocumentCache, *, reader: SummaryReader = read_summary) -> None:
        self.cache = cache
        self._reader = reader

    def extract(self, path: Path) -> DocumentRecord:
        doc_id = compute_fingerprint(path)
        cached = self.cache.lookup(doc_id)
        if cached is not None:
            return cached

        try:
            with path.open("rb") as handle:
                stat = os.fstat(handle.fileno())
        except OSError as exc:
            LOGGER.error("Error reading document %s: %s", path, exc)
            raise ExtractionError(f"Unreadable file {path}: {exc}", path) from exc

        modified = datetime.fromtimestamp(stat.st_mtime).astimezone()
        file_date = parse_filename_timestamp(path.name) or modified

        try:
            summary = self._reader(path)
        except PdfError as exc:
            LOGGER.error("Error parsing document %s: %s", path, exc)
            raise ExtractionError(exc.message, path) from exc

        record = DocumentRecord(
            id=doc_id,
            name=path.name,
            size=stat.st_size,
            created=modified,
            file_date=file_date,
            pages=summary.page_count,
            content=encode_content(summary.first_page_text),
            path=path,
        )
        self.cache.store(record)
        return record
