"""Archive listing service tying scanner, extractor and caches together."""

from __future__ import annotations

import functools
import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Tuple, TypeVar

from docarchive.config import THUMBNAIL_DPI
from docarchive.errors import ExtractionError, UnknownDocumentError
from docarchive.index.cache import DocumentCache, Renderer, ThumbnailCache
from docarchive.index.scanner import ArchiveScanner
from docarchive.ingestion.extractor import MetadataExtractor, SummaryReader
from docarchive.ingestion.pdf_loader import read_summary, render_first_page
from docarchive.models import CategoryInfo, DocumentRecord

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


def _serialized(func: Callable[..., T], lock: threading.Lock) -> Callable[..., T]:
    @functools.wraps(func)
    def guarded(*args: object) -> T:
        with lock:
            return func(*args)

    return guarded


@dataclass(slots=True)
class ListingStats:
    listed: int = 0
    failed: int = 0
    failed_files: list[Path] = field(default_factory=list)

    def record_failure(self, path: Path) -> None:
        self.failed += 1
        self.failed_files.append(path)


class ArchiveIndex:
    """Process-wide service owning the document and thumbnail caches.

    One instance is built per server and shared by every request handler.
    MuPDF is not thread-safe, so every PDF read and render made on behalf of
    this index holds ``pdf_lock``.
    """

    def __init__(
        self,
        root: Path,
        *,
        thumbnail_dpi: int = THUMBNAIL_DPI,
        reader: SummaryReader = read_summary,
        renderer: Renderer = render_first_page,
    ) -> None:
        self.root = Path(root)
        self.scanner = ArchiveScanner(self.root)
        self.pdf_lock = threading.Lock()
        self.documents = DocumentCache()
        self.extractor = MetadataExtractor(
            self.documents, reader=_serialized(reader, self.pdf_lock)
        )
        self.thumbnails = ThumbnailCache(
            self.documents,
            dpi=thumbnail_dpi,
            renderer=_serialized(renderer, self.pdf_lock),
        )

    def scan_documents(self) -> Tuple[List[DocumentRecord], ListingStats]:
        """Extract every archived PDF and sort newest first by file date.

        Paths that fail extraction are skipped. ``sorted`` is stable, so
        documents sharing a date keep their discovery order.
        """
        paths = self.scanner.list_document_paths()
        LOGGER.info("Parse %d documents", len(paths))

        stats = ListingStats()
        records: List[DocumentRecord] = []
        for path in paths:
            try:
                records.append(self.extractor.extract(path))
            except ExtractionError:
                stats.record_failure(path)

        LOGGER.info("Sort %d documents", len(records))
        records = sorted(records, key=lambda record: record.file_date, reverse=True)
        stats.listed = len(records)
        if stats.failed:
            LOGGER.warning("Skipped %d documents that could not be parsed", stats.failed)
        return records, stats

    def list_all_documents(self) -> List[DocumentRecord]:
        records, _ = self.scan_documents()
        return records

    def list_categories(self) -> List[CategoryInfo]:
        return [
            CategoryInfo(name=name, elements=count)
            for name, count in self.scanner.count_category_documents()
        ]

    def thumbnail(self, doc_id: int) -> bytes:
        return self.thumbnails.get_or_render(doc_id)

    def document_path(self, doc_id: int) -> Path:
        """Return the file behind a cached document id."""
        record = self.documents.lookup(doc_id)
        if record is None:
            LOGGER.warning("Requesting unknown document: %s", doc_id)
            raise UnknownDocumentError(doc_id)
        if not record.path.is_file():
            LOGGER.warning("Document %s no longer exists at %s", doc_id, record.path)
            raise UnknownDocumentError(doc_id, f"Document file is no longer available: {doc_id}")
        return record.path
