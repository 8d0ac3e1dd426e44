"""In-memory document and thumbnail caches.

Both caches are unbounded and append-only for the lifetime of the process.
Each one owns its own lock, and the lock only covers the dictionary access:
extraction and rendering happen outside of it, so a slow PDF never blocks
unrelated lookups. Two threads missing on the same id at the same time may
both do the work; the results are identical and the last store wins.

The PDF backend itself is serialized by the owning ``ArchiveIndex``, because
MuPDF cannot be driven from several threads at once. A slow render therefore
delays other cache misses on the same index, while cache hits and requests
that never touch a PDF are unaffected.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Callable, Dict

from docarchive.config import THUMBNAIL_DPI
from docarchive.errors import PdfError, RenderError, UnknownDocumentError
from docarchive.ingestion.pdf_loader import render_first_page
from docarchive.models import DocumentRecord, ThumbnailRecord

LOGGER = logging.getLogger(__name__)

Renderer = Callable[[Path, int], bytes]


class DocumentCache:
    """Thread-safe mapping of fingerprint to document record."""

    def __init__(self) -> None:
        self._records: Dict[int, DocumentRecord] = {}
        self._lock = threading.Lock()

    def lookup(self, doc_id: int) -> DocumentRecord | None:
        with self._lock:
            return self._records.get(doc_id)

    def store(self, record: DocumentRecord) -> None:
        with self._lock:
            self._records[record.id] = record

    def __contains__(self, doc_id: object) -> bool:
        with self._lock:
            return doc_id in self._records

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)


class ThumbnailCache:
    """Thread-safe mapping of fingerprint to JPEG encoded first page."""

    def __init__(
        self,
        documents: DocumentCache,
        *,
        dpi: int = THUMBNAIL_DPI,
        renderer: Renderer = render_first_page,
    ) -> None:
        self.documents = documents
        self.dpi = dpi
        self._renderer = renderer
        self._thumbnails: Dict[int, ThumbnailRecord] = {}
        self._lock = threading.Lock()

    def lookup(self, doc_id: int) -> ThumbnailRecord | None:
        with self._lock:
            return self._thumbnails.get(doc_id)

    def store(self, thumbnail: ThumbnailRecord) -> None:
        with self._lock:
            self._thumbnails[thumbnail.id] = thumbnail

    def __len__(self) -> int:
        with self._lock:
            return len(self._thumbnails)

    def get_or_render(self, doc_id: int) -> bytes:
        """Return the cached thumbnail, rendering it on first request.

        Only documents already present in the document cache can be rendered;
        anything else raises ``UnknownDocumentError`` without touching a PDF.
        Failed renders are not cached so the next request retries.
        """
        cached = self.lookup(doc_id)
        if cached is not None:
            return cached.data

        record = self.documents.lookup(doc_id)
        if record is None:
            LOGGER.warning("Requesting unknown document: %s", doc_id)
            raise UnknownDocumentError(doc_id)

        LOGGER.debug("Open pdf document: %s", record.path)
        try:
            data = self._renderer(record.path, self.dpi)
        except PdfError as exc:
            LOGGER.error("Error creating thumbnail for %s: %s", record.path, exc)
            raise RenderError(str(exc), doc_id) from exc

        LOGGER.debug("Store in cache document: %s", record.path)
        self.store(ThumbnailRecord(id=doc_id, data=data))
        return data
