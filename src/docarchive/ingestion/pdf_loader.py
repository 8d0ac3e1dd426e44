"""PDF access through PyMuPDF (fitz).

This module is the only place that talks to the PDF backend: it opens
documents, reads the page count and first-page text, and renders the first
page as a JPEG thumbnail.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

import fitz  # PyMuPDF

from docarchive.config import THUMBNAIL_DPI
from docarchive.errors import PdfError

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class PdfSummary:
    page_count: int
    first_page_text: str


@contextmanager
def open_pdf(path: Path) -> Iterator[fitz.Document]:
    """Open a PDF and close it again on every exit path."""
    try:
        doc = fitz.open(path)
    except Exception as exc:
        raise PdfError(f"Failed to open PDF {path}: {exc}", path) from exc
    try:
        yield doc
    finally:
        doc.close()


def read_summary(path: Path) -> PdfSummary:
    """Return the page count and the text of the first page."""
    with open_pdf(path) as doc:
        try:
            page_count = len(doc)
            text = ""
            if page_count:
                text = doc[0].get_text() or ""
        except Exception as exc:
            raise PdfError(f"Failed to read PDF {path}: {exc}", path) from exc
    return PdfSummary(page_count=page_count, first_page_text=text)


def render_first_page(path: Path, dpi: int = THUMBNAIL_DPI) -> bytes:
    """Render the first page at ``dpi`` and return it JPEG encoded."""
    with open_pdf(path) as doc:
        if len(doc) == 0:
            raise PdfError(f"PDF {path} has no pages to render", path)
        try:
            LOGGER.debug("Render first page of document: %s", path)
            pixmap = doc[0].get_pixmap(dpi=dpi)
            LOGGER.debug("Encode as JPEG document: %s", path)
            return pixmap.tobytes("jpeg")
        except Exception as exc:
            raise PdfError(f"Failed to render PDF {path}: {exc}", path) from exc
