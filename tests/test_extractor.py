"""Tests for MetadataExtractor."""

from __future__ import annotations

import os
from datetime import datetime
from pathlib import Path
from unittest.mock import Mock

import pytest

from docarchive.errors import ExtractionError, PdfError
from docarchive.index.cache import DocumentCache
from docarchive.ingestion.extractor import MetadataExtractor
from docarchive.ingestion.pdf_loader import PdfSummary, read_summary
from docarchive.utils.files import compute_fingerprint
from docarchive.utils.text import decode_content


class TestExtract:
    """Test MetadataExtractor.extract."""

    def test_builds_record(self, make_pdf, tmp_path: Path) -> None:
        """Should fill every field from stat, filename and PDF."""
        pdf = make_pdf(tmp_path / "cat" / "2021_03_04_10_15_30_report.pdf", ["First page", "Second"])
        cache = DocumentCache()

        record = MetadataExtractor(cache).extract(pdf)

        assert record.id == compute_fingerprint(pdf)
        assert record.name == "2021_03_04_10_15_30_report.pdf"
        assert record.size == pdf.stat().st_size
        assert record.pages == 2
        assert "First page" in decode_content(record.content)
        assert record.path == pdf
        assert cache.lookup(record.id) is record

    def test_filename_date(self, make_pdf, tmp_path: Path) -> None:
        """A dated filename sets the logical date."""
        pdf = make_pdf(tmp_path / "2021_03_04_10_15_30_report.pdf")

        record = MetadataExtractor(DocumentCache()).extract(pdf)

        assert record.file_date.replace(tzinfo=None) == datetime(2021, 3, 4, 10, 15, 30)
        assert record.created.timestamp() == pytest.approx(pdf.stat().st_mtime)

    def test_undated_filename_uses_mtime(self, make_pdf, tmp_path: Path) -> None:
        """Without a dated filename the logical date is the mtime."""
        pdf = make_pdf(tmp_path / "report.pdf")
        mtime = datetime(2018, 7, 9, 6, 30, 0).timestamp()
        os.utime(pdf, (mtime, mtime))

        record = MetadataExtractor(DocumentCache()).extract(pdf)

        assert record.file_date == record.created
        assert record.created.timestamp() == pytest.approx(mtime)

    def test_second_call_served_from_cache(self, make_pdf, tmp_path: Path) -> None:
        """Repeated extraction does not re-read the PDF."""
        pdf = make_pdf(tmp_path / "report.pdf")
        reader = Mock(side_effect=read_summary)
        extractor = MetadataExtractor(DocumentCache(), reader=reader)

        first = extractor.extract(pdf)
        second = extractor.extract(pdf)

        assert second is first
        reader.assert_called_once_with(pdf)

    def test_cached_and_fresh_records_match(self, make_pdf, tmp_path: Path) -> None:
        """Cached and freshly extracted records are field-identical."""
        pdf = make_pdf(tmp_path / "2020_02_02_02_02_02_scan.pdf", ["Scan"])
        cached_extractor = MetadataExtractor(DocumentCache())
        cached_extractor.extract(pdf)

        cached = cached_extractor.extract(pdf)
        fresh = MetadataExtractor(DocumentCache()).extract(pdf)

        assert cached == fresh

    def test_missing_file(self, tmp_path: Path) -> None:
        """Unreadable files raise and are not cached."""
        cache = DocumentCache()
        reader = Mock()

        with pytest.raises(ExtractionError) as excinfo:
            MetadataExtractor(cache, reader=reader).extract(tmp_path / "missing.pdf")

        assert excinfo.value.path == tmp_path / "missing.pdf"
        reader.assert_not_called()
        assert len(cache) == 0

    def test_pdf_failure_stores_nothing(self, tmp_path: Path) -> None:
        """A PDF that cannot be opened leaves no partial record."""
        pdf = tmp_path / "corrupt.pdf"
        pdf.write_bytes(b"not really a pdf")
        cache = DocumentCache()
        reader = Mock(side_effect=PdfError("Failed to open PDF", pdf))

        with pytest.raises(ExtractionError):
            MetadataExtractor(cache, reader=reader).extract(pdf)

        assert len(cache) == 0

    def test_empty_first_page(self, tmp_path: Path) -> None:
        """Documents without text still produce a record."""
        pdf = tmp_path / "blank.pdf"
        pdf.write_bytes(b"%PDF-1.4")
        reader = Mock(return_value=PdfSummary(page_count=0, first_page_text=""))

        record = MetadataExtractor(DocumentCache(), reader=reader).extract(pdf)

        assert record.pages == 0
        assert record.content == ""
