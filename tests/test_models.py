"""Tests for core data models."""

from __future__ import annotations

import dataclasses
from datetime import datetime, timezone
from pathlib import Path

import pytest

from docarchive.models import CategoryInfo, DocumentRecord, ThumbnailRecord

DATE = datetime(2021, 3, 4, 10, 15, 30, tzinfo=timezone.utc)


def _record(**overrides) -> DocumentRecord:
    values = dict(
        id=42,
        name="report.pdf",
        size=1024,
        created=DATE,
        file_date=DATE,
        pages=3,
        content="SGVsbG8=",
        path=Path("/archive/invoices/report.pdf"),
    )
    values.update(overrides)
    return DocumentRecord(**values)


class TestDocumentRecord:
    """Test DocumentRecord dataclass."""

    def test_create_record(self) -> None:
        """Should hold all fields."""
        record = _record()

        assert record.id == 42
        assert record.name == "report.pdf"
        assert record.size == 1024
        assert record.pages == 3
        assert record.path == Path("/archive/invoices/report.pdf")

    def test_equality(self) -> None:
        """Should compare records by value."""
        assert _record() == _record()
        assert _record() != _record(pages=4)

    def test_immutable(self) -> None:
        """Records cannot be modified after creation."""
        record = _record()
        with pytest.raises(dataclasses.FrozenInstanceError):
            record.path = Path("/elsewhere.pdf")  # type: ignore[misc]


class TestCategoryInfo:
    """Test CategoryInfo dataclass."""

    def test_create(self) -> None:
        info = CategoryInfo(name="invoices", elements=2)
        assert info.name == "invoices"
        assert info.elements == 2


class TestThumbnailRecord:
    """Test ThumbnailRecord dataclass."""

    def test_create(self) -> None:
        thumb = ThumbnailRecord(id=42, data=b"\xff\xd8")
        assert thumb.id == 42
        assert thumb.data == b"\xff\xd8"
