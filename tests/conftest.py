"""Shared fixtures building small on-disk archives of real PDFs."""

from __future__ import annotations

import os
from datetime import datetime
from pathlib import Path
from typing import Callable, Sequence

import fitz  # PyMuPDF
import pytest

# 2019-06-01 12:00:00 local time, used as the mtime of undated documents.
UNDATED_MTIME = datetime(2019, 6, 1, 12, 0, 0).timestamp()


def write_pdf(path: Path, texts: Sequence[str] = ("Hello archive",)) -> Path:
    """Write a small PDF with one page per entry in ``texts``."""
    path.parent.mkdir(parents=True, exist_ok=True)
    doc = fitz.open()
    try:
        for text in texts:
            page = doc.new_page(width=200, height=200)
            page.insert_text((20, 40), text)
        doc.save(str(path))
    finally:
        doc.close()
    return path


@pytest.fixture
def make_pdf() -> Callable[..., Path]:
    return write_pdf


@pytest.fixture
def archive_root(tmp_path: Path) -> Path:
    """Archive with two categories plus entries that must be ignored.

    invoices/ holds two dated documents, letters/ one undated document.
    A hidden folder, a root-level PDF, a nested PDF and a text file are
    present but never listed.
    """
    root = tmp_path / "archive"
    write_pdf(root / "invoices" / "2021_03_04_10_15_30_report.pdf", ["March report", "Page two"])
    write_pdf(root / "invoices" / "2020_01_01_08_00_00_old.pdf", ["Old invoice"])
    letter = write_pdf(root / "letters" / "letter.pdf", ["Dear reader"])
    os.utime(letter, (UNDATED_MTIME, UNDATED_MTIME))

    write_pdf(root / ".hidden" / "secret.pdf")
    write_pdf(root / "loose.pdf")
    write_pdf(root / "letters" / "drafts" / "nested.pdf")
    (root / "letters" / "notes.txt").write_text("not a pdf")
    return root


@pytest.fixture
def unreadable_invoices(monkeypatch: pytest.MonkeyPatch) -> None:
    """Make listing the ``invoices`` category fail with a permission error."""
    original_iterdir = Path.iterdir

    def denying_iterdir(self: Path):
        if self.name == "invoices":
            raise PermissionError("denied")
        return original_iterdir(self)

    monkeypatch.setattr(Path, "iterdir", denying_iterdir)
