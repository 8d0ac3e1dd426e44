"""Utility helpers for working with archive files."""

from __future__ import annotations

import os
from pathlib import Path

FNV64_OFFSET_BASIS = 0xCBF29CE484222325
FNV64_PRIME = 0x100000001B3
_UINT64_MASK = 0xFFFFFFFFFFFFFFFF

PDF_SUFFIX = ".pdf"


def compute_fingerprint(path: str | Path) -> int:
    """Compute the 64-bit FNV-1a hash of a path string.

    The path is hashed exactly as spelled, so two spellings of the same file
    produce two different fingerprints.
    """
    value = FNV64_OFFSET_BASIS
    for byte in os.fspath(path).encode("utf-8", "surrogateescape"):
        value ^= byte
        value = (value * FNV64_PRIME) & _UINT64_MASK
    return value


def is_hidden(path: Path) -> bool:
    return path.name.startswith(".")


def is_pdf_file(path: Path) -> bool:
    """Return True for regular files whose name ends in ``.pdf``."""
    return path.name.endswith(PDF_SUFFIX) and path.is_file()
