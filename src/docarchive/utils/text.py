"""Text helpers for filenames and extracted page content."""

from __future__ import annotations

import base64
import re
from datetime import datetime, timedelta

_FILENAME_TIMESTAMP = re.compile(r"^(\d+)_(\d+)_(\d+)_(\d+)_(\d+)_(\d+)")


def parse_filename_timestamp(name: str) -> datetime | None:
    """Parse a leading ``YYYY_MM_DD_HH_MM_SS`` timestamp from a filename.

    Out of range fields roll over into the next unit, so ``2021_02_30`` is
    2 March 2021. Returns a local, timezone-aware datetime, or None when the
    name does not start with six underscore separated numbers or the result
    falls outside the years datetime can represent.
    """
    match = _FILENAME_TIMESTAMP.match(name)
    if match is None:
        return None
    year, month, day, hour, minute, second = (int(field) for field in match.groups())
    year += (month - 1) // 12
    month = (month - 1) % 12 + 1
    try:
        offset = timedelta(days=day - 1, hours=hour, minutes=minute, seconds=second)
        return (datetime(year, month, 1) + offset).astimezone()
    except (ValueError, OverflowError, OSError):
        return None


def encode_content(text: str) -> str:
    """Encode page text as base64 so control characters survive JSON transport."""
    return base64.b64encode(text.encode("utf-8", "replace")).decode("ascii")


def decode_content(blob: str) -> str:
    return base64.b64decode(blob).decode("utf-8", "replace")
