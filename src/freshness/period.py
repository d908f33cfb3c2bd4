"""
Period Codec
============

Reporting periods are embedded in filenames as YYYY-MM tokens
(e.g. "cpi_2026-01_release.pdf"). The codec extracts the token and maps
it to an integer key year*100 + month that sorts chronologically.

The month is not range-checked: "2025-99" is accepted as-is.
"""

import re
from typing import Optional, Tuple


PERIOD_PATTERN = re.compile(r"\d{4}-\d{2}")


def extract_period(filename: Optional[str]) -> Optional[str]:
    """Return the first YYYY-MM substring of a filename, or None."""
    if not filename:
        return None
    match = PERIOD_PATTERN.search(filename)
    return match.group(0) if match else None


def period_to_int(period: Optional[str]) -> Optional[int]:
    """Convert "YYYY-MM" to year*100 + month; None if not two numeric parts."""
    if not period:
        return None
    parts = period.split("-")
    if len(parts) != 2 or not all(p.isdecimal() for p in parts):
        return None
    year, month = (int(p) for p in parts)
    return year * 100 + month


class FilenamePeriodSource:
    """
    Derives a document's period from its filename.

    The refresher only calls resolve(), so a source backed by an
    upload-time attribute can replace this one without touching ranking.
    """

    def resolve(self, filename: Optional[str]) -> Optional[Tuple[str, int]]:
        period = extract_period(filename)
        if period is None:
            return None
        period_int = period_to_int(period)
        if period_int is None:
            return None
        return period, period_int
