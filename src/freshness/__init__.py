"""Freshness module - period codec and store refresh."""
from .period import extract_period, period_to_int, FilenamePeriodSource
from .refresher import FreshnessRefresher, RefreshResult, DocumentRecord

__all__ = [
    "extract_period",
    "period_to_int",
    "FilenamePeriodSource",
    "FreshnessRefresher",
    "RefreshResult",
    "DocumentRecord",
]
