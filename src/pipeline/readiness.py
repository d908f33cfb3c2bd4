"""
Readiness State
===============

Per-store flag telling the query path whether the is_latest filter can
be trusted. Computed once from refresh outcomes and passed to the
assistant pipelines; query code only reads it.

A false flag never blocks a query, it only disables the filter.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, Mapping

from src.freshness.refresher import FreshnessRefresher, RefreshResult


@dataclass(frozen=True)
class ReadinessState:
    """Immutable store_id -> ready mapping."""
    flags: Mapping[str, bool] = field(default_factory=dict)
    results: Mapping[str, RefreshResult] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "flags", MappingProxyType(dict(self.flags)))
        object.__setattr__(self, "results", MappingProxyType(dict(self.results)))

    def is_ready(self, store_id: str) -> bool:
        """Unknown or empty store ids are never ready."""
        if not store_id:
            return False
        return self.flags.get(store_id, False)

    def to_dict(self) -> Dict[str, bool]:
        return dict(self.flags)


def build_readiness(
    refresher: FreshnessRefresher,
    store_ids: Iterable[str]
) -> ReadinessState:
    """
    Refresh each store once and record which ones succeeded.

    Stores share no state, so they are refreshed in parallel.
    """
    unique_ids = [s for s in dict.fromkeys(store_ids) if s]
    if not unique_ids:
        return ReadinessState()

    with ThreadPoolExecutor(max_workers=len(unique_ids)) as pool:
        results = list(pool.map(refresher.refresh, unique_ids))

    flags = {r.store_id: r.ok for r in results}
    for store_id, ready in flags.items():
        print(f"[Readiness] {store_id}: {'filter on' if ready else 'filter off'}")

    return ReadinessState(
        flags=flags,
        results={r.store_id: r for r in results}
    )
