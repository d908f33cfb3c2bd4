"""
Freshness Refresher
====================

Tags every document of a store with its reporting period and whether
that period is the most recent one, so queries can filter on
is_latest = true.

Refresh flow:
1. List one page of documents in the store
2. Resolve each document's filename (parallel, bounded)
3. Derive the period from the filename, skip unparseable ones
4. Rank by period_int; every document at the maximum is latest
5. Write {period, period_int, is_latest, filename} to each document

Writes are sequential and not rolled back. If a write fails midway,
earlier documents keep the new attributes and later ones keep the old,
so the store can mix two refresh generations. The result is then
ok=False, which keeps filtering disabled for that store.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from config.settings import settings
from src.errors import NoParseableDocuments
from src.freshness.period import FilenamePeriodSource


@dataclass
class DocumentRecord:
    """A store document with its derived period."""
    listing_id: str
    file_id: str
    filename: str
    period: str
    period_int: int

    def to_attributes(self, is_latest: bool) -> Dict[str, Any]:
        """Attributes written back to the store."""
        return {
            "period": self.period,
            "period_int": self.period_int,
            "is_latest": is_latest,
            "filename": self.filename,
        }


@dataclass
class RefreshResult:
    """Outcome of one store refresh."""
    store_id: str
    ok: bool
    latest_period: Optional[str] = None
    count: int = 0
    reason: Optional[str] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        if self.ok:
            return {"ok": True, "latestPeriod": self.latest_period, "count": self.count}
        result = {"ok": False, "reason": self.reason}
        if self.error:
            result["error"] = self.error
        return result


class FreshnessRefresher:
    """
    Recomputes the is_latest attribute across one store.

    The provider must offer list_documents, get_file_metadata and
    set_document_attributes (see ProviderClient).
    """

    def __init__(
        self,
        provider,
        period_source: Optional[FilenamePeriodSource] = None,
        list_limit: Optional[int] = None,
        lookup_concurrency: Optional[int] = None
    ):
        """
        Initialize refresher.

        Args:
            provider: Remote provider client
            period_source: Strategy deriving (period, period_int) from a filename
            list_limit: Page size for listing a store
            lookup_concurrency: Max parallel filename lookups
        """
        self.provider = provider
        self.period_source = period_source or FilenamePeriodSource()
        self.list_limit = list_limit or settings.freshness.list_limit
        self.lookup_concurrency = max(1, lookup_concurrency or settings.freshness.lookup_concurrency)

    def refresh(self, store_id: str) -> RefreshResult:
        """
        Refresh freshness attributes for a store.

        Never raises: a store with no dated files is reason
        "no_period_files", any other failure is "refresh_failed".
        """
        try:
            records = self.collect_records(store_id)
            if not records:
                raise NoParseableDocuments(store_id)

            records.sort(key=lambda r: r.period_int, reverse=True)
            latest_int = records[0].period_int

            for record in records:
                self.provider.set_document_attributes(
                    store_id,
                    record.listing_id,
                    record.to_attributes(is_latest=record.period_int == latest_int)
                )

        except NoParseableDocuments as e:
            print(f"[FreshnessRefresher] {e}")
            return RefreshResult(store_id=store_id, ok=False, reason=e.reason)

        except Exception as e:
            print(f"[FreshnessRefresher] Refresh of {store_id} failed: {e}")
            return RefreshResult(
                store_id=store_id,
                ok=False,
                reason="refresh_failed",
                error=str(e)
            )

        latest_period = records[0].period
        print(f"[FreshnessRefresher] Store {store_id}: latest={latest_period} ({len(records)} docs)")

        return RefreshResult(
            store_id=store_id,
            ok=True,
            latest_period=latest_period,
            count=len(records)
        )

    def collect_records(self, store_id: str) -> List[DocumentRecord]:
        """List a store and keep the documents with a parseable period."""
        entries = self.provider.list_documents(store_id, self.list_limit)

        # Lookups are independent; map() re-raises the first failure
        with ThreadPoolExecutor(max_workers=self.lookup_concurrency) as pool:
            metadata = list(pool.map(
                lambda entry: self.provider.get_file_metadata(entry["file_id"]),
                entries
            ))

        records = []
        for entry, meta in zip(entries, metadata):
            filename = meta.get("filename") or ""
            resolved = self.period_source.resolve(filename)
            if resolved is None:
                continue

            period, period_int = resolved
            records.append(DocumentRecord(
                listing_id=entry["listing_id"],
                file_id=entry["file_id"],
                filename=filename,
                period=period,
                period_int=period_int
            ))

        return records
