"""Bounded, persisted search history with popularity statistics."""
import json
import logging
import time
import uuid
from collections import Counter
from datetime import datetime, timezone
from typing import List, Optional

from content_search.models import PopularSearch, SearchAnalytics, SearchHistoryEntry
from content_search.storage import KeyValueStorage

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_KEY = "searchHistory"
DEFAULT_CAPACITY = 100

# Failures the storage boundary absorbs
_STORAGE_ERRORS = (OSError, ValueError, TypeError, KeyError)


def _generate_id() -> str:
    """Generate a unique ID for a history entry.

    Millisecond timestamp plus a random suffix, so IDs sort roughly by time.
    """
    return f"search_{int(time.time() * 1000)}_{uuid.uuid4().hex[:9]}"


class SearchHistoryStore:
    """Append-only log of past searches kept under one storage key.

    Newest entries come first. Once the log holds more than `capacity`
    entries the oldest are dropped. Storage failures never propagate:
    they are logged and the store behaves as if history were empty.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        key: str = DEFAULT_HISTORY_KEY,
        capacity: int = DEFAULT_CAPACITY,
    ):
        """Initialize the history store.

        Args:
            storage: Key-value storage holding the serialized log
            key: Storage key for the log
            capacity: Maximum number of entries kept
        """
        self.storage = storage
        self.key = key
        self.capacity = capacity

    def _read_raw(self) -> list:
        raw = self.storage.get(self.key)
        if not raw:
            return []
        records = json.loads(raw)
        if not isinstance(records, list):
            raise ValueError(f"History under '{self.key}' is not a list")
        return records

    def _write(self, entries: List[SearchHistoryEntry]) -> None:
        payload = [entry.to_dict() for entry in entries[: self.capacity]]
        self.storage.set(self.key, json.dumps(payload, ensure_ascii=False))

    def save(
        self,
        query: str,
        results_count: int,
        clicked_results: Optional[List[str]] = None,
    ) -> SearchHistoryEntry:
        """Record a completed search.

        Args:
            query: Query as typed (stored trimmed)
            results_count: Number of results the search returned
            clicked_results: Result IDs already clicked, if any

        Returns:
            The new entry, even when persisting it failed
        """
        entry = SearchHistoryEntry(
            id=_generate_id(),
            query=query.strip(),
            timestamp=datetime.now(timezone.utc),
            results_count=max(0, int(results_count)),
            clicked_results=list(clicked_results or []),
        )

        try:
            existing = self._read_raw()
            updated = [entry.to_dict()] + existing
            self.storage.set(self.key, json.dumps(updated[: self.capacity], ensure_ascii=False))
        except _STORAGE_ERRORS as e:
            logger.warning("Failed to save search history: %s", e)

        return entry

    def load(self) -> List[SearchHistoryEntry]:
        """Return all entries, newest first.

        Empty when the log cannot be read or is not a list. Malformed
        records are skipped so the rest of the log still loads.
        """
        try:
            records = self._read_raw()
        except _STORAGE_ERRORS as e:
            logger.warning("Failed to load search history: %s", e)
            return []

        entries = []
        for record in records:
            try:
                entries.append(SearchHistoryEntry.from_dict(record))
            except (ValueError, TypeError, KeyError) as e:
                logger.warning("Skipping malformed search history record: %s", e)
        return entries

    def clear(self) -> None:
        """Remove the whole log."""
        try:
            self.storage.remove(self.key)
        except _STORAGE_ERRORS as e:
            logger.warning("Failed to clear search history: %s", e)

    def record_click(self, entry_id: str, result_id: str) -> bool:
        """Append a clicked result ID to an existing entry.

        Args:
            entry_id: ID of the history entry
            result_id: ID of the result the user opened

        Returns:
            True if the entry was found
        """
        entries = self.load()
        for entry in entries:
            if entry.id == entry_id:
                if result_id not in entry.clicked_results:
                    entry.clicked_results.append(result_id)
                    try:
                        self._write(entries)
                    except _STORAGE_ERRORS as e:
                        logger.warning("Failed to record result click: %s", e)
                return True
        return False

    def get_popular_searches(self, limit: int = 10) -> List[str]:
        """Most frequent exact query strings, most frequent first.

        Ties keep the order in which queries were first met in the log.
        """
        return [popular.query for popular in self.get_popular(limit)]

    def get_popular(self, limit: int = 10) -> List[PopularSearch]:
        """Most frequent queries with counts and a trend.

        The trend compares how often a query appears in the newer half of
        the log against the older half. In an odd-length log the middle
        entry belongs to neither half.
        """
        entries = self.load()
        counts = Counter(entry.query for entry in entries)
        # Counter keeps first-insertion order and sorted() is stable
        ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)[:limit]

        half = len(entries) // 2
        newer = Counter(entry.query for entry in entries[:half])
        older = Counter(entry.query for entry in entries[len(entries) - half:])

        popular = []
        for query, count in ranked:
            if newer[query] > older[query]:
                trend = "up"
            elif newer[query] < older[query]:
                trend = "down"
            else:
                trend = "stable"
            popular.append(PopularSearch(query=query, count=count, trend=trend))
        return popular

    def get_analytics(self, top: int = 10) -> SearchAnalytics:
        """Summarize the stored history."""
        entries = self.load()
        if not entries:
            return SearchAnalytics()

        total = len(entries)
        no_results: List[str] = []
        for entry in entries:
            if entry.results_count == 0 and entry.query not in no_results:
                no_results.append(entry.query)

        return SearchAnalytics(
            total_searches=total,
            unique_queries=len({entry.query for entry in entries}),
            average_results_per_query=sum(e.results_count for e in entries) / total,
            top_queries=self.get_popular(top),
            no_results_queries=no_results,
            click_through_rate=sum(1 for e in entries if e.clicked_results) / total,
        )
