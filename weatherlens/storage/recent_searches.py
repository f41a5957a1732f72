"""Capped, de-duplicated list of recent place searches."""

import json
import logging
import sqlite3
import uuid

from weatherlens.models.common import now_epoch_ms
from weatherlens.models.search import RecentSearch
from weatherlens.storage import kv_repo

logger = logging.getLogger(__name__)

DEFAULT_KEY = "recent_searches"
DEFAULT_MAX_ENTRIES = 5


class RecentSearchStore:
    """Most-recent-first search history kept in a single key/value slot.

    Writes are read-modify-write with no transaction guard; there is a
    single local writer.
    """

    def __init__(
        self,
        conn: sqlite3.Connection,
        key: str = DEFAULT_KEY,
        max_entries: int = DEFAULT_MAX_ENTRIES,
    ):
        self.conn = conn
        self.key = key
        self.max_entries = max_entries

    def load(self) -> list[RecentSearch]:
        """Return the stored list. Unreadable data is treated as empty."""
        raw = kv_repo.get_value(self.conn, self.key)
        if raw is None:
            return []
        try:
            items = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Discarding unparsable recent searches under %r", self.key)
            return []
        if not isinstance(items, list):
            logger.warning("Recent searches under %r is not a list", self.key)
            return []

        searches = []
        for item in items:
            try:
                searches.append(RecentSearch.from_dict(item))
            except (KeyError, TypeError, ValueError):
                logger.warning("Skipping malformed recent search entry: %r", item)
        return searches

    def add(self, name: str, now_ms: int | None = None) -> list[RecentSearch]:
        """Put name at the front, dropping older entries with the same name.

        Names compare case-insensitively; the newest casing wins.
        """
        name = name.strip()
        current = self.load()
        if not name:
            return current

        entry = RecentSearch(
            id=uuid.uuid4().hex,
            name=name,
            timestamp=now_ms if now_ms is not None else now_epoch_ms(),
        )
        folded = name.casefold()
        updated = [entry] + [s for s in current if s.name.casefold() != folded]
        updated = updated[: self.max_entries]
        self._save(updated)
        return updated

    def clear(self) -> None:
        kv_repo.delete_value(self.conn, self.key)

    def _save(self, searches: list[RecentSearch]) -> None:
        kv_repo.set_value(self.conn, self.key, json.dumps([s.to_dict() for s in searches]))
