"""Bucket tables -- the aggregation store delivery-log components write to.

A bucket table aggregates delivery events by a small set of key fields
(e.g. interval start, creative and zone). :meth:`BucketStore.update_table`
is an upsert: the first event for a key creates the row, later events bump
its ``count``.

The database-backed store lives with the delivery engine; this module only
defines the interface and an in-memory implementation.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

logger = logging.getLogger(__name__)

BucketKey = tuple[tuple[str, Any], ...]


class BucketStore(ABC):
    """Destination of bucket-table upserts."""

    @abstractmethod
    def update_table(self, table: str, query: Mapping[str, Any]) -> bool:
        """Upsert one event into *table*, keyed by the values in *query*.

        Returns:
            ``True`` if the row was written.
        """


class MemoryBucketStore(BucketStore):
    """Keeps bucket rows in memory.

    Attributes:
        calls: Every ``(table, query)`` pair received, in order.
    """

    def __init__(self) -> None:
        self._tables: dict[str, dict[BucketKey, int]] = {}
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def update_table(self, table: str, query: Mapping[str, Any]) -> bool:
        row = dict(query)
        self.calls.append((table, row))
        key: BucketKey = tuple(sorted(row.items()))
        rows = self._tables.setdefault(table, {})
        rows[key] = rows.get(key, 0) + 1
        logger.debug("Bucket %s: %s -> count %d", table, row, rows[key])
        return True

    def count(self, table: str, **key: Any) -> int:
        """Return the aggregated count for the row identified by *key*."""
        return self._tables.get(table, {}).get(tuple(sorted(key.items())), 0)

    def rows(self, table: str) -> list[dict[str, Any]]:
        """Return the rows of *table*, each with its ``count``."""
        return [
            {**dict(key), "count": count}
            for key, count in self._tables.get(table, {}).items()
        ]
