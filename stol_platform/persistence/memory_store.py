"""In-memory implementation of the favourites store port.

Used as a test double in place of the SQLite store. Ordering and
idempotence match the durable store; nothing is written to disk.
"""

from __future__ import annotations

import itertools
from datetime import datetime, timezone

from core.domain import FavouriteEntry, StorageReadError, StorageWriteError


class InMemoryFavoritesStore:
    """Dict-backed favourites store with optional failure injection.

    Set ``fail_writes`` / ``fail_reads`` to make the next operations raise the
    same typed errors the SQLite store raises. A failing write leaves the
    data untouched.
    """

    # Nominal per-row footprint reported by size_in_bytes()
    ROW_BYTES = 64

    def __init__(self, *, clock=None):
        self._rows: dict[int, tuple[datetime, int]] = {}
        self._sequence = itertools.count(1)
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self.fail_writes = False
        self.fail_reads = False
        self.closed = False
        self.calls: list[str] = []

    def insert(self, taxon_id: int) -> None:
        self._check_write("insert")
        if taxon_id not in self._rows:
            self._rows[taxon_id] = (self._clock(), next(self._sequence))

    def delete(self, taxon_id: int) -> None:
        self._check_write("delete")
        self._rows.pop(taxon_id, None)

    def delete_all(self) -> None:
        self._check_write("delete_all")
        self._rows.clear()

    def fetch_all_ordered_by_created_desc(self) -> list[FavouriteEntry]:
        self._check_read("fetch_all")
        ordered = sorted(
            self._rows.items(),
            key=lambda item: (item[1][0], item[1][1]),
            reverse=True,
        )
        return [FavouriteEntry(taxon_id=k, created_at=v[0]) for k, v in ordered]

    def fetch_all_keys(self) -> set[int]:
        self._check_read("fetch_all_keys")
        return set(self._rows)

    def size_in_bytes(self) -> int:
        self._check_read("size_in_bytes")
        return len(self._rows) * self.ROW_BYTES

    def close(self) -> None:
        self.closed = True

    def _check_write(self, operation: str) -> None:
        self.calls.append(operation)
        if self.fail_writes:
            raise StorageWriteError(f"Simulated {operation} failure", operation=operation)

    def _check_read(self, operation: str) -> None:
        self.calls.append(operation)
        if self.fail_reads:
            raise StorageReadError(f"Simulated {operation} failure", operation=operation)


__all__ = ["InMemoryFavoritesStore"]
