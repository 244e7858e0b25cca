"""Core ports for the favourites store and the favourites service."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from .domain import FavouriteEntry, TaxonID


@runtime_checkable
class FavoritesStorePort(Protocol):
    """Port for the durable table of favourite records.

    Every operation is atomic. Writes raise ``StorageWriteError`` and reads
    raise ``StorageReadError`` on failure.
    """

    def insert(self, taxon_id: TaxonID) -> None:
        """Insert-or-ignore: an existing row keeps its ``created_at``."""
        ...

    def delete(self, taxon_id: TaxonID) -> None:
        ...

    def delete_all(self) -> None:
        ...

    def fetch_all_ordered_by_created_desc(self) -> list[FavouriteEntry]:
        """Most recently added first; ties break by later insertion first."""
        ...

    def fetch_all_keys(self) -> set[TaxonID]:
        ...

    def size_in_bytes(self) -> int:
        ...

    def close(self) -> None:
        ...


@runtime_checkable
class FavoritesService(Protocol):
    """Local-only, privacy-safe favourites storage.

    All methods are async so callers are written uniformly; the mirror-only
    queries never suspend on I/O.
    """

    async def is_favourite(self, taxon_id: TaxonID) -> bool:
        ...

    async def favourites_count(self) -> int:
        ...

    async def all_favourites(self) -> list[FavouriteEntry]:
        ...

    async def add_favourite(self, taxon_id: TaxonID) -> None:
        ...

    async def remove_favourite(self, taxon_id: TaxonID) -> None:
        ...

    async def toggle_favourite(self, taxon_id: TaxonID) -> bool:
        """Return the new state: True if now favourited."""
        ...

    async def clear_all_favourites(self) -> None:
        ...

    async def storage_bytes(self) -> int:
        ...
