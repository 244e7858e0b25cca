"""Platform-owned favourites service.

Wraps a favourites store behind a serialised async facade and keeps an
in-memory mirror of favourited taxon IDs for O(1) membership checks.

Privacy: only opaque taxon IDs and creation timestamps are stored. The data
lives in ``<base_dir>/Favorites/favorites.sqlite`` and is never transmitted.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from core.domain import (
    FavouriteEntry,
    StorageReadError,
    StorageUnavailable,
    TaxonID,
    is_valid_taxon_id,
    validate_taxon_id,
)
from core.ports import FavoritesStorePort
from stol_platform.persistence import SQLiteFavoritesStore

logger = logging.getLogger(__name__)


class FavoritesServiceImpl:
    """Write-through cache over a favourites store.

    All store-touching operations run one at a time, in call order, under a
    single ``asyncio.Lock``; the blocking store call itself runs on a worker
    thread. The mirror is updated only after the store call succeeded, so a
    failed mutation leaves the mirror exactly as it was.
    """

    def __init__(self, store: FavoritesStorePort):
        try:
            keys = store.fetch_all_keys()
        except StorageReadError as exc:
            raise StorageUnavailable(
                f"Cannot load favourites: {exc}", operation="initialize"
            ) from exc

        self._store = store
        self._cached_ids: set[TaxonID] = set(keys)
        self._lock = asyncio.Lock()
        self._closed = False

    # -- querying ------------------------------------------------------------

    async def is_favourite(self, taxon_id: TaxonID) -> bool:
        """Return True if the taxon is currently favourited (mirror only)."""
        if not is_valid_taxon_id(taxon_id):
            return False
        return taxon_id in self._cached_ids

    async def favourites_count(self) -> int:
        return len(self._cached_ids)

    async def all_favourites(self) -> list[FavouriteEntry]:
        """All favourites, most recently added first."""
        return await self._run(self._fetch_all)

    async def storage_bytes(self) -> int:
        """Approximate on-disk size of the favourites database in bytes."""
        return await self._run(self._size)

    # -- mutations -----------------------------------------------------------

    async def add_favourite(self, taxon_id: TaxonID) -> None:
        """Add a taxon to favourites. No-op if already favourited."""
        validate_taxon_id(taxon_id)
        await self._run(self._add, taxon_id)

    async def remove_favourite(self, taxon_id: TaxonID) -> None:
        """Remove a taxon from favourites. No-op if not favourited."""
        validate_taxon_id(taxon_id)
        await self._run(self._remove, taxon_id)

    async def toggle_favourite(self, taxon_id: TaxonID) -> bool:
        """Flip favourite status and return the new state."""
        validate_taxon_id(taxon_id)
        return await self._run(self._toggle, taxon_id)

    async def clear_all_favourites(self) -> None:
        """Permanently delete every favourite entry.

        Explicit user-initiated action; nothing triggers it automatically.
        """
        await self._run(self._clear)

    # -- lifecycle -----------------------------------------------------------

    async def close(self) -> None:
        await self._run(self._close)

    async def __aenter__(self) -> "FavoritesServiceImpl":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    # -- helpers -------------------------------------------------------------

    async def _run(self, func, *args):
        """Run *func* under the lock in its own shielded task.

        A cancelled caller stops waiting, but the lock stays held until the
        worker thread returns, so the store call and the mirror update still
        complete together and no other call reaches the connection meanwhile.
        """
        task = asyncio.ensure_future(self._serialised(func, *args))
        try:
            return await asyncio.shield(task)
        except asyncio.CancelledError:
            task.add_done_callback(_log_orphaned_result)
            raise

    async def _serialised(self, func, *args):
        async with self._lock:
            return await func(*args)

    # The methods below assume the caller holds the lock.

    async def _fetch_all(self) -> list[FavouriteEntry]:
        return await asyncio.to_thread(self._store.fetch_all_ordered_by_created_desc)

    async def _size(self) -> int:
        return await asyncio.to_thread(self._store.size_in_bytes)

    async def _close(self) -> None:
        if self._closed:
            return
        await asyncio.to_thread(self._store.close)
        self._closed = True

    async def _toggle(self, taxon_id: TaxonID) -> bool:
        if taxon_id in self._cached_ids:
            await self._remove(taxon_id)
            return False
        await self._add(taxon_id)
        return True

    async def _clear(self) -> None:
        try:
            await asyncio.to_thread(self._store.delete_all)
        except Exception:
            logger.warning("Clearing favourites failed; mirror left unchanged")
            raise
        self._cached_ids = set()
        logger.debug("Cleared all favourites")

    async def _add(self, taxon_id: TaxonID) -> None:
        if taxon_id in self._cached_ids:
            return
        try:
            await asyncio.to_thread(self._store.insert, taxon_id)
        except Exception:
            logger.warning("Adding favourite %d failed; mirror left unchanged", taxon_id)
            raise
        self._cached_ids.add(taxon_id)
        logger.debug("Added favourite %d", taxon_id)

    async def _remove(self, taxon_id: TaxonID) -> None:
        if taxon_id not in self._cached_ids:
            return
        try:
            await asyncio.to_thread(self._store.delete, taxon_id)
        except Exception:
            logger.warning("Removing favourite %d failed; mirror left unchanged", taxon_id)
            raise
        self._cached_ids.discard(taxon_id)
        logger.debug("Removed favourite %d", taxon_id)


def _log_orphaned_result(task: asyncio.Task) -> None:
    # Nobody awaits the task once its caller is cancelled; retrieve the
    # exception here so the loop does not report it as never retrieved.
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.warning("Favourites operation failed after its caller was cancelled: %s", exc)


def open_favorites_service(base_dir: Path) -> FavoritesServiceImpl:
    """Open the SQLite-backed favourites service under *base_dir*.

    Blocks while the database is created, migrated and read. From a running
    event loop use :func:`open_favorites_service_async` instead.

    Raises ``StorageUnavailable`` if the store cannot be initialised; no
    partially-initialised service is returned.
    """
    store = SQLiteFavoritesStore.open(Path(base_dir))
    try:
        return FavoritesServiceImpl(store)
    except StorageUnavailable:
        store.close()
        raise


async def open_favorites_service_async(base_dir: Path) -> FavoritesServiceImpl:
    """Like :func:`open_favorites_service`, with the opening work on a worker thread."""
    return await asyncio.to_thread(open_favorites_service, base_dir)


__all__ = [
    "FavoritesServiceImpl",
    "open_favorites_service",
    "open_favorites_service_async",
]
