"""SQLite-backed implementation of the favourites store port."""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path

from core.domain import (
    FavouriteEntry,
    StorageReadError,
    StorageWriteError,
)

from .database import database_size_bytes, get_connection, get_db_path
from .favorite_store import FavoriteStore

logger = logging.getLogger(__name__)


class SQLiteFavoritesStore:
    """Owns the single logical connection to ``favorites.sqlite``.

    Not thread-safe on its own: the favourites service serialises every call.
    Each write commits fully or is rolled back before the error propagates.
    """

    def __init__(self, conn: sqlite3.Connection, db_path: Path | None = None):
        self._conn: sqlite3.Connection | None = conn
        self.db_path = db_path

    @classmethod
    def open(cls, base_dir: Path) -> "SQLiteFavoritesStore":
        """Initialise the store under ``base_dir/Favorites/``.

        Raises ``StorageUnavailable`` if the directory or database cannot be
        opened.
        """
        conn = get_connection(base_dir)
        return cls(conn, db_path=get_db_path(base_dir))

    @property
    def conn(self) -> sqlite3.Connection:
        if self._conn is None:
            raise sqlite3.ProgrammingError("Cannot operate on a closed favourites store.")
        return self._conn

    # -- writes --------------------------------------------------------------

    def insert(self, taxon_id: int) -> None:
        self._write("insert", FavoriteStore.insert, taxon_id)

    def delete(self, taxon_id: int) -> None:
        self._write("delete", FavoriteStore.delete, taxon_id)

    def delete_all(self) -> None:
        self._write("delete_all", FavoriteStore.delete_all)

    # -- reads ---------------------------------------------------------------

    def fetch_all_ordered_by_created_desc(self) -> list[FavouriteEntry]:
        return self._read("fetch_all", FavoriteStore.list_all)

    def fetch_all_keys(self) -> set[int]:
        return self._read("fetch_all_keys", FavoriteStore.list_keys)

    def size_in_bytes(self) -> int:
        return self._read("size_in_bytes", database_size_bytes)

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    # -- helpers -------------------------------------------------------------

    def _write(self, operation: str, func, *args):
        try:
            return func(self.conn, *args)
        except sqlite3.Error as exc:
            if self._conn is not None:
                try:
                    self._conn.rollback()
                except sqlite3.Error:
                    logger.warning("Rollback after failed %s also failed", operation)
            raise StorageWriteError(
                f"Favourites {operation} failed: {exc}", operation=operation
            ) from exc

    def _read(self, operation: str, func, *args):
        try:
            return func(self.conn, *args)
        except (sqlite3.Error, ValueError) as exc:
            raise StorageReadError(
                f"Favourites {operation} failed: {exc}", operation=operation
            ) from exc


__all__ = ["SQLiteFavoritesStore"]
