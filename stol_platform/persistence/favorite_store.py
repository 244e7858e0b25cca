"""Platform-owned favourite store."""

import sqlite3

from core.domain import FavouriteEntry, parse_timestamp, utc_now_timestamp


class FavoriteStore:
    """CRUD operations for favourite records."""

    @staticmethod
    def insert(conn: sqlite3.Connection, taxon_id: int,
               created_at: str | None = None) -> bool:
        """Insert a favourite unless it already exists.

        An existing row keeps its original ``created_at``. Returns True if a
        row was written.
        """
        cursor = conn.execute(
            "INSERT OR IGNORE INTO favorites (taxon_id, created_at) VALUES (?, ?)",
            (taxon_id, created_at or utc_now_timestamp()),
        )
        conn.commit()
        return cursor.rowcount > 0

    @staticmethod
    def delete(conn: sqlite3.Connection, taxon_id: int) -> bool:
        """Delete a favourite. Returns True if a row was removed."""
        cursor = conn.execute(
            "DELETE FROM favorites WHERE taxon_id = ?", (taxon_id,)
        )
        conn.commit()
        return cursor.rowcount > 0

    @staticmethod
    def delete_all(conn: sqlite3.Connection) -> int:
        """Delete every favourite. Returns the number of rows removed."""
        cursor = conn.execute("DELETE FROM favorites")
        conn.commit()
        return cursor.rowcount

    @staticmethod
    def list_all(conn: sqlite3.Connection) -> list[FavouriteEntry]:
        """All favourites, newest first; equal timestamps newest insert first."""
        rows = conn.execute(
            "SELECT taxon_id, created_at FROM favorites "
            "ORDER BY created_at DESC, rowid DESC"
        ).fetchall()
        return [FavoriteStore._row_to_entry(r) for r in rows]

    @staticmethod
    def list_keys(conn: sqlite3.Connection) -> set[int]:
        rows = conn.execute("SELECT taxon_id FROM favorites").fetchall()
        return {r[0] for r in rows}

    @staticmethod
    def _row_to_entry(row: sqlite3.Row) -> FavouriteEntry:
        return FavouriteEntry(
            taxon_id=row["taxon_id"],
            created_at=parse_timestamp(row["created_at"]),
        )


__all__ = ["FavoriteStore"]
