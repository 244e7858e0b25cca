"""Platform-owned SQLite database primitives."""

import logging
import sqlite3
from pathlib import Path

from core.domain import StorageUnavailable
from stol_platform.runtime.config import DB_FILE, FAVORITES_DIRNAME

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 2


def get_favorites_dir(base_dir: Path) -> Path:
    """Return the ``Favorites/`` directory under *base_dir*."""
    return Path(base_dir) / FAVORITES_DIRNAME


def get_db_path(base_dir: Path) -> Path:
    """Return the path to the favourites SQLite database."""
    return get_favorites_dir(base_dir) / DB_FILE


def get_connection(base_dir: Path) -> sqlite3.Connection:
    """Open (or create) the favourites database and ensure the schema exists.

    Creates ``Favorites/`` (and any missing parents) under *base_dir*.
    Returns a ``sqlite3.Connection`` with WAL mode enabled. The connection
    may be used from a worker thread; callers must serialise access.

    Raises ``StorageUnavailable`` if the directory cannot be created or the
    database cannot be opened.
    """
    favorites_dir = get_favorites_dir(base_dir)
    try:
        favorites_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise StorageUnavailable(
            f"Cannot create favourites directory {favorites_dir}: {exc}",
            operation="initialize",
        ) from exc

    db_path = favorites_dir / DB_FILE
    conn = None
    try:
        conn = sqlite3.connect(str(db_path), check_same_thread=False)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA journal_mode=WAL")
        init_db(conn)
    except sqlite3.Error as exc:
        if conn is not None:
            conn.close()
        raise StorageUnavailable(
            f"Cannot open favourites database {db_path}: {exc}",
            operation="initialize",
        ) from exc

    logger.info("Opened favourites database at %s", db_path)
    return conn


def init_db(conn: sqlite3.Connection) -> None:
    """Create tables if they don't exist and apply migrations."""
    # A legacy table must be rebuilt before the index script runs against it.
    if _has_legacy_rowid_key(conn):
        _migrate_key_off_rowid(conn)

    conn.executescript(_SCHEMA_SQL)

    row = conn.execute("SELECT MAX(version) FROM schema_version").fetchone()
    current = row[0] if row[0] is not None else 0

    if current < SCHEMA_VERSION:
        conn.execute(
            "INSERT OR REPLACE INTO schema_version (version) VALUES (?)",
            (SCHEMA_VERSION,),
        )
        conn.commit()


def database_size_bytes(conn: sqlite3.Connection) -> int:
    """Return the database footprint as page count times page size."""
    page_count = conn.execute("PRAGMA page_count").fetchone()[0]
    page_size = conn.execute("PRAGMA page_size").fetchone()[0]
    return int(page_count) * int(page_size)


def _table_columns(conn: sqlite3.Connection, table: str) -> list[sqlite3.Row]:
    return conn.execute(f"PRAGMA table_info({table})").fetchall()


def _has_legacy_rowid_key(conn: sqlite3.Connection) -> bool:
    """Return True if ``favorites.taxon_id`` is declared ``INTEGER PRIMARY KEY``.

    That declaration makes the key an alias of the rowid, so the rowid no
    longer records insertion order.
    """
    for col in _table_columns(conn, "favorites"):
        if col[1] == "taxon_id":
            return bool(col[5]) and str(col[2]).upper() == "INTEGER"
    return False


def _migrate_key_off_rowid(conn: sqlite3.Connection) -> None:
    """Rebuild a v1 ``favorites`` table so the rowid tracks insertion order."""
    logger.info("Applying DB migration: rebuild favorites with BIGINT key")
    conn.execute("BEGIN")
    try:
        conn.execute("DROP TABLE IF EXISTS favorites_new")
        conn.execute(
            """CREATE TABLE favorites_new (
                   taxon_id BIGINT NOT NULL PRIMARY KEY,
                   created_at TEXT NOT NULL
                       DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now'))
               )"""
        )
        # Widen seconds-only timestamps to the millisecond form so text order
        # stays chronological next to rows written after the rebuild.
        conn.execute(
            """INSERT INTO favorites_new (taxon_id, created_at)
               SELECT taxon_id, created
               FROM (SELECT taxon_id,
                            CASE WHEN length(created_at) = 20
                                 THEN substr(created_at, 1, 19) || '.000Z'
                                 ELSE created_at END AS created
                     FROM favorites)
               ORDER BY created ASC, taxon_id ASC"""
        )
        conn.execute("DROP TABLE favorites")
        conn.execute("ALTER TABLE favorites_new RENAME TO favorites")
        conn.commit()
    except Exception:
        conn.rollback()
        raise


_SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS schema_version (
    version INTEGER PRIMARY KEY
);

CREATE TABLE IF NOT EXISTS favorites (
    taxon_id BIGINT NOT NULL PRIMARY KEY,
    created_at TEXT NOT NULL
        DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now'))
);

CREATE INDEX IF NOT EXISTS idx_favorites_created ON favorites(created_at DESC);
"""


__all__ = [
    "SCHEMA_VERSION",
    "get_favorites_dir",
    "get_db_path",
    "get_connection",
    "init_db",
    "database_size_bytes",
]
