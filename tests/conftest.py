"""
Shared fixtures for stol-favorites tests.
"""

import sqlite3
from datetime import datetime, timedelta, timezone

import pytest

from stol_platform.persistence import (
    InMemoryFavoritesStore,
    SQLiteFavoritesStore,
    init_db,
)
from stol_platform.services import FavoritesServiceImpl, open_favorites_service_async


@pytest.fixture
def app_support_dir(tmp_path):
    """A fresh application data directory (the service creates Favorites/)."""
    return tmp_path / "AppSupport"


@pytest.fixture
def db_conn():
    """Create an in-memory SQLite connection with the favourites schema."""
    conn = sqlite3.connect(":memory:")
    conn.row_factory = sqlite3.Row
    init_db(conn)
    yield conn
    conn.close()


@pytest.fixture
def sqlite_store(app_support_dir):
    """A real on-disk store under the temp application data directory."""
    store = SQLiteFavoritesStore.open(app_support_dir)
    yield store
    store.close()


@pytest.fixture
async def service(app_support_dir):
    """SQLite-backed favourites service."""
    svc = await open_favorites_service_async(app_support_dir)
    yield svc
    await svc.close()


@pytest.fixture
def fixed_clock():
    """A controllable clock; call ``advance()`` to move it forward."""

    class _Clock:
        def __init__(self):
            self.now = datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

        def __call__(self):
            return self.now

        def advance(self, seconds: float = 1.0):
            self.now = self.now + timedelta(seconds=seconds)

    return _Clock()


@pytest.fixture
def memory_store(fixed_clock):
    """In-memory store double with failure injection switches."""
    return InMemoryFavoritesStore(clock=fixed_clock)


@pytest.fixture
def memory_service(memory_store):
    """Favourites service over the in-memory store double."""
    return FavoritesServiceImpl(memory_store)


@pytest.fixture
def write_failures():
    """Switch real SQLite write failures on/off for a store connection.

    Installs TEMP triggers that abort every INSERT/DELETE on ``favorites``,
    so the store sees a genuine ``sqlite3.Error`` mid-transaction.

    Usage:
        write_failures.on(store.conn)
        ...
        write_failures.off(store.conn)
    """

    class _WriteFailures:
        @staticmethod
        def on(conn: sqlite3.Connection, message: str = "disk I/O error") -> None:
            for event in ("INSERT", "DELETE"):
                conn.execute(
                    f"CREATE TEMP TRIGGER IF NOT EXISTS fail_{event.lower()} "
                    f"BEFORE {event} ON favorites "
                    f"BEGIN SELECT RAISE(ABORT, '{message}'); END"
                )

        @staticmethod
        def off(conn: sqlite3.Connection) -> None:
            conn.execute("DROP TRIGGER IF EXISTS temp.fail_insert")
            conn.execute("DROP TRIGGER IF EXISTS temp.fail_delete")

    return _WriteFailures()
