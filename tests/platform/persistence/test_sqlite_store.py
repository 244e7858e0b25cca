"""
Tests for SQLiteFavoritesStore: the port adapter over the favourites database.
"""

import sqlite3

import pytest

from core.domain import StorageReadError, StorageUnavailable, StorageWriteError
from stol_platform.persistence import FavoriteStore, SQLiteFavoritesStore


def test_open_creates_database(app_support_dir):
    store = SQLiteFavoritesStore.open(app_support_dir)
    try:
        assert store.db_path == app_support_dir / "Favorites" / "favorites.sqlite"
        assert store.db_path.exists()
    finally:
        store.close()


def test_open_failure_is_storage_unavailable(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x", encoding="utf-8")
    with pytest.raises(StorageUnavailable):
        SQLiteFavoritesStore.open(blocker)


def test_crud_round_trip(sqlite_store):
    sqlite_store.insert(10)
    sqlite_store.insert(20)
    sqlite_store.insert(30)
    sqlite_store.insert(20)

    assert sqlite_store.fetch_all_keys() == {10, 20, 30}
    assert [e.taxon_id for e in sqlite_store.fetch_all_ordered_by_created_desc()] == [30, 20, 10]

    sqlite_store.delete(20)
    sqlite_store.delete(20)
    assert sqlite_store.fetch_all_keys() == {10, 30}

    sqlite_store.delete_all()
    assert sqlite_store.fetch_all_keys() == set()


def test_size_in_bytes_positive(sqlite_store):
    sqlite_store.insert(1)
    assert sqlite_store.size_in_bytes() > 0


def test_failed_insert_raises_write_error_and_rolls_back(sqlite_store, write_failures):
    sqlite_store.insert(1)
    write_failures.on(sqlite_store.conn)

    with pytest.raises(StorageWriteError) as exc_info:
        sqlite_store.insert(2)
    assert exc_info.value.operation == "insert"
    assert isinstance(exc_info.value.__cause__, sqlite3.Error)

    write_failures.off(sqlite_store.conn)
    assert sqlite_store.fetch_all_keys() == {1}
    assert not sqlite_store.conn.in_transaction


def test_failed_delete_all_leaves_every_row(sqlite_store, write_failures):
    for taxon_id in (1, 2, 3):
        sqlite_store.insert(taxon_id)
    write_failures.on(sqlite_store.conn)

    with pytest.raises(StorageWriteError):
        sqlite_store.delete_all()

    write_failures.off(sqlite_store.conn)
    assert sqlite_store.fetch_all_keys() == {1, 2, 3}


def test_store_usable_after_write_failure(sqlite_store, write_failures):
    write_failures.on(sqlite_store.conn)
    with pytest.raises(StorageWriteError):
        sqlite_store.insert(5)
    write_failures.off(sqlite_store.conn)

    sqlite_store.insert(5)
    assert sqlite_store.fetch_all_keys() == {5}


def test_corrupt_timestamp_is_read_error(sqlite_store):
    sqlite_store.conn.execute(
        "INSERT INTO favorites (taxon_id, created_at) VALUES (1, 'not-a-time')"
    )
    sqlite_store.conn.commit()

    with pytest.raises(StorageReadError):
        sqlite_store.fetch_all_ordered_by_created_desc()
    # Keys alone are still readable
    assert sqlite_store.fetch_all_keys() == {1}


def test_operations_after_close(app_support_dir):
    store = SQLiteFavoritesStore.open(app_support_dir)
    store.close()
    store.close()

    with pytest.raises(StorageReadError):
        store.fetch_all_keys()
    with pytest.raises(StorageWriteError):
        store.insert(1)


def test_data_persists_across_reopen(app_support_dir):
    store = SQLiteFavoritesStore.open(app_support_dir)
    store.insert(77)
    store.close()

    store = SQLiteFavoritesStore.open(app_support_dir)
    try:
        assert store.fetch_all_keys() == {77}
        assert [e.taxon_id for e in FavoriteStore.list_all(store.conn)] == [77]
    finally:
        store.close()
