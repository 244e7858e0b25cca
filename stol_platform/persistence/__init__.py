"""Platform-owned persistence layer (database and stores)."""

from .database import (
    SCHEMA_VERSION,
    database_size_bytes,
    get_connection,
    get_db_path,
    get_favorites_dir,
    init_db,
)
from .favorite_store import FavoriteStore
from .memory_store import InMemoryFavoritesStore
from .sqlite_store import SQLiteFavoritesStore
