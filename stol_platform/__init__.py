"""Platform layer: local favourites persistence and the cached service."""

__version__ = "1.0.0"

from .persistence import InMemoryFavoritesStore, SQLiteFavoritesStore
from .services import (
    FavoritesServiceImpl,
    open_favorites_service,
    open_favorites_service_async,
)

__all__ = [
    "__version__",
    "FavoritesServiceImpl",
    "InMemoryFavoritesStore",
    "SQLiteFavoritesStore",
    "open_favorites_service",
    "open_favorites_service_async",
]
