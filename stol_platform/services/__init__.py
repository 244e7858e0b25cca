"""Platform-owned workflow services."""

from .favorites_service import (
    FavoritesServiceImpl,
    open_favorites_service,
    open_favorites_service_async,
)
