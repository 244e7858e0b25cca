"""v1 contract schemas and adapters."""

__version__ = "1.0.0"

from .adapters import entries_to_list_response, entry_to_contract
from .schemas import (
    FavouriteEntryContract,
    FavouriteStatusResponse,
    FavouritesListResponse,
    StorageReportResponse,
    ToggleResponse,
)

__all__ = [
    "__version__",
    "FavouriteEntryContract",
    "FavouriteStatusResponse",
    "FavouritesListResponse",
    "StorageReportResponse",
    "ToggleResponse",
    "entries_to_list_response",
    "entry_to_contract",
]
