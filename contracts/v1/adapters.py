"""Adapters from favourites domain types to v1 contracts."""

from __future__ import annotations

from core.domain import FavouriteEntry

from .schemas import FavouriteEntryContract, FavouritesListResponse


def entry_to_contract(entry: FavouriteEntry) -> FavouriteEntryContract:
    return FavouriteEntryContract(taxon_id=entry.taxon_id, created_at=entry.created_at)


def entries_to_list_response(entries: list[FavouriteEntry]) -> FavouritesListResponse:
    """Wrap an ordered listing, preserving its order."""
    return FavouritesListResponse(
        favourites=[entry_to_contract(e) for e in entries],
        count=len(entries),
    )
