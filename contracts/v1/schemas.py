"""Pydantic contracts for the v1 favourites output surface."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from core.domain import TAXON_ID_MAX, TAXON_ID_MIN


class _StrictModel(BaseModel):
    """Base model that rejects unknown fields."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class FavouriteEntryContract(_StrictModel):
    taxon_id: int = Field(ge=TAXON_ID_MIN, le=TAXON_ID_MAX)
    created_at: datetime


class FavouritesListResponse(_StrictModel):
    favourites: list[FavouriteEntryContract] = Field(default_factory=list)
    count: int = Field(ge=0)


class FavouriteStatusResponse(_StrictModel):
    taxon_id: int = Field(ge=TAXON_ID_MIN, le=TAXON_ID_MAX)
    is_favourite: bool


class ToggleResponse(_StrictModel):
    taxon_id: int = Field(ge=TAXON_ID_MIN, le=TAXON_ID_MAX)
    is_favourite: bool = Field(description="State after the toggle")


class StorageReportResponse(_StrictModel):
    count: int = Field(ge=0)
    storage_bytes: int = Field(ge=0)
