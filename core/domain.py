"""Core-native domain models for the favourites store.

Privacy: a favourite is an opaque taxon ID plus the UTC time it was added.
Neither field identifies a person, and nothing here performs network I/O.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

# Opaque 64-bit species catalogue key. Not a user identifier.
TaxonID = int

TAXON_ID_MIN = -(2 ** 63)
TAXON_ID_MAX = 2 ** 63 - 1

# Fixed-width on-disk form: text ordering equals chronological ordering.
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"
LEGACY_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


@dataclass(frozen=True, slots=True)
class FavouriteEntry:
    """A single favourite record, as returned by the listing operation."""

    taxon_id: TaxonID
    created_at: datetime

    @property
    def id(self) -> TaxonID:
        """Stable identity for list diffing."""
        return self.taxon_id


class FavoritesStorageError(Exception):
    """Base class for failures of the favourites persistent store."""

    def __init__(self, message: str, operation: str = ""):
        super().__init__(message)
        self.operation = operation


class StorageUnavailable(FavoritesStorageError):
    """The storage directory or database file could not be opened."""


class StorageReadError(FavoritesStorageError):
    """A read against an open store failed."""


class StorageWriteError(FavoritesStorageError):
    """A mutating store operation failed and was rolled back."""


def is_valid_taxon_id(value: object) -> bool:
    """Return True if *value* fits the signed 64-bit taxon ID domain."""
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    return TAXON_ID_MIN <= value <= TAXON_ID_MAX


def validate_taxon_id(value: object) -> TaxonID:
    """Return *value* unchanged, or raise if it cannot be a taxon ID."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"taxon ID must be an int, got {type(value).__name__}")
    if not TAXON_ID_MIN <= value <= TAXON_ID_MAX:
        raise ValueError(f"taxon ID {value} is outside the signed 64-bit range")
    return value


def format_timestamp(moment: datetime) -> str:
    """Format *moment* as millisecond-precision ISO-8601 UTC (``...SS.mmmZ``)."""
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.strftime(TIMESTAMP_FORMAT)[:-4] + "Z"


def parse_timestamp(raw: str) -> datetime:
    """Parse a stored ``created_at`` value into an aware UTC datetime.

    Accepts the current millisecond form and the legacy seconds form.
    """
    for fmt in (TIMESTAMP_FORMAT, LEGACY_TIMESTAMP_FORMAT):
        try:
            return datetime.strptime(raw, fmt).replace(tzinfo=timezone.utc)
        except ValueError:
            continue
    raise ValueError(f"Unrecognised timestamp: {raw!r}")


def utc_now_timestamp() -> str:
    return format_timestamp(datetime.now(timezone.utc))


__all__ = [
    "TaxonID",
    "TAXON_ID_MIN",
    "TAXON_ID_MAX",
    "FavouriteEntry",
    "FavoritesStorageError",
    "StorageUnavailable",
    "StorageReadError",
    "StorageWriteError",
    "is_valid_taxon_id",
    "validate_taxon_id",
    "format_timestamp",
    "parse_timestamp",
    "utc_now_timestamp",
]
