"""Core domain types shared across all geoitaly modules."""

from geoitaly.core.errors import DatasetLoadError, GeoItalyError, InvalidRecordError
from geoitaly.core.types import (
    CatalogStats,
    Coordinates,
    MacroArea,
    Municipality,
    Province,
    ProvinceType,
    Region,
    RegionType,
    SearchFilters,
    SearchOptions,
    SearchResult,
)

__all__ = [
    "CatalogStats",
    "Coordinates",
    "DatasetLoadError",
    "GeoItalyError",
    "InvalidRecordError",
    "MacroArea",
    "Municipality",
    "Province",
    "ProvinceType",
    "Region",
    "RegionType",
    "SearchFilters",
    "SearchOptions",
    "SearchResult",
]
