"""geoitaly: fuzzy search and lookups over Italian regions, provinces and municipalities."""

from geoitaly.catalog import GeoCatalog
from geoitaly.core.errors import DatasetLoadError
from geoitaly.core.types import (
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
from geoitaly.search.validation import is_valid_postal_code

__all__ = [
    "DatasetLoadError",
    "GeoCatalog",
    "MacroArea",
    "Municipality",
    "Province",
    "ProvinceType",
    "Region",
    "RegionType",
    "SearchFilters",
    "SearchOptions",
    "SearchResult",
    "is_valid_postal_code",
]
