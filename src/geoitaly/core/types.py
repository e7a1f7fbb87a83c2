"""Domain types for the geoitaly reference catalog.

All shared dataclasses and enumerations live here to prevent circular
imports and establish a single source of truth for the domain model.
Every other module imports from here.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class RegionType(str, Enum):
    """Statute under which a region is governed."""

    ORDINARY = "statuto ordinario"
    SPECIAL = "statuto speciale"


class ProvinceType(str, Enum):
    PROVINCE = "Provincia"
    METROPOLITAN_CITY = "Città metropolitana"
    FREE_MUNICIPAL_CONSORTIUM = "Libero consorzio comunale"


class MacroArea(str, Enum):
    """The five ISTAT geographic macro-areas grouping the regions."""

    NORTH_WEST = "Nord-ovest"
    NORTH_EAST = "Nord-est"
    CENTRE = "Centro"
    SOUTH = "Sud"
    ISLANDS = "Isole"


# ---------------------------------------------------------------------------
# Catalog records
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Region:
    """An Italian region."""

    code: str
    name: str
    region_type: RegionType
    macro_area: MacroArea
    province_count: int
    municipality_count: int
    area_km2: float


@dataclass(frozen=True)
class Province:
    """A province, metropolitan city or free municipal consortium.

    Identified by ``(region_code, abbreviation)``.
    """

    region_code: str
    abbreviation: str
    name: str
    province_type: ProvinceType
    municipality_count: int
    area_km2: float
    supra_municipal_code: str


@dataclass(frozen=True)
class Coordinates:
    lat: float
    lng: float


@dataclass(frozen=True)
class Municipality:
    """A municipality (comune) with its postal code and hierarchy.

    ``alternate_name`` is None when the municipality has no materially
    different alternate name; it is never an empty string.
    """

    national_id: str
    name: str
    postal_code: str
    province_abbreviation: str
    province_name: str
    province_type: ProvinceType
    region_code: str
    region_name: str
    region_type: RegionType
    macro_area: MacroArea
    is_capital: bool
    cadastral_code: str
    coordinates: Coordinates
    area_km2: float
    alternate_name: str | None = None


# ---------------------------------------------------------------------------
# Search types
# ---------------------------------------------------------------------------

T = TypeVar("T")


@dataclass(frozen=True)
class SearchResult(Generic[T]):
    """A catalog record paired with its relevance score in [0, 1]."""

    item: T
    score: float


@dataclass(frozen=True)
class SearchOptions:
    case_sensitive: bool = False
    exact_match: bool = False
    limit: int | None = None
    capital_only: bool = False


@dataclass(frozen=True)
class SearchFilters:
    """Conjunctive filters for municipality search. Unset fields are ignored."""

    province: str | None = None     # name or abbreviation
    region: str | None = None       # name
    macro_area: MacroArea | None = None
    capital_only: bool = False


@dataclass(frozen=True)
class CatalogStats:
    """Aggregate counts over a loaded catalog."""

    total_regions: int
    total_provinces: int
    total_municipalities: int
    total_capitals: int
    total_macro_areas: int
    total_area_km2: float
