"""GeoCatalog: the search engine handle over one loaded dataset.

A catalog owns its three collections and the indices derived from them.
It is built in one step and never mutated, so a single instance can be
shared freely between threads. To refresh the data, build a new catalog
and swap the reference held by the application.

    catalog = GeoCatalog.from_data_dir("data")
    catalog.search_municipalities("Mil")[0].item.name   # 'Milano'
    catalog.get_municipalities_by_postal_code("20100")
"""

import logging
from collections.abc import Iterable
from pathlib import Path

from geoitaly.core.types import (
    CatalogStats,
    Municipality,
    Province,
    Region,
    SearchFilters,
    SearchOptions,
    SearchResult,
)
from geoitaly.ingestion.loader import load_dataset
from geoitaly.search import engine, validation
from geoitaly.search.normalize import collation_key
from geoitaly.search.suggest import DEFAULT_LIMIT, suggest_names
from geoitaly.storage.indices import CatalogIndex

logger = logging.getLogger(__name__)

_DEFAULT_OPTIONS = SearchOptions()


class GeoCatalog:
    """Regions, provinces and municipalities with search and lookup operations."""

    def __init__(
        self,
        regions: Iterable[Region],
        provinces: Iterable[Province],
        municipalities: Iterable[Municipality],
    ) -> None:
        self._regions = tuple(regions)
        self._provinces = tuple(provinces)
        self._municipalities = tuple(municipalities)
        self._index = CatalogIndex(self._regions, self._provinces, self._municipalities)

        logger.info(
            "Catalog ready: %d regions, %d provinces, %d municipalities",
            len(self._regions), len(self._provinces), len(self._municipalities),
        )

    @classmethod
    def from_data_dir(cls, data_dir: str | Path) -> "GeoCatalog":
        """Load the ``gi_*.json`` datasets from ``data_dir`` and build a catalog.

        Raises:
            DatasetLoadError: if any dataset is missing or malformed.
        """
        dataset = load_dataset(data_dir)
        return cls(dataset.regions, dataset.provinces, dataset.municipalities)

    # ------------------------------------------------------------------
    # Free-text search
    # ------------------------------------------------------------------

    def search_regions(
        self, query: str, options: SearchOptions = _DEFAULT_OPTIONS,
    ) -> list[SearchResult[Region]]:
        return engine.search_regions(self._regions, query, options)

    def search_provinces(
        self, query: str, options: SearchOptions = _DEFAULT_OPTIONS,
    ) -> list[SearchResult[Province]]:
        return engine.search_provinces(self._provinces, query, options)

    def search_municipalities(
        self, query: str, options: SearchOptions = _DEFAULT_OPTIONS,
    ) -> list[SearchResult[Municipality]]:
        return engine.search_municipalities(self._municipalities, query, options)

    def search_municipalities_with_filters(
        self,
        query: str,
        filters: SearchFilters,
        options: SearchOptions = _DEFAULT_OPTIONS,
        match_all: bool = False,
    ) -> list[SearchResult[Municipality]]:
        """Filtered search; see ``engine.search_municipalities_with_filters``."""
        return engine.search_municipalities_with_filters(
            self._municipalities, query, filters, options, match_all=match_all,
        )

    def suggest(self, query: str, limit: int = DEFAULT_LIMIT) -> list[str]:
        """Autocomplete municipality names."""
        return suggest_names(self._municipalities, query, limit)

    # ------------------------------------------------------------------
    # Exact-key lookups
    # ------------------------------------------------------------------

    def get_region_by_code(self, code: str) -> Region | None:
        return self._index.region_by_code(code)

    def get_province_by_abbreviation(self, abbreviation: str) -> Province | None:
        """Case-insensitive: 'mi' and 'MI' both return Milan."""
        return self._index.province_by_abbreviation(abbreviation)

    def get_province(self, region_code: str, abbreviation: str) -> Province | None:
        return self._index.province_by_code(region_code, abbreviation)

    def get_municipality_by_national_id(self, national_id: str) -> Municipality | None:
        return self._index.municipality_by_national_id(national_id)

    def get_municipalities_by_postal_code(self, postal_code: str) -> list[Municipality]:
        return self._index.municipalities_by_postal_code(postal_code)

    def get_municipalities_by_province(self, province: str) -> list[Municipality]:
        """Province given by abbreviation or name, case-insensitive."""
        return self._index.municipalities_by_province(province)

    def get_municipalities_by_region(self, region: str) -> list[Municipality]:
        return self._index.municipalities_by_region(region)

    # ------------------------------------------------------------------
    # Grouping and listings
    # ------------------------------------------------------------------

    def get_capitals(self) -> list[Municipality]:
        return engine.capitals(self._municipalities)

    def get_provinces_by_region(self, region: str) -> list[Province]:
        """Provinces of a region given by name, sorted by name."""
        return engine.provinces_in_region(self._provinces, self._regions, region)

    def get_provinces_by_region_code(self, region_code: str) -> list[Province]:
        return engine.provinces_for_region_code(self._provinces, region_code)

    def get_all_regions(self) -> list[Region]:
        return sorted(self._regions, key=lambda r: collation_key(r.name))

    def get_all_provinces(self) -> list[Province]:
        return sorted(self._provinces, key=lambda p: collation_key(p.name))

    def get_all_municipalities(self) -> list[Municipality]:
        return list(self._municipalities)

    def get_all_macro_areas(self) -> list[str]:
        """Macro-area values present in the region dataset, sorted."""
        return sorted({r.macro_area.value for r in self._regions})

    def is_valid_postal_code(self, postal_code: str) -> bool:
        return validation.is_valid_postal_code(postal_code)

    def stats(self) -> CatalogStats:
        return CatalogStats(
            total_regions=len(self._regions),
            total_provinces=len(self._provinces),
            total_municipalities=len(self._municipalities),
            total_capitals=len(self.get_capitals()),
            total_macro_areas=len(self.get_all_macro_areas()),
            total_area_km2=sum(r.area_km2 for r in self._regions),
        )
