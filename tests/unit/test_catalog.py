"""End-to-end tests for GeoCatalog over the fixture datasets."""

import pytest

from geoitaly.catalog import GeoCatalog
from geoitaly.core.errors import DatasetLoadError
from geoitaly.core.types import MacroArea, SearchFilters, SearchOptions


class TestConstruction:
    def test_from_data_dir(self, fixtures_dir):
        catalog = GeoCatalog.from_data_dir(fixtures_dir)
        assert catalog.stats().total_municipalities == 9

    def test_from_missing_dir(self, tmp_path):
        with pytest.raises(DatasetLoadError):
            GeoCatalog.from_data_dir(tmp_path / "missing")

    def test_empty_catalog(self):
        catalog = GeoCatalog([], [], [])
        assert catalog.search_municipalities("Milano") == []
        assert catalog.suggest("Mi") == []
        assert catalog.get_all_macro_areas() == []
        assert catalog.stats().total_area_km2 == 0


class TestMilan:
    """Every way of reaching Milan returns the same record."""

    def test_search_prefix(self, catalog):
        assert catalog.search_municipalities("Mil")[0].item.name == "Milano"

    def test_search_english_name(self, catalog):
        assert catalog.search_municipalities("Milan")[0].item.name == "Milano"

    def test_same_record_everywhere(self, catalog):
        milano = catalog.get_municipality_by_national_id("015146")
        assert catalog.search_municipalities("Milano")[0].item is milano
        assert catalog.get_municipalities_by_postal_code("20100") == [milano]
        assert milano in catalog.get_municipalities_by_province("MI")
        assert milano in catalog.get_capitals()

    def test_province(self, catalog):
        assert catalog.get_province_by_abbreviation("mi").name == "Milano"
        assert catalog.get_province("03", "MI").province_type.value == "Città metropolitana"
        assert catalog.search_provinces("MI")[0].item.abbreviation == "MI"

    def test_region(self, catalog):
        lombardia = catalog.get_region_by_code("03")
        assert lombardia.name == "Lombardia"
        assert len(catalog.get_municipalities_by_region("lombardia")) == 5
        assert [p.name for p in catalog.get_provinces_by_region("Lombardia")] == [
            "Bergamo", "Milano",
        ]
        assert [p.abbreviation for p in catalog.get_provinces_by_region_code("03")] == [
            "BG", "MI",
        ]


class TestSearchOperations:
    def test_search_regions(self, catalog):
        assert catalog.search_regions("Camp")[0].item.name == "Campania"

    def test_search_with_options(self, catalog):
        results = catalog.search_municipalities("Milano", SearchOptions(exact_match=True))
        assert [r.item.name for r in results] == ["Milano"]

    def test_filtered_search(self, catalog):
        filters = SearchFilters(region="Lombardia", capital_only=True)
        assert catalog.search_municipalities_with_filters("", filters) == []
        results = catalog.search_municipalities_with_filters("", filters, match_all=True)
        assert [r.item.name for r in results] == ["Bergamo", "Milano"]

    def test_filtered_by_macro_area(self, catalog):
        filters = SearchFilters(macro_area=MacroArea.ISLANDS)
        results = catalog.search_municipalities_with_filters("Pal", filters)
        assert [r.item.name for r in results] == ["Palermo"]

    def test_suggest(self, catalog):
        assert catalog.suggest("Mi", 3) == ["Milano", "San Giuliano Milanese"]
        assert catalog.suggest("M") == []


class TestListings:
    def test_all_regions_sorted(self, catalog):
        assert [r.name for r in catalog.get_all_regions()] == [
            "Campania", "Emilia-Romagna", "Lazio", "Lombardia", "Sicilia",
        ]

    def test_all_provinces_sorted(self, catalog):
        assert [p.abbreviation for p in catalog.get_all_provinces()] == [
            "BG", "FC", "MI", "NA", "PA", "RM",
        ]

    def test_all_municipalities_in_source_order(self, catalog, municipalities):
        assert catalog.get_all_municipalities() == list(municipalities)

    def test_listing_is_a_copy(self, catalog):
        catalog.get_all_municipalities().clear()
        assert len(catalog.get_all_municipalities()) == 9

    def test_macro_areas(self, catalog):
        assert catalog.get_all_macro_areas() == [
            "Centro", "Isole", "Nord-est", "Nord-ovest", "Sud",
        ]

    def test_postal_code_validation(self, catalog):
        assert catalog.is_valid_postal_code("20100") is True
        assert catalog.is_valid_postal_code("99999") is False


class TestStats:
    def test_totals(self, catalog, regions):
        stats = catalog.stats()
        assert stats.total_regions == 5
        assert stats.total_provinces == 6
        assert stats.total_municipalities == 9
        assert stats.total_capitals == 6
        assert stats.total_macro_areas == 5
        assert stats.total_area_km2 == pytest.approx(sum(r.area_km2 for r in regions))
