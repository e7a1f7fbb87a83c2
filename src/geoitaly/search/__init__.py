"""Normalization, scoring, ranking and autocomplete over catalog collections."""

from geoitaly.search.engine import (
    capitals,
    filter_municipalities,
    municipalities_in_region,
    provinces_for_region_code,
    provinces_in_region,
    search_municipalities,
    search_municipalities_with_filters,
    search_provinces,
    search_regions,
)
from geoitaly.search.normalize import collation_key, normalize_string
from geoitaly.search.scoring import jaro_winkler_similarity, relevance_score
from geoitaly.search.suggest import suggest_names
from geoitaly.search.validation import (
    is_valid_national_id,
    is_valid_postal_code,
    is_valid_province_abbreviation,
    is_valid_region_code,
)

__all__ = [
    "capitals",
    "collation_key",
    "filter_municipalities",
    "is_valid_national_id",
    "is_valid_postal_code",
    "is_valid_province_abbreviation",
    "is_valid_region_code",
    "jaro_winkler_similarity",
    "municipalities_in_region",
    "normalize_string",
    "provinces_for_region_code",
    "provinces_in_region",
    "relevance_score",
    "search_municipalities",
    "search_municipalities_with_filters",
    "search_provinces",
    "search_regions",
    "suggest_names",
]
