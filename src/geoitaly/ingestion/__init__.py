"""Raw dataset loading and conversion into catalog records."""

from geoitaly.ingestion.loader import (
    Dataset,
    load_dataset,
    municipality_from_raw,
    province_from_raw,
    region_from_raw,
)

__all__ = [
    "Dataset",
    "load_dataset",
    "municipality_from_raw",
    "province_from_raw",
    "region_from_raw",
]
