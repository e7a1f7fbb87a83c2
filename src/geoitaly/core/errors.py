"""Exceptions raised while building a catalog.

Lookups and searches never raise for missing data; only initialization can
fail, and it fails as a whole.
"""


class GeoItalyError(Exception):
    """Base class for all geoitaly errors."""


class InvalidRecordError(GeoItalyError, ValueError):
    """A raw dataset record could not be converted into a typed record."""


class DatasetLoadError(GeoItalyError):
    """A dataset could not be loaded or converted; the catalog was not built."""

    def __init__(self, dataset: str, reason: str) -> None:
        self.dataset = dataset
        self.reason = reason
        super().__init__(f"Unable to load dataset '{dataset}': {reason}")
