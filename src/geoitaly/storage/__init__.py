"""In-memory lookup indices built over the immutable catalog collections."""

from geoitaly.storage.indices import CatalogIndex

__all__ = ["CatalogIndex"]
