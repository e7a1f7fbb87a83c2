"""Shared test fixtures: a small catalog built from tests/fixtures/*.json."""

from pathlib import Path

import pytest

from geoitaly.catalog import GeoCatalog
from geoitaly.ingestion.loader import Dataset, load_dataset

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(scope="session")
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture(scope="session")
def dataset() -> Dataset:
    """Regions, provinces and municipalities converted from the JSON fixtures."""
    return load_dataset(FIXTURES_DIR)


@pytest.fixture(scope="session")
def catalog(dataset) -> GeoCatalog:
    return GeoCatalog(dataset.regions, dataset.provinces, dataset.municipalities)


@pytest.fixture(scope="session")
def municipalities(dataset):
    return dataset.municipalities


@pytest.fixture(scope="session")
def provinces(dataset):
    return dataset.provinces


@pytest.fixture(scope="session")
def regions(dataset):
    return dataset.regions
