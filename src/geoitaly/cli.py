"""geoitaly CLI: municipality search, autocomplete and catalog stats."""

import sys

from geoitaly.catalog import GeoCatalog
from geoitaly.config import settings
from geoitaly.core.errors import DatasetLoadError
from geoitaly.core.types import SearchOptions
from geoitaly.observability.logging import setup_logging

RESULT_LIMIT = 20


def _setup() -> None:
    setup_logging(json_format=False, level="WARNING")


def _load_catalog() -> GeoCatalog:
    """Load the catalog from settings.data_dir, exiting with status 1 on failure."""
    try:
        return GeoCatalog.from_data_dir(settings.data_dir)
    except DatasetLoadError as e:
        print(f"Error: {e}")
        print(f"Set GEOITALY_DATA_DIR to the directory holding the gi_*.json files "
              f"(currently: {settings.data_dir})")
        sys.exit(1)


def main() -> None:
    """Search municipalities: geoitaly <query>"""
    _setup()

    if len(sys.argv) < 2:
        print("Usage: geoitaly <query>")
        print('  Example: geoitaly "Milano"')
        print('  Example: geoitaly "reggio"')
        sys.exit(1)

    query = " ".join(sys.argv[1:])
    catalog = _load_catalog()
    results = catalog.search_municipalities(query, SearchOptions(limit=RESULT_LIMIT))

    if not results:
        print(f"No municipalities match '{query}'.")
        return

    print(f"\n{len(results)} results for '{query}':\n")
    for r in results:
        m = r.item
        capital = "  [capoluogo]" if m.is_capital else ""
        alt = f" / {m.alternate_name}" if m.alternate_name else ""
        print(f"  {r.score:.3f}  {m.name}{alt} ({m.province_abbreviation})  "
              f"CAP {m.postal_code}  ISTAT {m.national_id}{capital}")


def suggest_main() -> None:
    """Autocomplete municipality names: geoitaly-suggest <prefix>"""
    _setup()

    if len(sys.argv) < 2:
        print("Usage: geoitaly-suggest <prefix>")
        print('  Example: geoitaly-suggest "San Gi"')
        sys.exit(1)

    query = " ".join(sys.argv[1:])
    catalog = _load_catalog()
    for name in catalog.suggest(query, settings.default_suggestion_limit):
        print(name)


def stats_main() -> None:
    """Print catalog totals: geoitaly-stats"""
    _setup()
    catalog = _load_catalog()
    stats = catalog.stats()

    print("\ngeoitaly catalog")
    print(f"{'=' * 40}")
    print(f"Regions:         {stats.total_regions}")
    print(f"Provinces:       {stats.total_provinces}")
    print(f"Municipalities:  {stats.total_municipalities}")
    print(f"Capitals:        {stats.total_capitals}")
    print(f"Macro-areas:     {stats.total_macro_areas} ({', '.join(catalog.get_all_macro_areas())})")
    print(f"Total area:      {stats.total_area_km2:,.2f} km²")


if __name__ == "__main__":
    main()
