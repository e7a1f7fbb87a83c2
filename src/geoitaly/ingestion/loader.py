"""Load the raw ``gi_*.json`` datasets and convert them into typed records.

Raw records carry every field as a string, e.g.:

    {"codice_regione": "03", "denominazione_regione": "Lombardia",
     "tipologia_regione": "statuto ordinario", "ripartizione_geografica": "Nord-ovest",
     "numero_province": "12", "numero_comuni": "1502", "superficie_kmq": "23863.09"}

Loading is all-or-nothing: the first bad file or record aborts with a
DatasetLoadError naming the dataset, and no partial dataset is returned.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from geoitaly.core.errors import DatasetLoadError, InvalidRecordError
from geoitaly.core.types import (
    Coordinates,
    MacroArea,
    Municipality,
    Province,
    ProvinceType,
    Region,
    RegionType,
)

logger = logging.getLogger(__name__)

REGIONS_FILE = "gi_regioni.json"
PROVINCES_FILE = "gi_province.json"
MUNICIPALITIES_FILE = "gi_comuni_cap.json"

CAPITAL_FLAG = "SI"


@dataclass(frozen=True)
class Dataset:
    """The three converted collections, in source order."""

    regions: tuple[Region, ...]
    provinces: tuple[Province, ...]
    municipalities: tuple[Municipality, ...]


# ---------------------------------------------------------------------------
# Field parsing
# ---------------------------------------------------------------------------

def _field(raw: dict, name: str) -> str:
    try:
        value = raw[name]
    except KeyError:
        raise InvalidRecordError(f"missing field '{name}'") from None
    if not isinstance(value, str):
        raise InvalidRecordError(f"field '{name}' is not a string: {value!r}")
    return value


def _int(raw: dict, name: str) -> int:
    value = _field(raw, name)
    try:
        return int(value)
    except ValueError:
        raise InvalidRecordError(f"field '{name}' is not an integer: {value!r}") from None


def _float(raw: dict, name: str) -> float:
    value = _field(raw, name)
    try:
        return float(value)
    except ValueError:
        raise InvalidRecordError(f"field '{name}' is not a number: {value!r}") from None


def _enum(enum_cls, raw: dict, name: str):
    value = _field(raw, name)
    try:
        return enum_cls(value)
    except ValueError:
        raise InvalidRecordError(
            f"field '{name}' has unknown {enum_cls.__name__} value {value!r}"
        ) from None


# ---------------------------------------------------------------------------
# Raw record → typed record
# ---------------------------------------------------------------------------

def region_from_raw(raw: dict) -> Region:
    return Region(
        code=_field(raw, "codice_regione"),
        name=_field(raw, "denominazione_regione"),
        region_type=_enum(RegionType, raw, "tipologia_regione"),
        macro_area=_enum(MacroArea, raw, "ripartizione_geografica"),
        province_count=_int(raw, "numero_province"),
        municipality_count=_int(raw, "numero_comuni"),
        area_km2=_float(raw, "superficie_kmq"),
    )


def province_from_raw(raw: dict) -> Province:
    return Province(
        region_code=_field(raw, "codice_regione"),
        abbreviation=_field(raw, "sigla_provincia"),
        name=_field(raw, "denominazione_provincia"),
        province_type=_enum(ProvinceType, raw, "tipologia_provincia"),
        municipality_count=_int(raw, "numero_comuni"),
        area_km2=_float(raw, "superficie_kmq"),
        supra_municipal_code=_field(raw, "codice_sovracomunale"),
    )


def municipality_from_raw(raw: dict) -> Municipality:
    """Convert a ``gi_comuni_cap`` row.

    The alternate name is kept only when it differs from the canonical
    name and is not blank.
    """
    name = _field(raw, "denominazione_ita")
    other = _field(raw, "denominazione_ita_altra")
    alternate_name = other if other != name and other.strip() else None

    return Municipality(
        national_id=_field(raw, "codice_istat"),
        name=name,
        alternate_name=alternate_name,
        postal_code=_field(raw, "cap"),
        province_abbreviation=_field(raw, "sigla_provincia"),
        province_name=_field(raw, "denominazione_provincia"),
        province_type=_enum(ProvinceType, raw, "tipologia_provincia"),
        region_code=_field(raw, "codice_regione"),
        region_name=_field(raw, "denominazione_regione"),
        region_type=_enum(RegionType, raw, "tipologia_regione"),
        macro_area=_enum(MacroArea, raw, "ripartizione_geografica"),
        is_capital=_field(raw, "flag_capoluogo") == CAPITAL_FLAG,
        cadastral_code=_field(raw, "codice_belfiore"),
        coordinates=Coordinates(lat=_float(raw, "lat"), lng=_float(raw, "lon")),
        area_km2=_float(raw, "superficie_kmq"),
    )


# ---------------------------------------------------------------------------
# Files
# ---------------------------------------------------------------------------

def _load_records(path: Path, converter):
    dataset = path.name
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.error("Failed to read dataset %s: %s", path, e)
        raise DatasetLoadError(dataset, str(e)) from e

    if not isinstance(payload, list):
        raise DatasetLoadError(dataset, "expected a JSON array of records")

    records = []
    for position, raw in enumerate(payload):
        if not isinstance(raw, dict):
            raise DatasetLoadError(dataset, f"record {position} is not an object")
        try:
            records.append(converter(raw))
        except InvalidRecordError as e:
            logger.error("Invalid record %d in %s: %s", position, dataset, e)
            raise DatasetLoadError(dataset, f"record {position}: {e}") from e

    logger.info("Loaded %d records from %s", len(records), dataset, extra={"dataset": dataset})
    return tuple(records)


def load_dataset(data_dir: str | Path) -> Dataset:
    """Read and convert regions, provinces and municipalities from ``data_dir``.

    Raises:
        DatasetLoadError: if any of the three datasets fails to load.
    """
    data_dir = Path(data_dir)
    return Dataset(
        regions=_load_records(data_dir / REGIONS_FILE, region_from_raw),
        provinces=_load_records(data_dir / PROVINCES_FILE, province_from_raw),
        municipalities=_load_records(data_dir / MUNICIPALITIES_FILE, municipality_from_raw),
    )
