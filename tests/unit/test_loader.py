"""Tests for dataset loading and raw record conversion."""

import json
import shutil

import pytest

from geoitaly.core.errors import DatasetLoadError, InvalidRecordError
from geoitaly.core.types import MacroArea, ProvinceType, RegionType
from geoitaly.ingestion.loader import (
    MUNICIPALITIES_FILE,
    PROVINCES_FILE,
    REGIONS_FILE,
    load_dataset,
    municipality_from_raw,
    province_from_raw,
    region_from_raw,
)


@pytest.fixture
def raw_municipality(fixtures_dir) -> dict:
    records = json.loads((fixtures_dir / MUNICIPALITIES_FILE).read_text(encoding="utf-8"))
    return dict(records[0])


@pytest.fixture
def data_dir(tmp_path, fixtures_dir):
    """A writable copy of the fixture datasets."""
    for name in (REGIONS_FILE, PROVINCES_FILE, MUNICIPALITIES_FILE):
        shutil.copy(fixtures_dir / name, tmp_path / name)
    return tmp_path


def _rewrite(path, mutate):
    records = json.loads(path.read_text(encoding="utf-8"))
    mutate(records)
    path.write_text(json.dumps(records), encoding="utf-8")


# ---------------------------------------------------------------------------
# Record conversion
# ---------------------------------------------------------------------------

class TestRecordConversion:
    def test_region(self):
        region = region_from_raw({
            "codice_regione": "19",
            "denominazione_regione": "Sicilia",
            "tipologia_regione": "statuto speciale",
            "ripartizione_geografica": "Isole",
            "numero_province": "9",
            "numero_comuni": "391",
            "superficie_kmq": "25711.98",
        })
        assert region.code == "19"
        assert region.region_type is RegionType.SPECIAL
        assert region.macro_area is MacroArea.ISLANDS
        assert region.province_count == 9
        assert region.area_km2 == pytest.approx(25711.98)

    def test_province(self):
        province = province_from_raw({
            "codice_regione": "19",
            "sigla_provincia": "PA",
            "denominazione_provincia": "Palermo",
            "tipologia_provincia": "Libero consorzio comunale",
            "numero_comuni": "82",
            "superficie_kmq": "5009.28",
            "codice_sovracomunale": "282",
        })
        assert province.abbreviation == "PA"
        assert province.province_type is ProvinceType.FREE_MUNICIPAL_CONSORTIUM
        assert province.supra_municipal_code == "282"

    def test_municipality(self, raw_municipality):
        municipality = municipality_from_raw(raw_municipality)
        assert municipality.national_id == "015146"
        assert municipality.name == "Milano"
        assert municipality.alternate_name == "Milan"
        assert municipality.postal_code == "20100"
        assert municipality.is_capital is True
        assert municipality.coordinates.lat == pytest.approx(45.4642)
        assert municipality.coordinates.lng == pytest.approx(9.19)

    def test_alternate_name_equal_to_name_dropped(self, raw_municipality):
        raw_municipality["denominazione_ita_altra"] = "Milano"
        assert municipality_from_raw(raw_municipality).alternate_name is None

    def test_blank_alternate_name_dropped(self, raw_municipality):
        raw_municipality["denominazione_ita_altra"] = "  "
        assert municipality_from_raw(raw_municipality).alternate_name is None

    def test_capital_flag(self, raw_municipality):
        raw_municipality["flag_capoluogo"] = "NO"
        assert municipality_from_raw(raw_municipality).is_capital is False

    def test_missing_field(self, raw_municipality):
        del raw_municipality["cap"]
        with pytest.raises(InvalidRecordError, match="cap"):
            municipality_from_raw(raw_municipality)

    def test_non_string_field(self, raw_municipality):
        raw_municipality["cap"] = 20100
        with pytest.raises(InvalidRecordError):
            municipality_from_raw(raw_municipality)

    def test_bad_number(self, raw_municipality):
        raw_municipality["lat"] = "north"
        with pytest.raises(InvalidRecordError, match="lat"):
            municipality_from_raw(raw_municipality)

    def test_unknown_enum_value(self, raw_municipality):
        raw_municipality["ripartizione_geografica"] = "Atlantide"
        with pytest.raises(InvalidRecordError, match="MacroArea"):
            municipality_from_raw(raw_municipality)

    def test_invalid_record_is_value_error(self, raw_municipality):
        del raw_municipality["lat"]
        with pytest.raises(ValueError):
            municipality_from_raw(raw_municipality)


# ---------------------------------------------------------------------------
# Loading files
# ---------------------------------------------------------------------------

class TestLoadDataset:
    def test_loads_fixtures_in_source_order(self, fixtures_dir):
        dataset = load_dataset(fixtures_dir)
        assert [r.code for r in dataset.regions] == ["03", "08", "12", "15", "19"]
        assert len(dataset.provinces) == 6
        assert len(dataset.municipalities) == 9
        assert dataset.municipalities[0].name == "Milano"

    def test_accepts_string_path(self, fixtures_dir):
        assert len(load_dataset(str(fixtures_dir)).regions) == 5

    def test_missing_file(self, data_dir):
        (data_dir / PROVINCES_FILE).unlink()
        with pytest.raises(DatasetLoadError) as excinfo:
            load_dataset(data_dir)
        assert excinfo.value.dataset == PROVINCES_FILE

    def test_malformed_json(self, data_dir):
        (data_dir / REGIONS_FILE).write_text("[{", encoding="utf-8")
        with pytest.raises(DatasetLoadError) as excinfo:
            load_dataset(data_dir)
        assert excinfo.value.dataset == REGIONS_FILE

    def test_invalid_utf8(self, data_dir):
        (data_dir / PROVINCES_FILE).write_bytes(b'[{"x": "\xff\xfe"}]')
        with pytest.raises(DatasetLoadError) as excinfo:
            load_dataset(data_dir)
        assert excinfo.value.dataset == PROVINCES_FILE

    def test_not_an_array(self, data_dir):
        (data_dir / REGIONS_FILE).write_text('{"regions": []}', encoding="utf-8")
        with pytest.raises(DatasetLoadError, match="array"):
            load_dataset(data_dir)

    def test_record_not_an_object(self, data_dir):
        _rewrite(data_dir / PROVINCES_FILE, lambda records: records.append("MI"))
        with pytest.raises(DatasetLoadError, match="record 6"):
            load_dataset(data_dir)

    def test_invalid_record_names_dataset_and_position(self, data_dir):
        def drop_cap(records):
            del records[2]["cap"]

        _rewrite(data_dir / MUNICIPALITIES_FILE, drop_cap)
        with pytest.raises(DatasetLoadError) as excinfo:
            load_dataset(data_dir)
        assert excinfo.value.dataset == MUNICIPALITIES_FILE
        assert "record 2" in str(excinfo.value)
        assert "cap" in str(excinfo.value)
        assert isinstance(excinfo.value.__cause__, InvalidRecordError)

    def test_message_format(self, data_dir):
        (data_dir / REGIONS_FILE).write_text("null", encoding="utf-8")
        with pytest.raises(DatasetLoadError, match=f"Unable to load dataset '{REGIONS_FILE}'"):
            load_dataset(data_dir)
