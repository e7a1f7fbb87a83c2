"""Exact-key lookup indices over the catalog collections.

Every map stores positions into the canonical tuples, not record copies,
so the collections stay the single source of truth. An index is built once
together with its collections and never mutated afterwards.

Case-insensitive keys are trimmed and lower-cased only; full normalization
is reserved for free-text search.
"""

from collections import defaultdict
from collections.abc import Mapping, Sequence
from types import MappingProxyType

from geoitaly.core.types import Municipality, Province, Region


def _key(value: str) -> str:
    return value.strip().lower()


def _freeze(groups: dict[str, list[int]]) -> Mapping[str, tuple[int, ...]]:
    return MappingProxyType({key: tuple(positions) for key, positions in groups.items()})


class CatalogIndex:
    """O(1) lookups by code, abbreviation, national id, postal code, province and region."""

    def __init__(
        self,
        regions: Sequence[Region],
        provinces: Sequence[Province],
        municipalities: Sequence[Municipality],
    ) -> None:
        self._regions = regions
        self._provinces = provinces
        self._municipalities = municipalities

        # Duplicate keys: last write wins, the data is assumed pre-validated
        self._region_by_code = MappingProxyType(
            {region.code: i for i, region in enumerate(regions)}
        )
        self._province_by_code = MappingProxyType(
            {p.region_code + p.abbreviation: i for i, p in enumerate(provinces)}
        )
        self._province_by_abbreviation = MappingProxyType(
            {_key(p.abbreviation): i for i, p in enumerate(provinces)}
        )

        by_national_id: dict[str, int] = {}
        by_postal_code: dict[str, list[int]] = defaultdict(list)
        by_province: dict[str, list[int]] = defaultdict(list)
        by_region: dict[str, list[int]] = defaultdict(list)

        for i, m in enumerate(municipalities):
            by_national_id[m.national_id] = i
            by_postal_code[m.postal_code].append(i)
            # Abbreviation and name share one grouping ('mi' and 'milano')
            for key in {_key(m.province_abbreviation), _key(m.province_name)}:
                by_province[key].append(i)
            by_region[_key(m.region_name)].append(i)

        self._municipality_by_national_id = MappingProxyType(by_national_id)
        self._municipalities_by_postal_code = _freeze(by_postal_code)
        self._municipalities_by_province = _freeze(by_province)
        self._municipalities_by_region = _freeze(by_region)

    # -- single-record lookups -------------------------------------------

    def region_by_code(self, code: str) -> Region | None:
        pos = self._region_by_code.get(code)
        return None if pos is None else self._regions[pos]

    def province_by_code(self, region_code: str, abbreviation: str) -> Province | None:
        pos = self._province_by_code.get(region_code + abbreviation)
        return None if pos is None else self._provinces[pos]

    def province_by_abbreviation(self, abbreviation: str) -> Province | None:
        pos = self._province_by_abbreviation.get(_key(abbreviation))
        return None if pos is None else self._provinces[pos]

    def municipality_by_national_id(self, national_id: str) -> Municipality | None:
        pos = self._municipality_by_national_id.get(national_id)
        return None if pos is None else self._municipalities[pos]

    # -- grouped lookups -------------------------------------------------

    def municipalities_by_postal_code(self, postal_code: str) -> list[Municipality]:
        return self._resolve(self._municipalities_by_postal_code.get(postal_code.strip(), ()))

    def municipalities_by_province(self, province: str) -> list[Municipality]:
        """Municipalities of a province given by abbreviation or name."""
        return self._resolve(self._municipalities_by_province.get(_key(province), ()))

    def municipalities_by_region(self, region: str) -> list[Municipality]:
        return self._resolve(self._municipalities_by_region.get(_key(region), ()))

    def _resolve(self, positions: tuple[int, ...]) -> list[Municipality]:
        return [self._municipalities[pos] for pos in positions]
