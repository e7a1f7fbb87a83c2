"""Pydantic response models for the geoitaly API.

These are the API contract, decoupled from the internal domain dataclasses.
We bridge them using dataclasses.asdict() in the route handlers.
"""

from pydantic import BaseModel

from geoitaly.core.types import MacroArea, ProvinceType, RegionType


class RegionResponse(BaseModel):
    code: str
    name: str
    region_type: RegionType
    macro_area: MacroArea
    province_count: int
    municipality_count: int
    area_km2: float


class ProvinceResponse(BaseModel):
    region_code: str
    abbreviation: str
    name: str
    province_type: ProvinceType
    municipality_count: int
    area_km2: float
    supra_municipal_code: str


class CoordinatesResponse(BaseModel):
    lat: float
    lng: float


class MunicipalityResponse(BaseModel):
    national_id: str
    name: str
    alternate_name: str | None = None
    postal_code: str
    province_abbreviation: str
    province_name: str
    province_type: ProvinceType
    region_code: str
    region_name: str
    region_type: RegionType
    macro_area: MacroArea
    is_capital: bool
    cadastral_code: str
    coordinates: CoordinatesResponse
    area_km2: float


class RegionMatch(BaseModel):
    item: RegionResponse
    score: float


class ProvinceMatch(BaseModel):
    item: ProvinceResponse
    score: float


class MunicipalityMatch(BaseModel):
    item: MunicipalityResponse
    score: float


class PostalCodeResponse(BaseModel):
    """Municipalities served by a postal code."""

    postal_code: str
    valid: bool
    municipalities: list[MunicipalityResponse] = []


class SuggestionsResponse(BaseModel):
    query: str
    suggestions: list[str] = []


class StatsResponse(BaseModel):
    total_regions: int
    total_provinces: int
    total_municipalities: int
    total_capitals: int
    total_macro_areas: int
    total_area_km2: float


class HealthResponse(BaseModel):
    status: str  # "loading" or "healthy"
    stats: StatsResponse | None = None


class ErrorResponse(BaseModel):
    """Error response body."""

    detail: str
