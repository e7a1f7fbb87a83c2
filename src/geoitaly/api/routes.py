"""API route handlers for geoitaly.

GET /api/v1/regions/search           : ranked region search
GET /api/v1/provinces/search         : ranked province search (name or abbreviation)
GET /api/v1/municipalities/search    : ranked, optionally filtered municipality search
GET /api/v1/suggest                  : municipality name autocomplete
plus exact-key lookups by code, abbreviation, ISTAT id and postal code.
"""

import logging
from dataclasses import asdict

from fastapi import APIRouter, HTTPException, Query, Request

from geoitaly.api.schemas import (
    ErrorResponse,
    MunicipalityMatch,
    MunicipalityResponse,
    PostalCodeResponse,
    ProvinceMatch,
    ProvinceResponse,
    RegionMatch,
    RegionResponse,
    SuggestionsResponse,
)
from geoitaly.catalog import GeoCatalog
from geoitaly.config import settings
from geoitaly.core.types import MacroArea, SearchFilters, SearchOptions

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["catalog"])

_NOT_FOUND = {404: {"model": ErrorResponse, "description": "No record with this key"}}


def _catalog(request: Request) -> GeoCatalog:
    return request.app.state.catalog


def _options(
    exact: bool, case_sensitive: bool, limit: int | None, capital_only: bool = False,
) -> SearchOptions:
    return SearchOptions(
        case_sensitive=case_sensitive,
        exact_match=exact,
        limit=limit,
        capital_only=capital_only,
    )


# ---------------------------------------------------------------------------
# Regions
# ---------------------------------------------------------------------------

@router.get("/regions/search", response_model=list[RegionMatch])
def search_regions(
    request: Request,
    q: str = Query(..., max_length=200),
    exact: bool = False,
    case_sensitive: bool = False,
    limit: int | None = Query(None, ge=1, le=settings.max_search_limit),
):
    results = _catalog(request).search_regions(q, _options(exact, case_sensitive, limit))
    return [asdict(r) for r in results]


@router.get("/regions/{code}", response_model=RegionResponse, responses=_NOT_FOUND)
def get_region(request: Request, code: str):
    region = _catalog(request).get_region_by_code(code)
    if region is None:
        raise HTTPException(status_code=404, detail=f"Region not found: {code}")
    return asdict(region)


@router.get("/regions/{name}/provinces", response_model=list[ProvinceResponse])
def get_region_provinces(request: Request, name: str):
    """Provinces of a region (by name), sorted alphabetically. Unknown region → []."""
    return [asdict(p) for p in _catalog(request).get_provinces_by_region(name)]


# ---------------------------------------------------------------------------
# Provinces
# ---------------------------------------------------------------------------

@router.get("/provinces/search", response_model=list[ProvinceMatch])
def search_provinces(
    request: Request,
    q: str = Query(..., max_length=200),
    exact: bool = False,
    case_sensitive: bool = False,
    limit: int | None = Query(None, ge=1, le=settings.max_search_limit),
):
    results = _catalog(request).search_provinces(q, _options(exact, case_sensitive, limit))
    return [asdict(r) for r in results]


@router.get("/provinces/{abbreviation}", response_model=ProvinceResponse, responses=_NOT_FOUND)
def get_province(request: Request, abbreviation: str):
    province = _catalog(request).get_province_by_abbreviation(abbreviation)
    if province is None:
        raise HTTPException(status_code=404, detail=f"Province not found: {abbreviation}")
    return asdict(province)


# ---------------------------------------------------------------------------
# Municipalities
# ---------------------------------------------------------------------------

@router.get("/municipalities/search", response_model=list[MunicipalityMatch])
def search_municipalities(
    request: Request,
    q: str = Query("", max_length=200),
    province: str | None = None,
    region: str | None = None,
    macro_area: MacroArea | None = None,
    capital_only: bool = False,
    match_all: bool = False,
    exact: bool = False,
    case_sensitive: bool = False,
    limit: int | None = Query(None, ge=1, le=settings.max_search_limit),
):
    """Ranked municipality search.

    Without filters this is a plain free-text search. With any filter set the
    catalog is narrowed first; ``match_all=true`` returns every municipality
    satisfying the filters instead of scoring ``q``.
    """
    catalog = _catalog(request)
    options = _options(exact, case_sensitive, limit)

    if province or region or macro_area or capital_only or match_all:
        filters = SearchFilters(
            province=province,
            region=region,
            macro_area=macro_area,
            capital_only=capital_only,
        )
        results = catalog.search_municipalities_with_filters(
            q, filters, options, match_all=match_all,
        )
    else:
        results = catalog.search_municipalities(q, options)

    logger.info(
        "Municipality search returned %d results", len(results),
        extra={"query": q, "result_count": len(results)},
    )
    return [asdict(r) for r in results]


@router.get(
    "/municipalities/{national_id}",
    response_model=MunicipalityResponse,
    responses=_NOT_FOUND,
)
def get_municipality(request: Request, national_id: str):
    municipality = _catalog(request).get_municipality_by_national_id(national_id)
    if municipality is None:
        raise HTTPException(status_code=404, detail=f"Municipality not found: {national_id}")
    return asdict(municipality)


@router.get("/postal-codes/{postal_code}", response_model=PostalCodeResponse)
def get_postal_code(request: Request, postal_code: str):
    """Municipalities served by a postal code; an unknown code is an empty list, not 404."""
    catalog = _catalog(request)
    municipalities = catalog.get_municipalities_by_postal_code(postal_code)
    return PostalCodeResponse(
        postal_code=postal_code.strip(),
        valid=catalog.is_valid_postal_code(postal_code),
        municipalities=[asdict(m) for m in municipalities],
    )


@router.get("/suggest", response_model=SuggestionsResponse)
def suggest(
    request: Request,
    q: str = Query(..., max_length=200),
    limit: int = Query(settings.default_suggestion_limit, ge=1, le=settings.max_search_limit),
):
    return SuggestionsResponse(query=q, suggestions=_catalog(request).suggest(q, limit))
