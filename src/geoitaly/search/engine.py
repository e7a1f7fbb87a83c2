"""Free-text search, filtered search and grouping over catalog collections.

Every search shares one pipeline:

    empty query → []  →  score each candidate name(s), keep the best  →
    drop zero scores  →  sort (score desc, name asc)  →  apply limit

Searches scan the raw collections; the exact-key indices live in
``geoitaly.storage.indices``.
"""

import logging
from collections.abc import Callable, Iterable, Sequence
from typing import TypeVar

from geoitaly.core.types import (
    Municipality,
    Province,
    Region,
    SearchFilters,
    SearchOptions,
    SearchResult,
)
from geoitaly.search.normalize import collation_key, normalize_string
from geoitaly.search.scoring import EXACT_SCORE, relevance_score

logger = logging.getLogger(__name__)

T = TypeVar("T", Region, Province, Municipality)

_DEFAULT_OPTIONS = SearchOptions()


def _rank(
    items: Iterable[T],
    query: str,
    options: SearchOptions,
    names: Callable[[T], tuple[str | None, ...]],
) -> list[SearchResult[T]]:
    """Score every item against the query and return ranked, limited results.

    ``names`` yields the fields to score for an item; None entries are skipped
    and the best field score wins.
    """
    search_query = query if options.case_sensitive else normalize_string(query)
    # Punctuation-only queries normalize to "" and would prefix-match everything
    if not search_query.strip():
        return []

    results: list[SearchResult[T]] = []
    for item in items:
        best = 0.0
        for name in names(item):
            if name is None:
                continue
            score = relevance_score(
                search_query, name, options.exact_match, options.case_sensitive,
            )
            if score > best:
                best = score
        if best > 0:
            results.append(SearchResult(item=item, score=best))

    results.sort(key=lambda r: (-r.score, collation_key(r.item.name)))

    if options.limit and options.limit > 0:
        results = results[:options.limit]

    logger.debug("Search %r matched %d records", query, len(results))
    return results


def search_regions(
    regions: Iterable[Region],
    query: str,
    options: SearchOptions = _DEFAULT_OPTIONS,
) -> list[SearchResult[Region]]:
    """Rank regions by name."""
    return _rank(regions, query, options, lambda r: (r.name,))


def search_provinces(
    provinces: Iterable[Province],
    query: str,
    options: SearchOptions = _DEFAULT_OPTIONS,
) -> list[SearchResult[Province]]:
    """Rank provinces by name or abbreviation ('MI' and 'Milano' both find Milan)."""
    return _rank(provinces, query, options, lambda p: (p.name, p.abbreviation))


def search_municipalities(
    municipalities: Iterable[Municipality],
    query: str,
    options: SearchOptions = _DEFAULT_OPTIONS,
) -> list[SearchResult[Municipality]]:
    """Rank municipalities by canonical or alternate name.

    With ``options.capital_only`` only province capitals are scored.
    """
    if options.capital_only:
        municipalities = [m for m in municipalities if m.is_capital]
    return _rank(
        municipalities, query, options, lambda m: (m.name, m.alternate_name),
    )


def filter_municipalities(
    municipalities: Iterable[Municipality],
    filters: SearchFilters,
) -> list[Municipality]:
    """Apply every set filter as an exact-match predicate."""
    candidates = list(municipalities)

    if filters.province:
        province = normalize_string(filters.province)
        candidates = [
            m for m in candidates
            if normalize_string(m.province_name) == province
            or normalize_string(m.province_abbreviation) == province
        ]

    if filters.region:
        region = normalize_string(filters.region)
        candidates = [m for m in candidates if normalize_string(m.region_name) == region]

    if filters.macro_area is not None:
        candidates = [m for m in candidates if m.macro_area is filters.macro_area]

    if filters.capital_only:
        candidates = [m for m in candidates if m.is_capital]

    return candidates


def search_municipalities_with_filters(
    municipalities: Iterable[Municipality],
    query: str,
    filters: SearchFilters,
    options: SearchOptions = _DEFAULT_OPTIONS,
    match_all: bool = False,
) -> list[SearchResult[Municipality]]:
    """Filter municipalities, then rank the survivors against ``query``.

    An empty query yields no results, exactly like ``search_municipalities``.
    Callers who want every municipality satisfying the filters must ask for
    it with ``match_all=True``: the query is then ignored and each record
    scores 1.0, in name order.
    """
    candidates = filter_municipalities(municipalities, filters)

    if match_all:
        if options.capital_only:
            candidates = [m for m in candidates if m.is_capital]
        candidates.sort(key=lambda m: collation_key(m.name))
        if options.limit and options.limit > 0:
            candidates = candidates[:options.limit]
        return [SearchResult(item=m, score=EXACT_SCORE) for m in candidates]

    return search_municipalities(candidates, query, options)


# ---------------------------------------------------------------------------
# Grouping accessors (predicate filters, no scoring)
# ---------------------------------------------------------------------------

def municipalities_in_region(
    municipalities: Iterable[Municipality], region: str,
) -> list[Municipality]:
    """All municipalities whose region name matches, ignoring case and accents."""
    target = normalize_string(region)
    return [m for m in municipalities if normalize_string(m.region_name) == target]


def capitals(municipalities: Iterable[Municipality]) -> list[Municipality]:
    return [m for m in municipalities if m.is_capital]


def provinces_in_region(
    provinces: Iterable[Province],
    regions: Sequence[Region],
    region: str,
) -> list[Province]:
    """Provinces of the region named ``region``, sorted by name.

    Returns [] for a blank or unknown region name.
    """
    target = normalize_string(region)
    if not target:
        return []

    match = next((r for r in regions if normalize_string(r.name) == target), None)
    if match is None:
        return []

    return provinces_for_region_code(provinces, match.code)


def provinces_for_region_code(
    provinces: Iterable[Province], region_code: str,
) -> list[Province]:
    """Provinces belonging to ``region_code``, sorted by name."""
    return sorted(
        (p for p in provinces if p.region_code == region_code),
        key=lambda p: collation_key(p.name),
    )
