"""Autocomplete suggestions for municipality names.

Two passes over the collection: names starting with the query first, then
names merely containing it. Both passes keep collection order.
"""

from collections.abc import Sequence

from geoitaly.core.types import Municipality
from geoitaly.search.normalize import normalize_string

MIN_QUERY_LENGTH = 2
DEFAULT_LIMIT = 10


def suggest_names(
    municipalities: Sequence[Municipality],
    query: str,
    limit: int = DEFAULT_LIMIT,
) -> list[str]:
    """Return up to ``limit`` distinct municipality names matching ``query``.

    Queries shorter than two characters, or with nothing left after
    normalization, return [] rather than every name.
    """
    if len(query) < MIN_QUERY_LENGTH or limit <= 0:
        return []

    target = normalize_string(query)
    if not target:
        return []
    # dict keeps first-seen order
    suggestions: dict[str, None] = {}

    for municipality in municipalities:
        if normalize_string(municipality.name).startswith(target):
            suggestions.setdefault(municipality.name)
            if len(suggestions) >= limit:
                break

    if len(suggestions) < limit:
        for municipality in municipalities:
            if len(suggestions) >= limit:
                break
            if municipality.name in suggestions:
                continue
            if target in normalize_string(municipality.name):
                suggestions[municipality.name] = None

    return list(suggestions)[:limit]
