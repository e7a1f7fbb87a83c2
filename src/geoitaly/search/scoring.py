"""Relevance scoring between a query and a candidate name.

Tiers, first match wins:

    exact            1.0
    prefix           0.9
    substring        0.7 * len(query) / len(candidate)
    Jaro-Winkler     similarity * 0.5, when similarity > 0.8
                     (case-insensitive queries of 3+ characters only)

The cheap tiers cover almost every real query; Jaro-Winkler only runs for
typos that none of them catch.
"""

from geoitaly.search.normalize import normalize_string

EXACT_SCORE = 1.0
PREFIX_SCORE = 0.9
SUBSTRING_WEIGHT = 0.7
FUZZY_WEIGHT = 0.5
FUZZY_THRESHOLD = 0.8
FUZZY_MIN_QUERY_LENGTH = 3

# Winkler prefix bonus
_PREFIX_SCALE = 0.1
_MAX_PREFIX = 4


def relevance_score(
    query: str,
    candidate: str,
    exact_match: bool = False,
    case_sensitive: bool = False,
) -> float:
    """Score how well ``candidate`` matches ``query``, in [0, 1].

    Args:
        query: Text typed by the user.
        candidate: Name (or code) of a catalog record.
        exact_match: Only equality counts (1.0), everything else is 0.0.
        case_sensitive: Compare raw strings instead of normalized ones.
            Fuzzy matching is not available in this mode.
    """
    if not case_sensitive:
        query = normalize_string(query)
        candidate = normalize_string(candidate)

    if exact_match:
        return EXACT_SCORE if query == candidate else 0.0

    if candidate == query:
        return EXACT_SCORE
    if candidate.startswith(query):
        return PREFIX_SCORE
    if query in candidate:
        return SUBSTRING_WEIGHT * (len(query) / len(candidate))

    if not case_sensitive and len(query) >= FUZZY_MIN_QUERY_LENGTH:
        similarity = jaro_winkler_similarity(query, candidate)
        return similarity * FUZZY_WEIGHT if similarity > FUZZY_THRESHOLD else 0.0

    return 0.0


def jaro_winkler_similarity(s1: str, s2: str) -> float:
    """Jaro-Winkler similarity in [0, 1]; symmetric in its arguments."""
    if s1 == s2:
        return 1.0

    len1, len2 = len(s1), len(s2)
    if len1 == 0 or len2 == 0:
        return 0.0

    window = max(len1, len2) // 2 - 1
    s1_matched = [False] * len1
    s2_matched = [False] * len2

    matches = 0
    for i, ch in enumerate(s1):
        start = max(0, i - window)
        end = min(i + window + 1, len2)
        for j in range(start, end):
            if s2_matched[j] or s2[j] != ch:
                continue
            s1_matched[i] = s2_matched[j] = True
            matches += 1
            break

    if matches == 0:
        return 0.0

    transpositions = 0
    k = 0
    for i, ch in enumerate(s1):
        if not s1_matched[i]:
            continue
        while not s2_matched[k]:
            k += 1
        if ch != s2[k]:
            transpositions += 1
        k += 1

    jaro = (
        matches / len1
        + matches / len2
        + (matches - transpositions / 2) / matches
    ) / 3

    prefix = 0
    for a, b in zip(s1[:_MAX_PREFIX], s2[:_MAX_PREFIX]):
        if a != b:
            break
        prefix += 1

    return jaro + _PREFIX_SCALE * prefix * (1 - jaro)
