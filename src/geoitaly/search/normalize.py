"""String canonicalization for accent- and case-insensitive matching.

'Forlì-Cesena'  → 'forli cesena'
"Valle d'Aosta" → 'valle d aosta'
"""

import re
import unicodedata

# Combining Diacritical Marks block, left behind by NFD decomposition
_COMBINING_MARKS = re.compile("[\u0300-\u036f]")
_NON_ALNUM = re.compile(r"[^a-z0-9\s]")
_WHITESPACE = re.compile(r"\s+")


def normalize_string(value: str) -> str:
    """Lower-case, strip accents, turn punctuation into spaces, collapse whitespace."""
    text = unicodedata.normalize("NFD", value.lower().strip())
    text = _COMBINING_MARKS.sub("", text)
    text = _NON_ALNUM.sub(" ", text)
    return _WHITESPACE.sub(" ", text).strip()


def collation_key(name: str) -> tuple[str, str]:
    """Sort key approximating a locale-aware comparison of display names.

    Primary order ignores accents and case ('Ávila' sorts with 'avila');
    the raw name breaks remaining ties so the order is total.
    """
    base = _COMBINING_MARKS.sub("", unicodedata.normalize("NFD", name))
    return base.casefold(), name
