"""Format validators for catalog codes. Invalid input returns False, never raises."""

import re

_POSTAL_CODE = re.compile(r"\d{5}", re.ASCII)
_REGION_CODE = re.compile(r"\d{2}", re.ASCII)
_NATIONAL_ID = re.compile(r"\d{6}", re.ASCII)
_ABBREVIATION = re.compile(r"[A-Z]{2}")

# Range of Italian postal codes in use
MIN_POSTAL_CODE = 10
MAX_POSTAL_CODE = 98168

MIN_REGION_CODE = 1
MAX_REGION_CODE = 20


def is_valid_postal_code(code: str) -> bool:
    """True for a trimmed 5-digit code between 00010 and 98168."""
    code = code.strip()
    if not _POSTAL_CODE.fullmatch(code):
        return False
    return MIN_POSTAL_CODE <= int(code) <= MAX_POSTAL_CODE


def is_valid_region_code(code: str) -> bool:
    if not _REGION_CODE.fullmatch(code):
        return False
    return MIN_REGION_CODE <= int(code) <= MAX_REGION_CODE


def is_valid_national_id(code: str) -> bool:
    """True for a 6-digit ISTAT municipality code."""
    return _NATIONAL_ID.fullmatch(code) is not None


def is_valid_province_abbreviation(abbreviation: str) -> bool:
    return _ABBREVIATION.fullmatch(abbreviation.upper()) is not None
