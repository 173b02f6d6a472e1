"""
Region classification for raw records.
Maps free-text province names and numeric location codes onto Gauteng, Limpopo or Other.
"""
import re

from models import Region


# ============================================================================
# Location Code Mapping (sales source)
# ============================================================================

GAUTENG_LOCATION_IDS = frozenset({3, 5, 6, 7, 8, 9, 10})
LIMPOPO_LOCATION_IDS = frozenset({2, 11})

# Leading integer / decimal, anything after it is ignored ("5", " 5", "5.0", "399.0000 ZAR")
_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_int(value) -> int | None:
    """Lenient integer parse. Returns None when no leading integer is present."""
    if value is None or isinstance(value, bool):
        return None
    match = _INT_PREFIX.match(str(value))
    if not match:
        return None
    return int(match.group(1))


def parse_float(value) -> float | None:
    """Lenient float parse. Returns None when no leading number is present."""
    if value is None or isinstance(value, bool):
        return None
    match = _FLOAT_PREFIX.match(str(value))
    if not match:
        return None
    return float(match.group(1))


# ============================================================================
# Classifiers
# ============================================================================

def classify_province(value) -> Region:
    """
    Classify a free-text province name.

    Matching is a case-insensitive substring check so values such as
    "Gauteng Province" or "limpopo region" still land in the right bucket.
    Anything else, including blanks, is Other.
    """
    if value is None:
        return Region.OTHER

    text = str(value).strip().lower()
    if "gauteng" in text:
        return Region.GAUTENG
    if "limpopo" in text:
        return Region.LIMPOPO
    return Region.OTHER


def classify_location(value) -> Region:
    """Classify a numeric location code; unparseable codes are Other."""
    code = parse_int(value)
    if code in GAUTENG_LOCATION_IDS:
        return Region.GAUTENG
    if code in LIMPOPO_LOCATION_IDS:
        return Region.LIMPOPO
    return Region.OTHER
