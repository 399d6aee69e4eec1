"""Country code helpers that need no registry state.

Keep this as the ONLY place country codes get normalized.

Notes:
  - Registry keys are lowercase; every lookup goes through normalize_code().
  - validate_country_code() is a format check only. A well-formed code can
    still be missing from the registry, and the registry can hold longer keys
    (subdivisions such as "gb-eng") that fail this check.
  - get_flag_emoji() returns None for anything that is not two ASCII letters
    so callers can fall back to the SVG.
"""

from __future__ import annotations

import re
from typing import Any, Optional

from ..errors import InvalidArgumentError


# Regional Indicator Symbol Letter A is U+1F1E6, 'A' is U+0041.
REGIONAL_INDICATOR_OFFSET = 127397

_CODE_RE = re.compile(r"[A-Za-z]{2}")


def normalize_code(country_code: Any) -> str:
    """Return the registry key form of a country code (stripped, lowercase)."""
    if not isinstance(country_code, str):
        raise InvalidArgumentError(
            f"country code must be a string, got {type(country_code).__name__}"
        )
    return country_code.strip().lower()


def validate_country_code(country_code: Any) -> bool:
    """True iff the value is exactly two ASCII letters, in any case."""
    if not isinstance(country_code, str):
        return False
    return bool(_CODE_RE.fullmatch(country_code))


def get_flag_emoji(country_code: Any) -> Optional[str]:
    """Return the regional-indicator flag emoji for a 2-letter code, or None."""
    if not validate_country_code(country_code):
        return None
    return "".join(chr(REGIONAL_INDICATOR_OFFSET + ord(ch)) for ch in country_code.upper())
