"""
Roadmap date helpers.

Roadmap dates are written MM.DD.YY; todo.txt wants YYYY-MM-DD.
Pure functions, no external dependencies.
"""

import re
from typing import Optional

MMDDYY_PATTERN = re.compile(r"^([0-9]{2})\.([0-9]{2})\.([0-9]{2})$")

# Two-digit years up to this value land in the 2000s, the rest in the 1900s.
CENTURY_PIVOT = 50


def is_valid_mmddyy(value: Optional[str]) -> bool:
    """True if value has the MM.DD.YY shape."""
    return bool(value) and MMDDYY_PATTERN.match(value) is not None


def expand_year(two_digit_year: int) -> int:
    """
    Expand a two-digit year using the fixed century pivot.

    00-50 -> 2000-2050, 51-99 -> 1951-1999.
    """
    if 0 <= two_digit_year <= CENTURY_PIVOT:
        return 2000 + two_digit_year
    return 1900 + two_digit_year


def mmddyy_to_iso(value: Optional[str]) -> Optional[str]:
    """
    Convert MM.DD.YY to YYYY-MM-DD.

    Args:
        value: Date string from a roadmap tag

    Returns:
        ISO-style date string, or None if value is missing or malformed
    """
    if not value:
        return None
    m = MMDDYY_PATTERN.match(value)
    if not m:
        return None
    month, day, year = m.groups()
    return f"{expand_year(int(year))}-{month}-{day}"
