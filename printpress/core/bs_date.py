"""Bikram Sambat (BS) date strings.

Ledger dates are BS calendar dates kept as zero-padded ``YYYY-MM-DD``
strings, so plain string comparison gives chronological order. No
conversion to or from the Gregorian calendar happens here.
"""

import re

_BS_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")

MIN_YEAR = 2000
MAX_YEAR = 2100


def is_valid_bs_date(value: str) -> bool:
    """Return True if *value* is a plausible zero-padded BS date."""
    match = _BS_DATE_RE.match(value or "")
    if not match:
        return False
    year, month, day = (int(part) for part in match.groups())
    if not MIN_YEAR <= year <= MAX_YEAR:
        return False
    if not 1 <= month <= 12:
        return False
    # BS months run from 29 to 32 days
    return 1 <= day <= 32


def normalize_bs_date(value: str) -> str:
    """Zero-pad a ``Y-M-D`` string such as ``2081-1-5`` to ``2081-01-05``.

    Raises:
        ValueError: if the value is not a BS date.
    """
    parts = (value or "").strip().replace("/", "-").split("-")
    if len(parts) != 3 or not all(part.isdigit() for part in parts):
        raise ValueError(f"Invalid BS date: {value!r}")
    normalized = f"{int(parts[0]):04d}-{int(parts[1]):02d}-{int(parts[2]):02d}"
    if not is_valid_bs_date(normalized):
        raise ValueError(f"Invalid BS date: {value!r}")
    return normalized


def format_bs_date(value: str) -> str:
    """Format for reports: ``2081-01-05`` becomes ``2081/01/05``."""
    match = _BS_DATE_RE.match(value or "")
    if not match:
        return value
    return "/".join(match.groups())
