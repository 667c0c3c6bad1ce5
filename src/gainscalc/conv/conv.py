from __future__ import annotations

import datetime as dt
import logging
import re
from decimal import Decimal, InvalidOperation

NUM_PREFIX_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")
US_DATE_RE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")


logger = logging.getLogger(__name__)


def to_dec(
    s: str | float | int | Decimal | None, default: Decimal = Decimal("0")
) -> Decimal:
    """Convert CSV numeric strings to Decimal, coercing anything unusable to default.

    Mirrors how brokerage exports are read by a browser uploader:
    - None, "" -> default
    - "12.5" -> Decimal("12.5")
    - "12.5 USD" -> Decimal("12.5") (leading numeric prefix is kept)
    - "abc" -> default
    """
    if s is None:
        return default
    if isinstance(s, Decimal):
        return s
    if isinstance(s, (int, float)):
        return Decimal(str(s))

    s_stripped = s.strip()
    if not s_stripped:
        return default

    m = NUM_PREFIX_RE.match(s_stripped)
    if m is None:
        logger.debug("Non-numeric value %r; using %s", s, default)
        return default

    try:
        return Decimal(m.group(0))
    except InvalidOperation:
        logger.debug("Failed to parse number from: %r; using %s", s, default)
        return default


def parse_date(d: str) -> dt.date:
    """Parse date-like strings.

    Handles 'YYYY-MM-DD', 'YYYY-MM-DD, HH:MM:SS', 'YYYY-MM-DDTHH:MM:SS' and the
    US 'MM/DD/YYYY' form. Raises ValueError for anything else.
    """
    d = d.strip()
    if "," in d:
        d = d.split(",")[0].strip()
    if "T" in d:
        d = d.split("T")[0]

    m = US_DATE_RE.match(d)
    if m is not None:
        month, day, year = (int(g) for g in m.groups())
        return dt.date(year, month, day)
    return dt.date.fromisoformat(d)
