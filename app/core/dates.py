"""
Date parsing shared by every comparison in the aggregator.

Sheet cells arrive as `DD/MM/YYYY` (typed by reps) or `YYYY-MM-DD`
(exported by the warehouse). Months are `MM/YYYY`.

Under the lenient policy an empty or unparseable value becomes EPOCH and a
warning is logged, so bad rows sort as "oldest" instead of failing the view.
"""
from __future__ import annotations

import enum
import logging
import re
from datetime import date
from typing import Optional

from app.core.errors import GatewayError

logger = logging.getLogger(__name__)

EPOCH = date(1970, 1, 1)

_DMY = re.compile(r"^(\d{2})/(\d{2})/(\d{4})$")
_ISO = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
_MONTH_YEAR = re.compile(r"^(\d{1,2})/(\d{4})$")


class DateParsePolicy(str, enum.Enum):
    lenient_epoch_fallback = "lenient"
    strict = "strict"


class MalformedDateError(GatewayError):
    code = "MALFORMED_DATE"


def _fallback(value: Optional[str], policy: DateParsePolicy) -> date:
    if policy == DateParsePolicy.strict:
        raise MalformedDateError(f"Cannot parse date: {value!r}")
    if value:
        logger.warning("Cannot parse date: %r", value)
    return EPOCH


def parse_date(
    value: Optional[str],
    policy: DateParsePolicy = DateParsePolicy.lenient_epoch_fallback,
) -> date:
    """Parse `DD/MM/YYYY` or `YYYY-MM-DD`."""
    text = (value or "").strip()
    if not text:
        return _fallback(value, policy)

    match = _DMY.match(text)
    if match:
        day, month, year = match.groups()
    else:
        match = _ISO.match(text)
        if not match:
            return _fallback(value, policy)
        year, month, day = match.groups()

    try:
        return date(int(year), int(month), int(day))
    except ValueError:
        return _fallback(value, policy)


def parse_month_year(
    value: Optional[str],
    policy: DateParsePolicy = DateParsePolicy.lenient_epoch_fallback,
) -> date:
    """Parse a `MM/YYYY` month into the first day of that month."""
    match = _MONTH_YEAR.match((value or "").strip())
    if not match:
        return _fallback(value, policy)
    month, year = match.groups()
    try:
        return date(int(year), int(month), 1)
    except ValueError:
        return _fallback(value, policy)


def to_iso(value: date) -> str:
    return value.strftime("%Y-%m-%d")


def to_dmy(value: date) -> str:
    return value.strftime("%d/%m/%Y")


def days_since(
    value: Optional[str],
    today: date,
    policy: DateParsePolicy = DateParsePolicy.lenient_epoch_fallback,
) -> Optional[int]:
    """Whole days between `value` and `today`; None when the date is unusable."""
    parsed = parse_date(value, policy)
    if parsed == EPOCH:
        return None
    return abs((today - parsed).days)
