"""
Date helpers for question timestamps.

`ets` values and the startDate/endDate filters can be either a millisecond
epoch or a date string. Every helper here returns None instead of raising
when the input cannot be interpreted.
"""

import logging
import re
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Optional, Union

from dateutil import parser as date_parser
from dateutil import tz

logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
# Same range as a JavaScript Date: +-100,000,000 days around the epoch
MAX_EPOCH_MS = 8_640_000_000_000_000
_EPOCH_MS_PATTERN = re.compile(r"^-?\d+$")


def resolve_timezone(name: str) -> tzinfo:
    """Timezone by IANA name, falling back to UTC for unknown names."""
    zone = tz.gettz(name)
    if zone is None:
        logger.warning("Unknown timezone %r, using UTC", name)
        return timezone.utc
    return zone


def _parse_date_string(value: str, default_tz: tzinfo) -> Optional[datetime]:
    try:
        parsed = date_parser.parse(value)
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=default_tz)
        # dateutil accepts offsets like +99:00 that datetime refuses to apply
        parsed.utcoffset()
    except (ValueError, OverflowError):
        return None
    return parsed


def _from_epoch_ms(value: Union[int, float]) -> Optional[datetime]:
    try:
        return EPOCH + timedelta(milliseconds=value)
    except OverflowError:
        return None


def parse_date_bound(value: str, default_tz: tzinfo = timezone.utc) -> Optional[int]:
    """
    Parse a startDate/endDate query value into a millisecond epoch.

    A purely numeric string is taken as the epoch itself. Anything else goes
    through dateutil; naive results are interpreted in `default_tz`.
    """
    value = value.strip()
    if not value:
        return None
    if _EPOCH_MS_PATTERN.match(value):
        epoch_ms = int(value)
        return epoch_ms if abs(epoch_ms) <= MAX_EPOCH_MS else None

    parsed = _parse_date_string(value, default_tz)
    if parsed is None:
        return None
    return int((parsed - EPOCH).total_seconds() * 1000)


def derive_date_asked(ets: Union[int, float, str, None]) -> Optional[str]:
    """
    Best-effort "date asked" for a question row.

    Epoch milliseconds are tried first, then generic date-string parsing.
    Returns the UTC timestamp as YYYY-MM-DDTHH:MM:SS, or None.
    """
    if ets is None or isinstance(ets, bool):
        return None

    moment = None
    if isinstance(ets, (int, float)):
        moment = _from_epoch_ms(ets)
    else:
        raw = str(ets).strip()
        if _EPOCH_MS_PATTERN.match(raw):
            moment = _from_epoch_ms(int(raw))
        elif raw:
            moment = _parse_date_string(raw, timezone.utc)

    if moment is None:
        logger.warning("Could not parse date: %r", ets)
        return None

    try:
        moment = moment.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        # e.g. 9999-12-31T23:00:00-05:00 lands past datetime.max in UTC
        logger.warning("Could not parse date: %r", ets)
        return None
    return moment.strftime("%Y-%m-%dT%H:%M:%S")
