"""
Typed query parameters for the question listing endpoints.

The raw query-string values arrive as strings; these helpers turn them into
validated objects and raise InvalidQueryError on the first violation.
"""

import re
from typing import Optional

from pydantic import BaseModel

from app.utils.dates import parse_date_bound, resolve_timezone

UUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
    re.IGNORECASE,
)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
# page and limit end up as SQL OFFSET/LIMIT binds
MAX_QUERY_INT = 2_147_483_647


class InvalidQueryError(ValueError):
    """Raised when a query parameter fails validation (maps to 400)."""
    pass


class DateRange(BaseModel):
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    start_timestamp: Optional[int] = None
    end_timestamp: Optional[int] = None


class QuestionQuery(BaseModel):
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    search: Optional[str] = None
    date_range: DateRange = DateRange()

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def parse_positive_int(
    name: str,
    raw: Optional[str],
    default: int,
    max_value: int = MAX_QUERY_INT,
) -> int:
    """Out-of-range values are rejected, never clamped."""
    if raw is None or raw.strip() == "":
        return default
    message = (
        f"Invalid {name} parameter. Must be a positive integer between 1 and {max_value} "
        f"(values are not clamped)."
    )
    try:
        value = int(raw.strip())
    except ValueError:
        raise InvalidQueryError(message)
    if value < 1 or value > max_value:
        raise InvalidQueryError(message)
    return value


def parse_pagination(
    page: Optional[str],
    limit: Optional[str],
    max_limit: int = 100,
) -> tuple[int, int]:
    """page >= 1 (default 1), 1 <= limit <= max_limit (default 10)."""
    page_num = parse_positive_int("page", page, DEFAULT_PAGE)
    limit_num = parse_positive_int("limit", limit, DEFAULT_LIMIT, max_value=max_limit)
    return page_num, limit_num


def parse_date_range(
    start_date: Optional[str],
    end_date: Optional[str],
    timezone_name: str = "UTC",
) -> DateRange:
    start = start_date.strip() if start_date and start_date.strip() else None
    end = end_date.strip() if end_date and end_date.strip() else None

    default_tz = resolve_timezone(timezone_name)
    start_ts = parse_date_bound(start, default_tz) if start else None
    end_ts = parse_date_bound(end, default_tz) if end else None

    if (start and start_ts is None) or (end and end_ts is None):
        raise InvalidQueryError(
            "Invalid date format. Use ISO date string (YYYY-MM-DD) or unix timestamp"
        )
    if start_ts is not None and end_ts is not None and start_ts > end_ts:
        raise InvalidQueryError("Start date cannot be after end date")

    return DateRange(
        start_date=start,
        end_date=end,
        start_timestamp=start_ts,
        end_timestamp=end_ts,
    )


def parse_search(search: Optional[str], max_length: int = 1000) -> Optional[str]:
    if search is None:
        return None
    term = search.strip()
    if len(term) > max_length:
        raise InvalidQueryError(
            f"Search term is too long. Maximum {max_length} characters allowed."
        )
    return term or None


def parse_identifier(name: str, raw: Optional[str]) -> str:
    """Exact-match identifiers (user id, session id) must be non-empty."""
    if raw is None or raw.strip() == "":
        raise InvalidQueryError(f"{name} is required and cannot be empty")
    return raw.strip()


def is_valid_question_id(question_id: Optional[str]) -> bool:
    return bool(question_id) and UUID_PATTERN.match(question_id) is not None
