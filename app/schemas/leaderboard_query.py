from typing import Optional

from pydantic import BaseModel

from app.models.leaderboard import LeaderboardScope
from app.schemas.question_query import InvalidQueryError, parse_positive_int


class ScopeFilter(BaseModel):
    """Scope + códigos ya limpios para /leaderboard/users"""

    scope: LeaderboardScope
    codes: list[str]


def split_codes(raw: Optional[str]) -> list[str]:
    """'12, 34,,56' -> ['12', '34', '56']"""
    if not raw:
        return []
    return [code.strip() for code in raw.split(",") if code.strip()]


def parse_scope_filter(
    district_code: Optional[str] = None,
    taluka_code: Optional[str] = None,
    village_code: Optional[str] = None,
) -> ScopeFilter:
    """Exactly one of the three scopes must carry at least one code."""
    candidates = {
        LeaderboardScope.DISTRICT: split_codes(district_code),
        LeaderboardScope.TALUKA: split_codes(taluka_code),
        LeaderboardScope.VILLAGE: split_codes(village_code),
    }
    provided = [(scope, codes) for scope, codes in candidates.items() if codes]

    if not provided:
        raise InvalidQueryError(
            "One of district_code, taluka_code or village_code is required"
        )
    if len(provided) > 1:
        raise InvalidQueryError(
            "Only one of district_code, taluka_code or village_code may be provided"
        )

    scope, codes = provided[0]
    return ScopeFilter(scope=scope, codes=codes)


def parse_page(raw: Optional[str]) -> int:
    return parse_positive_int("page", raw, 1)
