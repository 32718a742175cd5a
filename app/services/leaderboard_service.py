"""
LeaderboardService - Serves geographic leaderboards straight from SQL.

Nothing is computed in Python: the database ranks, this service picks the
village set to rank over and shapes the result.
"""

import asyncio
from typing import Optional

from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncEngine

from app.core.config import Settings, get_settings
from app.models.leaderboard import LeaderboardEntry, LeaderboardScope, ScopedLeaderboardEntry
from app.models.village import DistrictInfo, TalukaInfo
from app.repositories.leaderboard_repository import LeaderboardRepository
from app.services.village_service import VillageDirectory
from app.utils.pagination import offset_for, total_pages_for


class LeaderboardServiceError(Exception):
    """Base exception for leaderboard service errors."""
    pass


class MissingLocationError(LeaderboardServiceError):
    """Raised when the caller has no registered location code."""
    pass


class TopLeaderboard(BaseModel):
    entries: list[LeaderboardEntry]
    taluka: Optional[TalukaInfo] = None
    district: Optional[DistrictInfo] = None


class LeaderboardPage(BaseModel):
    page: int
    per_page: int
    total: int
    total_pages: int
    entries: list[ScopedLeaderboardEntry]


class LeaderboardService:
    def __init__(
        self,
        db: AsyncEngine,
        villages: VillageDirectory,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or get_settings()
        self.repo = LeaderboardRepository(db, self.settings.query_timeout_seconds)
        self.villages = villages

    @staticmethod
    def _require_location(lgd_code: Optional[str]) -> str:
        if lgd_code is None or str(lgd_code).strip() == "":
            raise MissingLocationError("Registered location lgd_code not found in user token")
        return str(lgd_code).strip()

    async def get_top_by_taluka(
        self,
        lgd_code: Optional[str],
        require_farmer_id: bool = False,
    ) -> TopLeaderboard:
        """Top N within the caller's taluka. Raises VillageNotFoundError."""
        code = self._require_location(lgd_code)
        taluka = self.villages.resolve_taluka(code)

        rows = await self.repo.get_top(
            self.settings.top_n,
            village_codes=[str(c) for c in taluka.village_codes],
            require_farmer_id=require_farmer_id,
        )
        return TopLeaderboard(entries=[LeaderboardEntry(**r) for r in rows], taluka=taluka)

    async def get_top_by_district(
        self,
        lgd_code: Optional[str],
        require_farmer_id: bool = False,
    ) -> TopLeaderboard:
        """Top N within the caller's district. Raises VillageNotFoundError."""
        code = self._require_location(lgd_code)
        district = self.villages.resolve_district(code)

        rows = await self.repo.get_top(
            self.settings.top_n,
            village_codes=[str(c) for c in district.village_codes],
            require_farmer_id=require_farmer_id,
        )
        return TopLeaderboard(entries=[LeaderboardEntry(**r) for r in rows], district=district)

    async def get_top_by_state(
        self,
        lgd_code: Optional[str],
        require_farmer_id: bool = False,
    ) -> TopLeaderboard:
        """Global top N. The location is still required to identify the caller."""
        self._require_location(lgd_code)

        rows = await self.repo.get_top(
            self.settings.top_n,
            require_farmer_id=require_farmer_id,
        )
        return TopLeaderboard(entries=[LeaderboardEntry(**r) for r in rows])

    async def get_users_by_scope(
        self,
        scope: LeaderboardScope,
        codes: list[str],
        page: int = 1,
    ) -> LeaderboardPage:
        """
        One page of users registered under any of `codes`.

        The count and the page run concurrently over the same predicate.
        """
        per_page = self.settings.leaderboard_page_size

        total, rows = await asyncio.gather(
            self.repo.count_by_scope(scope, codes),
            self.repo.get_page_by_scope(scope, codes, per_page, offset_for(page, per_page)),
        )

        return LeaderboardPage(
            page=page,
            per_page=per_page,
            total=total,
            total_pages=total_pages_for(total, per_page),
            entries=[ScopedLeaderboardEntry(**r) for r in rows],
        )
