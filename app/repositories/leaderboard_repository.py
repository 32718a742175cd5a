"""
LeaderboardRepository - SQL access for the leaderboard table.

Ranking is always delegated to the database: ORDER BY record_count DESC.
"""

from typing import Optional, Sequence

from sqlalchemy import and_, func, select
from sqlalchemy.sql.elements import ColumnElement

from app.models.leaderboard import LeaderboardScope
from app.models.tables import leaderboard
from app.repositories.base import SQLRepository

TOP_COLUMNS = (
    leaderboard.c.unique_id,
    leaderboard.c.username,
    leaderboard.c.registered_location,
    leaderboard.c.record_count,
    leaderboard.c.farmer_id,
)

SCOPED_COLUMNS = TOP_COLUMNS + (
    leaderboard.c.village_code,
    leaderboard.c.taluka_code,
    leaderboard.c.district_code,
)

# registered_location->>'lgd_code'
registered_lgd_code = leaderboard.c.registered_location["lgd_code"].as_string()


def _has_value(column) -> ColumnElement:
    return and_(column.isnot(None), column != "")


def scope_predicate(scope: LeaderboardScope, codes: Sequence[str]) -> ColumnElement:
    """Membership filter shared by the count and the page query."""
    return leaderboard.c[scope.column_name].in_([str(c) for c in codes])


class LeaderboardRepository(SQLRepository):

    # ============================================
    # 📌 TOP N
    # ============================================

    async def get_top(
        self,
        limit: int,
        village_codes: Optional[Sequence[str]] = None,
        require_farmer_id: bool = False,
    ) -> list[dict]:
        """
        Top entries by record_count.

        Rows without unique_id are never ranked. When village_codes is given
        only users registered in one of those villages are considered.
        """
        conditions = [_has_value(leaderboard.c.unique_id)]

        if village_codes is not None:
            conditions.append(registered_lgd_code.in_([str(c) for c in village_codes]))
        if require_farmer_id:
            conditions.append(_has_value(leaderboard.c.farmer_id))

        stmt = (
            select(*TOP_COLUMNS)
            .where(and_(*conditions))
            .order_by(leaderboard.c.record_count.desc())
            .limit(limit)
        )
        return await self.fetch_all(stmt)

    # ============================================
    # 📌 PAGINADO POR SCOPE
    # ============================================

    async def count_by_scope(self, scope: LeaderboardScope, codes: Sequence[str]) -> int:
        stmt = (
            select(func.count())
            .select_from(leaderboard)
            .where(scope_predicate(scope, codes))
        )
        return int(await self.fetch_scalar(stmt) or 0)

    async def get_page_by_scope(
        self,
        scope: LeaderboardScope,
        codes: Sequence[str],
        limit: int,
        offset: int,
    ) -> list[dict]:
        stmt = (
            select(*SCOPED_COLUMNS)
            .where(scope_predicate(scope, codes))
            # unique_id keeps page boundaries stable between equal counts
            .order_by(leaderboard.c.record_count.desc(), leaderboard.c.unique_id)
            .limit(limit)
            .offset(offset)
        )
        return await self.fetch_all(stmt)
