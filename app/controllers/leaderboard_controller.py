"""
Controlador de leaderboards - Endpoints de clasificación

Los rankings los arma la base de datos (ORDER BY record_count DESC);
este controlador elige el conjunto de aldeas según la ubicación del usuario.
"""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status
from pydantic import BaseModel

from app.core.dependencies import Database, RegisteredLgdCode, Villages
from app.models.leaderboard import LeaderboardEntry, ScopedLeaderboardEntry
from app.schemas.leaderboard_query import parse_page, parse_scope_filter
from app.schemas.question_query import InvalidQueryError
from app.services.leaderboard_service import LeaderboardService, MissingLocationError
from app.services.village_service import VillageNotFoundError


router = APIRouter(tags=["leaderboard"])


class TalukaInfoResponse(BaseModel):
    """Datos de la taluka del usuario."""
    taluka_name: Optional[str] = None
    district_name: Optional[str] = None
    total_villages: int


class DistrictInfoResponse(BaseModel):
    """Datos del distrito del usuario."""
    district_name: Optional[str] = None
    total_villages: int


class TopLeaderboardResponse(BaseModel):
    """Top N del ranking."""
    success: bool = True
    data: list[LeaderboardEntry]
    count: int


class TalukaLeaderboardResponse(TopLeaderboardResponse):
    taluka_info: TalukaInfoResponse


class DistrictLeaderboardResponse(TopLeaderboardResponse):
    district_info: DistrictInfoResponse


class LeaderboardUsersResponse(BaseModel):
    """Página de usuarios de un distrito/taluka/aldea."""
    success: bool = True
    page: int
    per_page: int
    total: int
    total_pages: int
    count: int
    data: list[ScopedLeaderboardEntry]


def _bad_request(message: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message)


def _not_found(message: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=message)


@router.get("/top10/state", response_model=TopLeaderboardResponse)
async def get_top_by_state(
    db: Database,
    villages: Villages,
    lgd_code: RegisteredLgdCode,
    farmer_id: Optional[str] = Query(None, description="Only rank users with a farmer ID"),
):
    """
    Obtener el top del estado (sin filtro geográfico).
    """
    leaderboard_service = LeaderboardService(db, villages)
    try:
        top = await leaderboard_service.get_top_by_state(lgd_code, require_farmer_id=bool(farmer_id))
    except MissingLocationError as e:
        raise _bad_request(str(e))

    return TopLeaderboardResponse(data=top.entries, count=len(top.entries))


@router.get("/top10/taluka", response_model=TalukaLeaderboardResponse)
async def get_top_by_taluka(
    db: Database,
    villages: Villages,
    lgd_code: RegisteredLgdCode,
    farmer_id: Optional[str] = Query(None, description="Only rank users with a farmer ID"),
):
    """
    Obtener el top de la taluka del usuario.
    """
    leaderboard_service = LeaderboardService(db, villages)
    try:
        top = await leaderboard_service.get_top_by_taluka(lgd_code, require_farmer_id=bool(farmer_id))
    except MissingLocationError as e:
        raise _bad_request(str(e))
    except VillageNotFoundError as e:
        raise _not_found(str(e) or "Could not find village information")

    return TalukaLeaderboardResponse(
        data=top.entries,
        count=len(top.entries),
        taluka_info=TalukaInfoResponse(
            taluka_name=top.taluka.taluka_name,
            district_name=top.taluka.district_name,
            total_villages=top.taluka.total_villages,
        ),
    )


@router.get("/top10/district", response_model=DistrictLeaderboardResponse)
async def get_top_by_district(
    db: Database,
    villages: Villages,
    lgd_code: RegisteredLgdCode,
    farmer_id: Optional[str] = Query(None, description="Only rank users with a farmer ID"),
):
    """
    Obtener el top del distrito del usuario.
    """
    leaderboard_service = LeaderboardService(db, villages)
    try:
        top = await leaderboard_service.get_top_by_district(lgd_code, require_farmer_id=bool(farmer_id))
    except MissingLocationError as e:
        raise _bad_request(str(e))
    except VillageNotFoundError as e:
        raise _not_found(str(e) or "Could not find district information")

    return DistrictLeaderboardResponse(
        data=top.entries,
        count=len(top.entries),
        district_info=DistrictInfoResponse(
            district_name=top.district.district_name,
            total_villages=top.district.total_villages,
        ),
    )


@router.get("/leaderboard/users", response_model=LeaderboardUsersResponse)
async def get_leaderboard_users(
    db: Database,
    villages: Villages,
    district_code: Optional[str] = Query(None, description="Comma-separated district codes"),
    taluka_code: Optional[str] = Query(None, description="Comma-separated taluka codes"),
    village_code: Optional[str] = Query(None, description="Comma-separated village codes"),
    page: Optional[str] = Query(None),
):
    """
    Obtener usuarios paginados de uno o más distritos, talukas o aldeas.

    Se acepta exactamente uno de district_code, taluka_code o village_code.
    """
    try:
        scope_filter = parse_scope_filter(district_code, taluka_code, village_code)
        page_num = parse_page(page)
    except InvalidQueryError as e:
        raise _bad_request(str(e))

    leaderboard_service = LeaderboardService(db, villages)
    result = await leaderboard_service.get_users_by_scope(
        scope_filter.scope, scope_filter.codes, page_num
    )

    return LeaderboardUsersResponse(
        page=result.page,
        per_page=result.per_page,
        total=result.total,
        total_pages=result.total_pages,
        count=len(result.entries),
        data=result.entries,
    )
