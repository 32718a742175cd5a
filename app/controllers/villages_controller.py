"""
Controlador de aldeas - Consulta del listado de aldeas por taluka/distrito
"""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status
from pydantic import BaseModel

from app.core.dependencies import Villages
from app.models.village import DistrictInfo, TalukaInfo
from app.services.village_service import VillageDirectory, VillageNotFoundError


router = APIRouter(prefix="/villages", tags=["villages"])

FETCHED_MESSAGE = "Villages fetched successfully"


class TalukaCodes(BaseModel):
    """Versión reducida de TalukaInfo (solo códigos)."""
    village_code: int
    taluka_code: int
    taluka_name: Optional[str] = None
    total_villages: int
    village_codes: list[int]


class TalukaResponse(BaseModel):
    success: bool = True
    message: str = FETCHED_MESSAGE
    data: TalukaInfo


class TalukaCodesResponse(BaseModel):
    success: bool = True
    message: str = "Village codes fetched successfully"
    data: TalukaCodes


class DistrictResponse(BaseModel):
    success: bool = True
    message: str = FETCHED_MESSAGE
    data: DistrictInfo


def _resolve_taluka(villages: VillageDirectory, village_code: Optional[str]) -> TalukaInfo:
    if not village_code or not village_code.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="village_code is required")
    try:
        return villages.resolve_taluka(village_code)
    except VillageNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("/taluka", response_model=TalukaResponse)
async def get_villages_by_taluka(
    villages: Villages,
    village_code: Optional[str] = Query(None),
):
    """Todas las aldeas de la misma taluka que `village_code`."""
    return TalukaResponse(data=_resolve_taluka(villages, village_code))


@router.get("/taluka/codes", response_model=TalukaCodesResponse)
async def get_village_codes_by_taluka(
    villages: Villages,
    village_code: Optional[str] = Query(None),
):
    """Solo los códigos de aldea de la taluka."""
    info = _resolve_taluka(villages, village_code)
    return TalukaCodesResponse(
        data=TalukaCodes(
            village_code=info.village_code,
            taluka_code=info.taluka_code,
            taluka_name=info.taluka_name,
            total_villages=info.total_villages,
            village_codes=info.village_codes,
        )
    )


@router.get("/taluka/{village_code}", response_model=TalukaResponse)
async def get_villages_by_taluka_path(village_code: str, villages: Villages):
    """Igual que /villages/taluka pero con el código en el path."""
    return TalukaResponse(data=_resolve_taluka(villages, village_code))


@router.get("/district", response_model=DistrictResponse)
async def get_villages_by_district(
    villages: Villages,
    village_code: Optional[str] = Query(None),
):
    """Todas las aldeas del mismo distrito que `village_code`."""
    if not village_code or not village_code.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="village_code is required")
    try:
        info = villages.resolve_district(village_code)
    except VillageNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    return DistrictResponse(data=info)
