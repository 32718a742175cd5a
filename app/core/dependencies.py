"""
Dependencies de FastAPI para autenticacion, parametros e inyeccion de BD
"""

from typing import Annotated, Optional

from fastapi import Depends, HTTPException, Query, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncEngine

from app.core.config import Settings, get_settings
from app.core.security import decode_access_token, extract_registered_lgd_code
from app.database import get_database
from app.schemas.question_query import (
    InvalidQueryError,
    QuestionQuery,
    parse_date_range,
    parse_pagination,
    parse_search,
)
from app.services.village_service import VillageDirectory, get_village_directory

# Esquema de seguridad: espera un header "Authorization: Bearer <token>"
# auto_error=False para responder con nuestro propio 401
security = HTTPBearer(auto_error=False)


async def get_token_payload(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)],
) -> dict:
    """
    Dependency que valida el JWT del usuario.

    Retorna el payload si el token es valido.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = await decode_access_token(credentials.credentials)
    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return payload


async def get_registered_lgd_code(
    payload: Annotated[dict, Depends(get_token_payload)],
) -> Optional[str]:
    """lgd_code de la ubicación registrada (None si el token no la trae)"""
    return extract_registered_lgd_code(payload)


def get_question_query(
    settings: Annotated[Settings, Depends(get_settings)],
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
) -> QuestionQuery:
    """
    Parsea page/limit/search/startDate/endDate.

    Cualquier valor invalido corta el request con 400 antes de tocar la BD.
    """
    try:
        page_num, limit_num = parse_pagination(page, limit, settings.max_question_page_size)
        term = parse_search(search, settings.max_search_length)
        date_range = parse_date_range(start_date, end_date, settings.date_filter_timezone)
    except InvalidQueryError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))

    return QuestionQuery(page=page_num, limit=limit_num, search=term, date_range=date_range)


# Alias de tipos para que se vea mas limpio en los endpoints
Database = Annotated[AsyncEngine, Depends(get_database)]
RegisteredLgdCode = Annotated[Optional[str], Depends(get_registered_lgd_code)]
Villages = Annotated[VillageDirectory, Depends(get_village_directory)]
QuestionParams = Annotated[QuestionQuery, Depends(get_question_query)]
