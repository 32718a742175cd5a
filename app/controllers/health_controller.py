"""
Controlador de salud - Verifica que el pool responda
"""

import asyncio
import logging

from fastapi import APIRouter
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from app.database import Database

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])

PING_TIMEOUT_SECONDS = 2.0


class HealthResponse(BaseModel):
    status: str
    database: str  # connected | unreachable | disconnected


async def ping_database() -> str:
    """Un SELECT 1 con timeout corto sobre el engine actual."""
    engine = Database.engine
    if engine is None:
        return "disconnected"

    try:
        async with engine.connect() as conn:
            await asyncio.wait_for(conn.execute(text("SELECT 1")), PING_TIMEOUT_SECONDS)
    except (SQLAlchemyError, OSError, asyncio.TimeoutError) as exc:
        logger.warning("Database ping failed: %s", exc)
        return "unreachable"
    return "connected"


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Estado del servicio.

    status es "ok" solo si la base de datos contesta.
    """
    db_status = await ping_database()
    return HealthResponse(status="ok" if db_status == "connected" else "degraded", database=db_status)
