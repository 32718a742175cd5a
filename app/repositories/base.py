"""
Shared plumbing for the SQL repositories.

Each query checks out its own pooled connection and runs under a timeout;
the connection goes back to the pool as soon as the rows are read.
"""

import asyncio
from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncEngine
from sqlalchemy.sql import Executable

from app.core.config import get_settings


class SQLRepository:
    def __init__(self, engine: AsyncEngine, query_timeout: Optional[float] = None):
        self.engine = engine
        self.query_timeout = (
            query_timeout if query_timeout is not None
            else get_settings().query_timeout_seconds
        )

    async def fetch_all(self, stmt: Executable) -> list[dict[str, Any]]:
        async with self.engine.connect() as conn:
            result = await asyncio.wait_for(conn.execute(stmt), self.query_timeout)
            return [dict(row) for row in result.mappings().all()]

    async def fetch_one(self, stmt: Executable) -> Optional[dict[str, Any]]:
        async with self.engine.connect() as conn:
            result = await asyncio.wait_for(conn.execute(stmt), self.query_timeout)
            row = result.mappings().first()
            return dict(row) if row is not None else None

    async def fetch_scalar(self, stmt: Executable) -> Any:
        async with self.engine.connect() as conn:
            result = await asyncio.wait_for(conn.execute(stmt), self.query_timeout)
            return result.scalar()
