"""
🔌 Database Connection Setup - PostgreSQL

Configuración centralizada del pool de conexiones (SQLAlchemy async)
"""

import logging
from typing import Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from app.core.config import get_settings

logger = logging.getLogger(__name__)


class Database:
    """Singleton para el engine (y su pool de conexiones)"""

    engine: Optional[AsyncEngine] = None

    @classmethod
    async def connect(cls):
        """Crea el engine y prueba la conexión"""
        if cls.engine is None:
            settings = get_settings()

            engine_kwargs = {"pool_pre_ping": True}
            # SQLite (tests/local) no acepta parámetros de pool
            if not settings.database_url.startswith("sqlite"):
                engine_kwargs.update(
                    pool_size=settings.db_pool_size,
                    max_overflow=settings.db_max_overflow,
                    pool_timeout=settings.db_pool_timeout_seconds,
                )

            cls.engine = create_async_engine(settings.database_url, **engine_kwargs)

            # Test de conexión
            async with cls.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            logger.info("✅ Connected to database: %s", cls.engine.url.render_as_string(hide_password=True))

    @classmethod
    async def disconnect(cls):
        """Cierra el pool"""
        if cls.engine is not None:
            await cls.engine.dispose()
            cls.engine = None
            logger.info("❌ Disconnected from database")

    @classmethod
    def get_engine(cls) -> AsyncEngine:
        """Retorna el engine"""
        if cls.engine is None:
            raise RuntimeError("Database not connected. Call Database.connect() first.")
        return cls.engine


# ============================================
# 🎯 DEPENDENCY para FastAPI
# ============================================

async def get_database() -> AsyncEngine:
    """
    FastAPI dependency para inyectar el engine

    Uso:
        @router.get("/questions/{question_id}")
        async def get_question(question_id: str, db: Database):
            service = QuestionService(db)
            return await service.get_question(question_id)
    """
    return Database.get_engine()
