"""
Entry point de la API

Leaderboards por taluka/distrito/estado y navegación del log de preguntas.
Todas las rutas son GET de solo lectura.
"""

import logging
from contextlib import asynccontextmanager
from typing import Iterable

from fastapi import FastAPI, Request
from fastapi.responses import Response
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.config import get_settings
from app.core.errors import register_exception_handlers
from app.database import Database

from app.controllers.health_controller import router as health_router
from app.controllers.leaderboard_controller import router as leaderboard_router
from app.controllers.questions_controller import router as questions_router
from app.controllers.villages_controller import router as villages_router

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

ALLOWED_METHODS = "GET, OPTIONS"
ALLOWED_HEADERS = "Authorization, Content-Type, Accept, Origin"


class ReadOnlyCORSMiddleware(BaseHTTPMiddleware):
    """
    CORS para una API de solo lectura.

    El preflight se contesta acá mismo, antes de que el router valide
    query params. "*" en la lista acepta cualquier origen.
    """

    def __init__(self, app, allowed_origins: Iterable[str] = ()):
        super().__init__(app)
        self.allowed_origins = {o.strip() for o in allowed_origins if o.strip()}
        self.allow_any = "*" in self.allowed_origins

    def origin_allowed(self, origin: str) -> bool:
        if not origin:
            return False
        return self.allow_any or origin in self.allowed_origins

    async def dispatch(self, request: Request, call_next):
        origin = request.headers.get("origin", "")

        if request.method == "OPTIONS":
            if not self.origin_allowed(origin):
                return Response(status_code=403, content="Origin not allowed")
            return Response(
                status_code=204,
                headers={
                    "Access-Control-Allow-Origin": origin,
                    "Access-Control-Allow-Methods": ALLOWED_METHODS,
                    "Access-Control-Allow-Headers": ALLOWED_HEADERS,
                    "Access-Control-Max-Age": "86400",
                    "Vary": "Origin",
                },
            )

        response = await call_next(request)
        if self.origin_allowed(origin):
            response.headers["Access-Control-Allow-Origin"] = origin
            response.headers["Vary"] = "Origin"
        return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    # El pool vive lo mismo que el proceso
    await Database.connect()
    logger.info("API ready (prefix=%r, env=%s)", settings.api_prefix, settings.app_env)
    try:
        yield
    finally:
        await Database.disconnect()


app = FastAPI(
    title="Telemetry Leaderboard API",
    description="Leaderboards geográficos y log de preguntas de la telemetría",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    ReadOnlyCORSMiddleware,
    allowed_origins=settings.cors_origins.split(","),
)

# Errores con el sobre {"success": false, "message": ...}
register_exception_handlers(app)

# /health queda fuera del prefijo para los balanceadores
app.include_router(health_router)
for router in (leaderboard_router, questions_router, villages_router):
    app.include_router(router, prefix=settings.api_prefix)


@app.get("/")
async def root():
    return {
        "name": app.title,
        "version": app.version,
        "docs": "/docs",
    }
