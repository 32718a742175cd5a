"""
Seguridad: verificación de los JWT emitidos por Keycloak

El token trae la ubicación registrada del usuario; el leaderboard la usa
para saber en qué taluka/distrito rankear.
"""

import logging
from typing import Optional

import httpx
from jose import JWTError, jwt

from app.core.config import get_settings

logger = logging.getLogger(__name__)

REGISTERED_LOCATION_TYPE = "registered_location"

# JWKS cacheado por proceso; se refresca ante un kid desconocido
_jwks_cache: Optional[dict] = None


class AuthConfigError(Exception):
    """Se lanza cuando no hay forma de verificar tokens (ni JWKS ni secret)"""
    pass


async def fetch_jwks(url: str) -> dict:
    """Descarga el JWKS de Keycloak (y lo cachea)"""
    global _jwks_cache

    if _jwks_cache is None:
        async with httpx.AsyncClient(timeout=30) as client:
            response = await client.get(url)
            response.raise_for_status()
            _jwks_cache = response.json()
        logger.info("JWKS loaded from %s", url)

    return _jwks_cache


def clear_jwks_cache():
    global _jwks_cache
    _jwks_cache = None


def _has_kid(jwks: dict, kid: Optional[str]) -> bool:
    return any(k.get("kid") == kid for k in jwks.get("keys", []))


async def load_signing_keys(token: str, jwks_url: str) -> Optional[dict]:
    """
    JWKS para verificar `token`

    Si el kid del token no está en el JWKS cacheado (Keycloak rotó la
    clave) se vuelve a descargar una vez.
    """
    try:
        kid = jwt.get_unverified_header(token).get("kid")
    except JWTError as exc:
        logger.warning("Auth error: %s", exc)
        return None

    try:
        jwks = await fetch_jwks(jwks_url)
        if kid and not _has_kid(jwks, kid):
            logger.info("Unknown kid %r, refreshing JWKS", kid)
            clear_jwks_cache()
            jwks = await fetch_jwks(jwks_url)
    except httpx.HTTPError as exc:
        logger.error("Error getting signing keys from %s: %s", jwks_url, exc)
        return None
    return jwks


async def decode_access_token(token: str) -> Optional[dict]:
    """
    Decodifica y valida un JWT

    Usa el JWKS de Keycloak (RS256) si está configurado; si no, el
    jwt_secret local. Retorna el payload si es válido, None si no.
    """
    settings = get_settings()
    jwks_url = settings.jwks_url

    if jwks_url:
        key = await load_signing_keys(token, jwks_url)
        if key is None:
            return None
        algorithms = ["RS256"]
    elif settings.jwt_secret:
        key = settings.jwt_secret
        algorithms = [settings.jwt_algorithm]
    else:
        raise AuthConfigError(
            "KEYCLOAK_JWKS_URI, KEYCLOAK_URL + KEYCLOAK_REALM or JWT_SECRET must be set"
        )

    try:
        return jwt.decode(
            token,
            key,
            algorithms=algorithms,
            options={"verify_aud": False},
        )
    except JWTError as exc:
        # Token inválido, expirado, o corrupto
        logger.warning("Auth error: %s", exc)
        return None


def extract_registered_lgd_code(payload: dict) -> Optional[str]:
    """
    Busca el lgd_code de la ubicación registrada dentro de `locations`

    {"locations": [{"location_type": "registered_location", "lgd_code": 979797}]}
    """
    locations = payload.get("locations")
    if not isinstance(locations, list):
        return None

    for location in locations:
        if isinstance(location, dict) and location.get("location_type") == REGISTERED_LOCATION_TYPE:
            lgd_code = location.get("lgd_code")
            if lgd_code is None or str(lgd_code).strip() == "":
                return None
            return str(lgd_code).strip()

    return None
