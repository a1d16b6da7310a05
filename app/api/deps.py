from typing import Optional
import hmac
import logging

from fastapi import Header, Request

from app.core.config import Settings
from app.core.errors import Unauthorized
from app.db.sql_client import Database
from app.services.lead_service import LeadService

logger = logging.getLogger(__name__)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_lead_service(request: Request) -> LeadService:
    return request.app.state.lead_service


async def require_api_key(
    request: Request,
    x_api_key: Optional[str] = Header(None)
) -> None:
    """
    Verifica el header x-api-key contra API_KEY.

    Si no hay API_KEY configurada no se valida nada (útil en local).
    """
    expected_key = get_settings(request).expected_api_key
    if not expected_key:
        return

    incoming_key = (x_api_key or "").strip()
    if not hmac.compare_digest(incoming_key.encode("utf-8"), expected_key.encode("utf-8")):
        client = request.client.host if request.client else "desconocido"
        logger.warning(f"API key inválida o ausente desde {client}")
        raise Unauthorized()
