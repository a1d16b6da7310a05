from typing import Optional
import logging

from fastapi import APIRouter, Body, Depends
from starlette.concurrency import run_in_threadpool

from app.api.deps import get_lead_service, get_settings, require_api_key
from app.core.config import Settings
from app.core.errors import DateParseFailed, LeadsAPIError, StorageError, ValidationFailed
from app.models.lead import LeadInsertRequest, LeadInsertResponse
from app.services.lead_service import LeadService, normalize_lead
from app.utils.helpers import parse_fecha

# Configurar logger
logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/insert",
    response_model=LeadInsertResponse,
    dependencies=[Depends(require_api_key)],
)
async def insert_lead(
    payload: Optional[LeadInsertRequest] = Body(None),
    lead_service: LeadService = Depends(get_lead_service),
    settings: Settings = Depends(get_settings),
):
    """
    Inserta un lead en dbo.Leads_Whatsapp.

    JSON esperado:
        NUMERO_TELEFONO: string <= 26 (requerido)
        FECHA_HORA: "yyyy-MM-dd HH:mm:ss" o ISO con T (opcional)
        PUSH_NAME: string <= 510 (requerido)
        NOMBRE_USUARIO: string <= 255 (requerido)
        TIPO_SALUDO: null | string <= 100 (opcional)

    Returns:
        {ok: true, insertId} con el ID generado
    """
    try:
        validation = normalize_lead(payload)
        if not validation.ok:
            raise ValidationFailed(validation.errors)
        lead = validation.lead

        try:
            fecha = parse_fecha(lead.FECHA_HORA)
        except DateParseFailed as e:
            raise ValidationFailed([str(e)])

        insert_id = await run_in_threadpool(lead_service.insert_lead, lead, fecha)
        return LeadInsertResponse(insertId=insert_id)

    except LeadsAPIError:
        raise
    except Exception as e:
        logger.error(f"Insert error: {str(e)}", exc_info=True)
        raise StorageError(str(e) if settings.DEBUG else None)
