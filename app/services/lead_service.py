from typing import Optional
from datetime import datetime
import logging

from sqlalchemy import insert

from app.db.sql_client import Database
from app.db.tables import leads_whatsapp, LEAD_FIELD_LIMITS, UNICODE_FIELDS
from app.models.lead import LeadInsertRequest, NormalizedLead, LeadValidation
from app.utils.helpers import to_str

# Configurar logger
logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("NUMERO_TELEFONO", "PUSH_NAME", "NOMBRE_USUARIO")


def column_length(field: str, value: str) -> int:
    """Longitud de un valor tal como la cuenta su columna (UTF-16 en NVARCHAR)"""
    if field in UNICODE_FIELDS:
        return len(value.encode("utf-16-le")) // 2
    return len(value)


def normalize_lead(payload: Optional[LeadInsertRequest]) -> LeadValidation:
    """
    Normaliza y valida los campos de un lead.

    Todos los errores se acumulan: primero los requeridos y después los de
    longitud, que se revisan aunque el campo esté vacío.

    Args:
        payload: Cuerpo recibido (None equivale a un cuerpo vacío)

    Returns:
        LeadValidation con el lead normalizado o la lista de errores
    """
    payload = payload or LeadInsertRequest()

    values = {
        "NUMERO_TELEFONO": to_str(payload.NUMERO_TELEFONO),
        "PUSH_NAME": to_str(payload.PUSH_NAME),
        "NOMBRE_USUARIO": to_str(payload.NOMBRE_USUARIO),
        # TIPO_SALUDO: opcional, a NULL si no viene o viene vacío
        "TIPO_SALUDO": to_str(payload.TIPO_SALUDO) or None,
    }

    errors = []
    for field in REQUIRED_FIELDS:
        if not values[field]:
            errors.append(f"{field} es requerido")

    for field, limit in LEAD_FIELD_LIMITS.items():
        value = values[field]
        if value and column_length(field, value) > limit:
            errors.append(f"{field} excede {limit}")

    if errors:
        return LeadValidation(errors=errors)

    lead = NormalizedLead(FECHA_HORA=to_str(payload.FECHA_HORA), **values)
    return LeadValidation(lead=lead)


class LeadService:
    """Inserta leads en dbo.Leads_Whatsapp"""

    def __init__(self, database: Database):
        self.database = database

    def insert_lead(self, lead: NormalizedLead, fecha: datetime) -> int:
        """
        Inserta un lead con un INSERT parametrizado.

        Args:
            lead: Lead ya validado
            fecha: FECHA_HORA ya parseada

        Returns:
            ID generado por la base de datos

        Raises:
            SQLAlchemyError: Si falla la conexión o el INSERT
        """
        stmt = insert(leads_whatsapp).values(
            NUMERO_TELEFONO=lead.NUMERO_TELEFONO,
            FECHA_HORA=fecha,
            PUSH_NAME=lead.PUSH_NAME,
            NOMBRE_USUARIO=lead.NOMBRE_USUARIO,
            TIPO_SALUDO=lead.TIPO_SALUDO,
        ).returning(leads_whatsapp.c.ID)

        engine = self.database.connect()
        with engine.begin() as conn:
            insert_id = conn.execute(stmt).scalar_one()

        logger.info(f"Lead insertado en Leads_Whatsapp: ID={insert_id}")
        return int(insert_id)
