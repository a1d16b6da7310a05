from typing import Optional, Any, List
from pydantic import BaseModel


class LeadInsertRequest(BaseModel):
    """Cuerpo de POST /whatsapp/leads/insert; los valores llegan sin tipar"""
    NUMERO_TELEFONO: Any = None
    FECHA_HORA: Any = None
    PUSH_NAME: Any = None
    NOMBRE_USUARIO: Any = None
    TIPO_SALUDO: Any = None

    model_config = {"extra": "ignore"}


class NormalizedLead(BaseModel):
    """Lead con los textos recortados, listo para insertar"""
    NUMERO_TELEFONO: str
    FECHA_HORA: str = ""
    PUSH_NAME: str
    NOMBRE_USUARIO: str
    TIPO_SALUDO: Optional[str] = None


class LeadValidation(BaseModel):
    """Resultado de la normalización: el lead o la lista de errores"""
    lead: Optional[NormalizedLead] = None
    errors: List[str] = []

    @property
    def ok(self) -> bool:
        return not self.errors


class LeadInsertResponse(BaseModel):
    ok: bool = True
    insertId: int
