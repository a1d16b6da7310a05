from typing import Dict, Any, List, Optional


class LeadsAPIError(Exception):
    """Error que se traduce directamente a una respuesta JSON {ok: false, ...}"""

    status_code: int = 500
    error: str = "internal_error"

    def __init__(self, error: Optional[str] = None, details: Optional[List[str]] = None):
        self.error = error or self.error
        self.details = details
        super().__init__(self.error)

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"ok": False, "error": self.error}
        if self.details is not None:
            body["details"] = self.details
        return body


class Unauthorized(LeadsAPIError):
    status_code = 401
    error = "unauthorized"


class ValidationFailed(LeadsAPIError):
    status_code = 400
    error = "validation"

    def __init__(self, details: List[str]):
        super().__init__(details=list(details))


class StorageError(LeadsAPIError):
    status_code = 500
    error = "internal_error"


class DateParseFailed(ValueError):
    """FECHA_HORA no corresponde a ninguno de los formatos aceptados"""
