from typing import Any, Optional
from datetime import datetime, timezone
import logging

from app.core.errors import DateParseFailed

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler()
    ]
)

logger = logging.getLogger("leads_server")

FECHA_HORA_ERROR = 'FECHA_HORA inválida. Usa ISO (2025-09-12T15:30:00) o "yyyy-MM-dd HH:mm:ss".'


def to_str(value: Any) -> str:
    """Convert any JSON value to a trimmed string ("" for None)"""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value).strip()


def utc_now() -> datetime:
    """Current UTC time without tzinfo (DATETIME2 has no offset)"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def parse_fecha(value: Optional[str]) -> datetime:
    """
    Parse FECHA_HORA.

    Accepts "yyyy-MM-dd HH:mm:ss" or ISO "yyyy-MM-ddTHH:mm:ss". Empty or
    missing input means now. Values with an offset are converted to UTC.

    Args:
        value: Raw text from the request

    Returns:
        Naive datetime

    Raises:
        DateParseFailed: If the text is not a valid date-time
    """
    if not value:
        return utc_now()

    iso = value if "T" in value else value.replace(" ", "T", 1)
    try:
        fecha = datetime.fromisoformat(iso)
    except ValueError:
        logger.debug(f"FECHA_HORA no parseable: {value!r}")
        raise DateParseFailed(FECHA_HORA_ERROR) from None

    if fecha.tzinfo is not None:
        fecha = fecha.astimezone(timezone.utc).replace(tzinfo=None)
    return fecha
