import os
import logging
from typing import Dict, Any, Optional, List, Mapping
from pydantic import BaseModel, Field
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

# Claves que se reportan en el arranque y en /env-check (nunca su valor)
REQUIRED_ENV_KEYS: List[str] = [
    "SQL_SERVER", "SQL_DATABASE", "SQL_USER", "SQL_PASSWORD",
    "SQL_ENCRYPT", "SQL_TRUST_CERT", "SQL_TLS_MIN", "SQL_TLS_MAX", "API_KEY",
]

# Solo de esta clave se expone una muestra truncada
SAMPLE_ENV_KEY = "SQL_SERVER"
SAMPLE_LENGTH = 20

TLS_VERSIONS = ("TLSv1", "TLSv1.1", "TLSv1.2", "TLSv1.3")


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() == "true"


class Settings(BaseModel):
    # API Settings
    PROJECT_NAME: str = "coneccionQueryAstrid"
    DEBUG: bool = Field(default_factory=lambda: _env_flag("DEBUG", "False"))

    # Server Settings (el host es fijo: todas las interfaces)
    SERVER_HOST: str = "0.0.0.0"
    SERVER_PORT: int = Field(default_factory=lambda: int(os.getenv("PORT", "3000")))

    # SQL Server Settings
    SQL_SERVER: Optional[str] = Field(default_factory=lambda: os.getenv("SQL_SERVER"))
    # Sin puerto explícito: 1433 o, para host\instancia, el que resuelva SQL Browser
    SQL_PORT: Optional[int] = Field(default_factory=lambda: int(os.getenv("SQL_PORT")) if os.getenv("SQL_PORT") else None)
    SQL_DATABASE: str = Field(default_factory=lambda: os.getenv("SQL_DATABASE", "RPA"))
    SQL_USER: Optional[str] = Field(default_factory=lambda: os.getenv("SQL_USER"))
    SQL_PASSWORD: Optional[str] = Field(default_factory=lambda: os.getenv("SQL_PASSWORD"))
    SQL_ENCRYPT: bool = Field(default_factory=lambda: _env_flag("SQL_ENCRYPT", "false"))
    SQL_TRUST_CERT: bool = Field(default_factory=lambda: _env_flag("SQL_TRUST_CERT", "true"))
    SQL_TLS_MIN: str = Field(default_factory=lambda: os.getenv("SQL_TLS_MIN", "TLSv1"))
    SQL_TLS_MAX: str = Field(default_factory=lambda: os.getenv("SQL_TLS_MAX", "TLSv1.2"))
    SQL_DRIVER: str = Field(default_factory=lambda: os.getenv("SQL_DRIVER", "ODBC Driver 18 for SQL Server"))

    # URL completa de SQLAlchemy; si existe reemplaza la conexión a SQL Server
    DATABASE_URL: Optional[str] = Field(default_factory=lambda: os.getenv("DATABASE_URL") or None)

    # Auth
    API_KEY: Optional[str] = Field(default_factory=lambda: os.getenv("API_KEY"))

    @property
    def expected_api_key(self) -> str:
        """API key configurada, recortada; vacía significa modo abierto"""
        return (self.API_KEY or "").strip()


def describe_environment(
    environ: Optional[Mapping[str, str]] = None,
    blank_is_missing: bool = False,
) -> Dict[str, Dict[str, Any]]:
    """
    Describe las variables de entorno requeridas sin revelar sus valores.

    Args:
        environ: Mapeo de variables a inspeccionar (por defecto os.environ)
        blank_is_missing: Si True, un valor solo con espacios cuenta como ausente

    Returns:
        Diccionario clave -> {present, len, sample}; sample solo para SQL_SERVER
    """
    environ = os.environ if environ is None else environ
    report: Dict[str, Dict[str, Any]] = {}
    for key in REQUIRED_ENV_KEYS:
        value = environ.get(key)
        if not value or (blank_is_missing and not value.strip()):
            report[key] = {"present": False}
            continue
        entry: Dict[str, Any] = {"present": True, "len": len(value)}
        if key == SAMPLE_ENV_KEY:
            entry["sample"] = value[:SAMPLE_LENGTH]
        report[key] = entry
    return report


def log_environment(environ: Optional[Mapping[str, str]] = None) -> List[str]:
    """
    Registra en el log qué variables requeridas faltan. No detiene el arranque.

    Returns:
        Lista de claves ausentes o vacías
    """
    missing = []
    for key, entry in describe_environment(environ, blank_is_missing=True).items():
        if not entry["present"]:
            logger.error(f"[ENV] Missing or empty: {key}")
            missing.append(key)
        elif "sample" in entry:
            logger.info(f"[ENV] OK: {key} len={entry['len']} sample={entry['sample']}")
        else:
            logger.info(f"[ENV] OK: {key} len={entry['len']}")
    return missing


settings = Settings()
