from typing import Dict, Any
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.concurrency import run_in_threadpool

from app.api.deps import get_database, get_settings
from app.core.config import Settings, describe_environment
from app.db.sql_client import Database

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/", response_class=PlainTextResponse)
async def root(settings: Settings = Depends(get_settings)):
    """Root endpoint to check if the API is running"""
    return (
        f"{settings.PROJECT_NAME} API: ok. "
        "Usa /health, /db-health, /env-check o POST /whatsapp/leads/insert"
    )


@router.get("/health", response_model=Dict[str, Any])
async def health(settings: Settings = Depends(get_settings)):
    return {"ok": True, "service": settings.PROJECT_NAME}


@router.get("/db-health", response_model=Dict[str, Any])
async def db_health(
    database: Database = Depends(get_database),
    settings: Settings = Depends(get_settings),
):
    """
    Ejecuta SELECT 1 contra la base de datos.

    Un fallo se reporta como 500 sin tumbar el proceso.
    """
    try:
        ok = await run_in_threadpool(database.ping)
        return {"ok": True, "db": ok}
    except Exception as e:
        logger.error(f"DB Health error: {str(e)}", exc_info=True)
        error = str(e) if settings.DEBUG else "database_unreachable"
        return JSONResponse(status_code=500, content={"ok": False, "error": error})


@router.get("/env-check", response_model=Dict[str, Dict[str, Any]])
async def env_check():
    """Indica qué variables requeridas existen y su longitud, nunca su valor"""
    return describe_environment()
