from contextlib import asynccontextmanager
from typing import Optional
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.config import Settings, settings as default_settings, log_environment
from app.core.errors import LeadsAPIError
from app.db.sql_client import Database
from app.services.lead_service import LeadService
from app.api.routes import api_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    logger.info("Cerrando conexiones de base de datos")
    app.state.database.dispose()


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    """
    Construye la aplicación con su configuración y la conexión compartida.

    Args:
        settings: Configuración; por defecto la cargada del entorno
        database: Conexión a inyectar; por defecto una nueva (perezosa)

    Returns:
        La aplicación FastAPI
    """
    settings = settings or default_settings

    # Solo informa: el proceso arranca aunque falte configuración
    log_environment()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        debug=settings.DEBUG,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.database = database or Database(settings)
    app.state.lead_service = LeadService(app.state.database)

    @app.exception_handler(LeadsAPIError)
    async def leads_api_error_handler(request: Request, exc: LeadsAPIError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        details = [
            f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg')}"
            for error in exc.errors()
        ]
        return JSONResponse(
            status_code=400,
            content={"ok": False, "error": "validation", "details": details},
        )

    # Include API router
    app.include_router(api_router)

    return app


app = create_app()
