from typing import Dict, Any, Optional
import threading
import logging

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine, URL
from sqlalchemy.exc import SQLAlchemyError

from app.core.config import Settings, TLS_VERSIONS

logger = logging.getLogger(__name__)


class Database:
    """
    Conexión compartida a la base de datos.

    Se construye una vez al arrancar la app y se inyecta en los endpoints.
    El engine (y su pool) se crea en la primera llamada a connect(); si ese
    intento falla no se memoriza y la siguiente llamada vuelve a intentarlo.
    """

    def __init__(self, settings: Settings, **engine_options: Any):
        self.settings = settings
        self._engine_options = engine_options
        self._engine: Optional[Engine] = None
        self._lock = threading.Lock()

    @property
    def url(self):
        """URL de SQLAlchemy: DATABASE_URL si existe, si no SQL Server vía pyodbc"""
        if self.settings.DATABASE_URL:
            return self.settings.DATABASE_URL
        return URL.create(
            "mssql+pyodbc",
            username=self.settings.SQL_USER,
            password=self.settings.SQL_PASSWORD,
            host=self.settings.SQL_SERVER,
            # None deja que el driver resuelva el puerto (instancias con nombre)
            port=self.settings.SQL_PORT,
            database=self.settings.SQL_DATABASE,
            query=self.transport_options(),
        )

    def transport_options(self) -> Dict[str, str]:
        """Opciones de transporte del driver ODBC"""
        return {
            "driver": self.settings.SQL_DRIVER,
            "Encrypt": "yes" if self.settings.SQL_ENCRYPT else "no",
            "TrustServerCertificate": "yes" if self.settings.SQL_TRUST_CERT else "no",
        }

    def _check_tls_bounds(self) -> None:
        tls_min, tls_max = self.settings.SQL_TLS_MIN, self.settings.SQL_TLS_MAX
        for name, value in (("SQL_TLS_MIN", tls_min), ("SQL_TLS_MAX", tls_max)):
            if value not in TLS_VERSIONS:
                logger.warning(f"{name}={value!r} no es una versión TLS conocida {TLS_VERSIONS}")
        if tls_min in TLS_VERSIONS and tls_max in TLS_VERSIONS \
                and TLS_VERSIONS.index(tls_min) > TLS_VERSIONS.index(tls_max):
            logger.warning(f"SQL_TLS_MIN ({tls_min}) es mayor que SQL_TLS_MAX ({tls_max})")
        logger.warning(
            f"SQL_TLS_MIN/SQL_TLS_MAX ({tls_min}..{tls_max}) no se aplican: el driver ODBC "
            "negocia TLS según la política OpenSSL del sistema"
        )

    @property
    def connected(self) -> bool:
        return self._engine is not None

    def connect(self) -> Engine:
        """
        Devuelve el engine compartido, creándolo la primera vez.

        Returns:
            Engine listo para usar

        Raises:
            SQLAlchemyError: Si no se puede establecer la conexión
        """
        if self._engine is not None:
            return self._engine

        with self._lock:
            # Otro hilo pudo haber terminado el intento mientras esperábamos
            if self._engine is not None:
                return self._engine

            if not self.settings.DATABASE_URL:
                self._check_tls_bounds()
                logger.info(
                    f"Conectando a {self.settings.SQL_SERVER}/{self.settings.SQL_DATABASE} "
                    f"(encrypt={self.settings.SQL_ENCRYPT}, trust_cert={self.settings.SQL_TRUST_CERT}, "
                    f"tls={self.settings.SQL_TLS_MIN}..{self.settings.SQL_TLS_MAX})"
                )

            engine = create_engine(self.url, pool_pre_ping=True, **self._engine_options)
            try:
                with engine.connect():
                    pass
            except SQLAlchemyError as e:
                engine.dispose()
                logger.error(f"Error al conectar a la base de datos: {str(e)}")
                raise

            self._engine = engine
            logger.info("Pool de base de datos inicializado")
            return engine

    def ping(self) -> bool:
        """Ejecuta un SELECT trivial; True si la fila vuelve con ok = 1"""
        engine = self.connect()
        with engine.connect() as conn:
            row = conn.execute(text("SELECT 1 AS ok")).first()
        return row is not None and row.ok == 1

    def dispose(self) -> None:
        """Cierra todas las conexiones del pool"""
        with self._lock:
            if self._engine is not None:
                self._engine.dispose()
                self._engine = None
                logger.info("Pool de base de datos cerrado")
