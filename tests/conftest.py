import pytest
from fastapi.testclient import TestClient
from sqlalchemy import select, func

from app.core.config import Settings
from app.db.sql_client import Database
from app.db.tables import metadata, leads_whatsapp
from app.main import create_app

# SQLite no tiene el esquema dbo
SQLITE_OPTIONS = {
    "connect_args": {"check_same_thread": False},
    "execution_options": {"schema_translate_map": {"dbo": None}},
}

VALID_LEAD = {
    "NUMERO_TELEFONO": "5215512345678",
    "FECHA_HORA": "2025-09-12 15:30:00",
    "PUSH_NAME": "Astrid",
    "NOMBRE_USUARIO": "astrid.rpa",
    "TIPO_SALUDO": "formal",
}


def make_settings(**overrides) -> Settings:
    values = {
        "DATABASE_URL": None,
        "API_KEY": "",
        "DEBUG": False,
        "SQL_SERVER": "sql.example.local",
        "SQL_USER": "rpa",
        "SQL_PASSWORD": "secret",
    }
    values.update(overrides)
    return Settings(**values)


def make_database(settings: Settings, create_schema: bool = True) -> Database:
    database = Database(settings, **SQLITE_OPTIONS)
    if create_schema:
        metadata.create_all(database.connect())
    return database


def count_leads(database: Database) -> int:
    with database.connect().connect() as conn:
        return conn.execute(select(func.count()).select_from(leads_whatsapp)).scalar_one()


def fetch_lead(database: Database, lead_id: int):
    with database.connect().connect() as conn:
        return conn.execute(
            select(leads_whatsapp).where(leads_whatsapp.c.ID == lead_id)
        ).one()


@pytest.fixture
def sqlite_url(tmp_path):
    return f"sqlite:///{tmp_path / 'leads.db'}"


@pytest.fixture
def unreachable_url(tmp_path):
    # El directorio no existe, así que SQLite no puede abrir el archivo
    return f"sqlite:///{tmp_path / 'missing' / 'leads.db'}"


@pytest.fixture
def settings(sqlite_url):
    return make_settings(DATABASE_URL=sqlite_url)


@pytest.fixture
def database(settings):
    database = make_database(settings)
    yield database
    database.dispose()


@pytest.fixture
def client(settings, database):
    app = create_app(settings=settings, database=database)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def secured_client(sqlite_url):
    settings = make_settings(DATABASE_URL=sqlite_url, API_KEY="s3cret-key")
    database = make_database(settings)
    app = create_app(settings=settings, database=database)
    with TestClient(app) as test_client:
        yield test_client, database
