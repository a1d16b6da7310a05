from typing import Dict

from sqlalchemy import MetaData, Table, Column, Integer, String, Unicode, DateTime
from sqlalchemy.dialects import mssql

# Ancho máximo de cada columna de texto (coincide con la tabla en SQL Server)
LEAD_FIELD_LIMITS: Dict[str, int] = {
    "NUMERO_TELEFONO": 26,
    "PUSH_NAME": 510,
    "NOMBRE_USUARIO": 255,
    "TIPO_SALUDO": 100,
}

# Columnas NVARCHAR: SQL Server mide su ancho en unidades UTF-16
UNICODE_FIELDS = ("NUMERO_TELEFONO", "PUSH_NAME", "TIPO_SALUDO")

LEADS_SCHEMA = "dbo"

metadata = MetaData()

leads_whatsapp = Table(
    "Leads_Whatsapp",
    metadata,
    Column("ID", Integer, primary_key=True, autoincrement=True),
    Column("NUMERO_TELEFONO", Unicode(LEAD_FIELD_LIMITS["NUMERO_TELEFONO"]), nullable=False),
    Column("FECHA_HORA", DateTime().with_variant(mssql.DATETIME2(), "mssql"), nullable=False),
    Column("PUSH_NAME", Unicode(LEAD_FIELD_LIMITS["PUSH_NAME"]), nullable=False),
    Column("NOMBRE_USUARIO", String(LEAD_FIELD_LIMITS["NOMBRE_USUARIO"]), nullable=False),
    Column("TIPO_SALUDO", Unicode(LEAD_FIELD_LIMITS["TIPO_SALUDO"]), nullable=True),
    schema=LEADS_SCHEMA,
)
