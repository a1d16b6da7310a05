import pytest

from app.models.lead import LeadInsertRequest
from app.services.lead_service import normalize_lead


def build(**fields):
    values = {
        "NUMERO_TELEFONO": "5215512345678",
        "PUSH_NAME": "Astrid",
        "NOMBRE_USUARIO": "astrid.rpa",
    }
    values.update(fields)
    return LeadInsertRequest(**values)


def test_valid_payload_is_trimmed():
    result = normalize_lead(build(
        NUMERO_TELEFONO="  5215512345678 ",
        PUSH_NAME=" Astrid ",
        NOMBRE_USUARIO="\tastrid.rpa\n",
        TIPO_SALUDO="  formal ",
        FECHA_HORA=" 2025-09-12 15:30:00 ",
    ))
    assert result.ok
    assert result.errors == []
    assert result.lead.NUMERO_TELEFONO == "5215512345678"
    assert result.lead.PUSH_NAME == "Astrid"
    assert result.lead.NOMBRE_USUARIO == "astrid.rpa"
    assert result.lead.TIPO_SALUDO == "formal"
    assert result.lead.FECHA_HORA == "2025-09-12 15:30:00"


@pytest.mark.parametrize("field", ["NUMERO_TELEFONO", "PUSH_NAME", "NOMBRE_USUARIO"])
@pytest.mark.parametrize("value", [None, "", "   "])
def test_required_fields(field, value):
    result = normalize_lead(build(**{field: value}))
    assert not result.ok
    assert result.lead is None
    assert result.errors == [f"{field} es requerido"]


def test_missing_payload_reports_every_required_field():
    result = normalize_lead(None)
    assert result.errors == [
        "NUMERO_TELEFONO es requerido",
        "PUSH_NAME es requerido",
        "NOMBRE_USUARIO es requerido",
    ]


@pytest.mark.parametrize("field, limit", [
    ("NUMERO_TELEFONO", 26),
    ("PUSH_NAME", 510),
    ("NOMBRE_USUARIO", 255),
    ("TIPO_SALUDO", 100),
])
def test_length_limits(field, limit):
    assert normalize_lead(build(**{field: "x" * limit})).ok

    result = normalize_lead(build(**{field: "x" * (limit + 1)}))
    assert result.errors == [f"{field} excede {limit}"]


def test_all_violations_are_accumulated_in_order():
    result = normalize_lead(LeadInsertRequest(
        NUMERO_TELEFONO="1" * 27,
        PUSH_NAME="",
        NOMBRE_USUARIO="n" * 256,
        TIPO_SALUDO="s" * 101,
    ))
    assert result.errors == [
        "PUSH_NAME es requerido",
        "NUMERO_TELEFONO excede 26",
        "NOMBRE_USUARIO excede 255",
        "TIPO_SALUDO excede 100",
    ]


def test_length_is_checked_after_trimming():
    assert normalize_lead(build(NUMERO_TELEFONO="  " + "1" * 26 + "  ")).ok


@pytest.mark.parametrize("value", [None, "", "    "])
def test_empty_tipo_saludo_becomes_null(value):
    result = normalize_lead(build(TIPO_SALUDO=value))
    assert result.ok
    assert result.lead.TIPO_SALUDO is None


def test_non_string_values_are_coerced():
    result = normalize_lead(build(NUMERO_TELEFONO=5215512345678, TIPO_SALUDO=1))
    assert result.lead.NUMERO_TELEFONO == "5215512345678"
    assert result.lead.TIPO_SALUDO == "1"


def test_unknown_fields_are_ignored():
    payload = LeadInsertRequest(**{
        "NUMERO_TELEFONO": "1", "PUSH_NAME": "a", "NOMBRE_USUARIO": "b", "EXTRA": "x",
    })
    assert normalize_lead(payload).ok


def test_nvarchar_width_counts_utf16_units():
    # Cada emoji ocupa dos unidades UTF-16 en NVARCHAR
    result = normalize_lead(build(PUSH_NAME="😀" * 300))
    assert result.errors == ["PUSH_NAME excede 510"]

    assert normalize_lead(build(PUSH_NAME="😀" * 255)).ok
    assert not normalize_lead(build(NUMERO_TELEFONO="📱" * 14)).ok
    assert not normalize_lead(build(TIPO_SALUDO="👋" * 51)).ok


def test_varchar_width_counts_characters():
    assert normalize_lead(build(NOMBRE_USUARIO="ñ" * 255)).ok
