# Nombre de archivo: test_retiradas_filters.py
# Ubicación de archivo: tests/test_retiradas_filters.py
# Descripción: Pruebas del motor de filtros del tablero de retiradas

from datetime import date

import pandas as pd
import pytest
from pydantic import ValidationError

from modules.informes_retiradas import filters, processor
from modules.informes_retiradas.schemas import FiltrosRetiradas


@pytest.fixture
def df():
    return processor.normalize(
        [
            {"OS": "1", "Status": "Sucesso", "Modelo": "MODEM FIBRA", "Data Criação": "05/03/2024",
             "Data Execução": "10/03/2024", "Técnico": "Ana", "Tipo-Subtipo": "Retirada"},
            {"OS": "2", "Status": "Backlog > 4 Dias", "Modelo": "HD PLUS", "Data Criação": "10/03/2024",
             "Data Execução": None, "Técnico": "", "Tipo-Subtipo": "Retirada"},
            {"OS": "3", "Status": "Insucesso", "Modelo": "MODEM FIBRA", "Data Criação": "11/03/2024",
             "Data Execução": "12/03/2024", "Técnico": "Bruno", "Tipo-Subtipo": "Troca"},
            {"OS": "4", "Status": "Cancelado", "Modelo": "ZAPPER", "Data Criação": None,
             "Data Execução": None, "Técnico": "", "Tipo-Subtipo": "Troca"},
            {"OS": "5", "Status": "Sucesso", "Modelo": "ZAPPER", "Data Criação": "04/03/2024",
             "Data Execução": "05/03/2024", "Técnico": "Ana", "Tipo-Subtipo": "Retirada"},
        ]
    )


def _ids(frame: pd.DataFrame) -> list:
    return frame["ID"].tolist()


def test_sin_filtros_devuelve_copia_completa(df):
    resultado = filters.apply_filters(df, FiltrosRetiradas())
    assert _ids(resultado) == ["1", "2", "3", "4", "5"]
    assert resultado is not df


def test_rango_de_creacion_es_inclusivo_y_excluye_sin_fecha(df):
    filtros = FiltrosRetiradas(creacion_desde="05/03/2024", creacion_hasta="10/03/2024")
    assert _ids(filters.apply_filters(df, filtros)) == ["1", "2"]


def test_rango_abierto_de_ejecucion(df):
    filtros = FiltrosRetiradas(ejecucion_desde=date(2024, 3, 10))
    assert _ids(filters.apply_filters(df, filtros)) == ["1", "3"]


def test_filtros_categoricos_por_igualdad_exacta(df):
    filtros = FiltrosRetiradas(modelo="MODEM FIBRA", status="Sucesso")
    assert _ids(filters.apply_filters(df, filtros)) == ["1"]


def test_valor_todos_desactiva_el_filtro(df):
    filtros = FiltrosRetiradas(modelo="todos", status="", tipo_servicio=None)
    assert filters.active_filter_count(filtros) == 0
    assert len(filters.apply_filters(df, filtros)) == len(df)


@pytest.mark.parametrize(
    "tokens, esperado",
    [
        (["filled"], ["1", "3", "5"]),
        (["empty"], ["2", "4"]),
        (["filled", "empty"], ["1", "2", "3", "4", "5"]),
        (["Bruno"], ["3"]),
        (["Bruno", "empty"], ["2", "3", "4"]),
    ],
)
def test_tokens_de_tecnico_combinan_con_or(df, tokens, esperado):
    filtros = FiltrosRetiradas(tecnicos=tokens)
    assert _ids(filters.apply_filters(df, filtros)) == esperado


@pytest.mark.parametrize(
    "filtros",
    [
        FiltrosRetiradas(),
        FiltrosRetiradas(creacion_desde="01/03/2024", tecnicos=["filled"]),
        FiltrosRetiradas(modelo="ZAPPER", ejecucion_hasta="31/03/2024"),
        FiltrosRetiradas(tipo_servicio="Retirada", tecnicos=["Ana", "empty"]),
    ],
)
def test_aplicar_filtros_es_idempotente(df, filtros):
    una_vez = filters.apply_filters(df, filtros)
    dos_veces = filters.apply_filters(una_vez, filtros)
    pd.testing.assert_frame_equal(una_vez, dos_veces)


def test_apply_filters_no_modifica_la_entrada(df):
    antes = df.copy()
    filters.apply_filters(df, FiltrosRetiradas(modelo="ZAPPER"))
    pd.testing.assert_frame_equal(df, antes)


def test_active_filter_count_cuenta_dimensiones(df):
    filtros = FiltrosRetiradas(
        creacion_desde="01/03/2024",
        creacion_hasta="31/03/2024",
        status="Sucesso",
        tecnicos="Ana",
    )
    assert filtros.tecnicos == ["Ana"]
    assert filters.active_filter_count(filtros) == 3


def test_filtros_normalizan_valores_de_entrada():
    filtros = FiltrosRetiradas(
        creacion_desde="2024-03-01",
        ejecucion_hasta=45382,
        modelo=" MODEM FIBRA ",
        tecnicos=["Ana", " Ana ", "", "filled"],
    )
    assert filtros.creacion_desde == date(2024, 3, 1)
    assert filtros.ejecucion_hasta == date(2024, 3, 31)
    assert filtros.modelo == "MODEM FIBRA"
    assert filtros.tecnicos == ["Ana", "filled"]


def test_filter_options_lista_valores_y_centinelas(df):
    opciones = filters.filter_options(df)
    assert opciones["modelo"] == ["HD PLUS", "MODEM FIBRA", "ZAPPER"]
    assert opciones["tipo_servicio"] == ["Retirada", "Troca"]
    assert opciones["tecnicos"] == ["filled", "empty", "Ana", "Bruno"]


@pytest.mark.parametrize("tecnicos", [5, {"nombre": "Ana"}, ["Ana", 7]])
def test_tecnicos_invalidos_lanzan_validation_error(tecnicos):
    with pytest.raises(ValidationError):
        FiltrosRetiradas(tecnicos=tecnicos)
