# Nombre de archivo: test_retiradas_status.py
# Ubicación de archivo: tests/test_retiradas_status.py
# Descripción: Pruebas del clasificador de status de retiradas

import pandas as pd
import pytest

from modules.informes_retiradas.status import (
    CATEGORIA_ORDEN,
    StatusCategoria,
    backlog_severity,
    classify,
    classify_series,
)


@pytest.mark.parametrize(
    "label, esperado",
    [
        ("Sucesso-Reuso", StatusCategoria.SUCESSO),
        ("SUCESSO", StatusCategoria.SUCESSO),
        ("INSUCESSO-REVERSA", StatusCategoria.INSUCESSO),
        ("Insucesso - Cliente ausente", StatusCategoria.INSUCESSO),
        ("Cancelado", StatusCategoria.CANCELADO),
        ("Cancelamento Insucesso", StatusCategoria.CANCELADO),
        ("Backlog > 4 Dias", StatusCategoria.BACKLOG),
        ("backlog ≤ 4 dias", StatusCategoria.BACKLOG),
        ("Pendente Agendamento", StatusCategoria.OUTROS),
        ("", StatusCategoria.OUTROS),
        (None, StatusCategoria.OUTROS),
        (float("nan"), StatusCategoria.OUTROS),
    ],
)
def test_classify_por_prioridad(label, esperado):
    assert classify(label) is esperado


@pytest.mark.parametrize(
    "label",
    ["INSUCESSO-REVERSA", "insucesso sucesso", "Sucesso parcial / Insucesso", "xINSUCESSOx", "Insucesso-Reuso"],
)
def test_insucesso_nunca_se_clasifica_como_sucesso(label):
    assert classify(label) is StatusCategoria.INSUCESSO


def test_categorias_son_excluyentes_y_totales():
    etiquetas = ["Sucesso", "Backlog", "Insucesso", "Cancelado", "Outro", "", None]
    for etiqueta in etiquetas:
        assert classify(etiqueta) in CATEGORIA_ORDEN


def test_classify_series_devuelve_valores_de_categoria():
    serie = pd.Series(["Sucesso-Reuso", None, "Backlog > 14 Dias"])
    assert classify_series(serie).tolist() == ["Sucesso", "Outros", "Backlog"]


def test_backlog_severity_ordena_de_mas_antiguo_a_mas_reciente():
    bandas = ["Backlog ≤ 4 Dias", "Backlog > 14 Dias", "Backlog", "Backlog > 30 Dias", "Backlog > 4 Dias"]
    ordenadas = sorted(bandas, key=backlog_severity, reverse=True)
    assert ordenadas == [
        "Backlog > 30 Dias",
        "Backlog > 14 Dias",
        "Backlog > 4 Dias",
        "Backlog ≤ 4 Dias",
        "Backlog",
    ]
