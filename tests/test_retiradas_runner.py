# Nombre de archivo: test_retiradas_runner.py
# Ubicación de archivo: tests/test_retiradas_runner.py
# Descripción: Pruebas del orquestador del tablero de retiradas

import json
import logging
from datetime import date

import pytest

from modules.informes_retiradas import runner
from modules.informes_retiradas.schemas import FiltrosRetiradas, PeriodoReferencia

MARZO = PeriodoReferencia(mes=2, anio=2024)


def test_run_calcula_tablero_completo(registros_marzo, settings_limpios, caplog):
    with caplog.at_level(logging.INFO):
        resultado = runner.run(registros_marzo, periodo=MARZO, meta_percent=70, hoy=date(2024, 4, 1))

    assert resultado.total_registros == 3
    assert resultado.total_filtrados == 3
    assert resultado.filtros_activos == 0
    assert resultado.kpis["total"].sucesso_pct == 50
    assert resultado.kpis["total"].faltam_para_meta == 1
    assert len(resultado.evolucion) == 31
    assert len(resultado.mensual) == 12
    assert resultado.cycle_time_promedio == 1.7
    assert [m.name for m in resultado.status_agrupado] == ["Backlog", "Sucesso", "Cancelado"]
    assert "action=run" in caplog.text
    assert "periodo=MARÇO/2024" in caplog.text


def test_run_serializa_a_json_con_alias(registros_marzo, settings_limpios):
    resultado = runner.run(registros_marzo, periodo=MARZO, hoy=date(2024, 4, 1))
    payload = resultado.model_dump(by_alias=True, mode="json")

    json.dumps(payload)
    assert payload["evolucion"][9]["retiradas"] == 1
    assert "backlogWithPrevious" in payload["evolucion"][0]
    assert "percentOfBase" in payload["status_agrupado"][0]
    assert "emAndamento" in payload["mensual"][0]


def test_run_aplica_filtros_antes_de_agregar(registros_marzo, settings_limpios):
    filtros = FiltrosRetiradas(modelo="MODEM FIBRA")
    resultado = runner.run(registros_marzo, filtros=filtros, periodo=MARZO, hoy=date(2024, 4, 1))

    assert resultado.total_filtrados == 2
    assert resultado.filtros_activos == 1
    assert resultado.kpis["total"].base == 1
    assert resultado.kpis["total"].sucesso_pct == 100
    assert all(p.backlog == 0 for p in resultado.evolucion)


def test_run_usa_mes_de_hoy_y_meta_de_settings(registros_marzo, settings_limpios, monkeypatch):
    monkeypatch.setenv("RETIRADAS_META_PERCENT", "90")
    monkeypatch.setenv("RETIRADAS_EXCLUIR_CANCELADOS_BASE", "false")

    resultado = runner.run(registros_marzo, hoy=date(2024, 3, 20))

    assert resultado.periodo == MARZO
    assert resultado.meta_percent == 90
    assert resultado.kpis["total"].base == 3
    assert resultado.kpis["total"].faltam_para_meta == 2
    assert len(resultado.evolucion) == 20


def test_run_con_modelo_fibra_configurable(registros_marzo, settings_limpios, monkeypatch):
    monkeypatch.setenv("RETIRADAS_MODELO_FIBRA", "outro")
    resultado = runner.run(registros_marzo, periodo=MARZO, hoy=date(2024, 4, 1))
    assert resultado.kpis["fibra"].backlog == 1
    assert resultado.kpis["paytv"].sucesso == 1


@pytest.mark.parametrize(
    "mes, esperado",
    [("MARÇO", 2), ("marco", 2), (" Dezembro ", 11), ("3", 2), ("12", 11), ("0", 0), ("15", 11)],
)
def test_periodo_desde_nombre(mes, esperado):
    periodo = runner.periodo_desde_nombre(mes, 2024)
    assert periodo.mes == esperado
    assert periodo.anio == 2024


def test_periodo_desde_nombre_no_reconocido_usa_mes_actual():
    periodo = runner.periodo_desde_nombre("???", 2025, hoy=date(2025, 6, 10))
    assert periodo.mes == 5
    assert periodo.etiqueta() == "JUNHO/2025"
