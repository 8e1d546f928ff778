# Nombre de archivo: test_reports_retiradas_api.py
# Ubicación de archivo: tests/test_reports_retiradas_api.py
# Descripción: Pruebas del endpoint /reports/retiradas

import pytest
from fastapi.testclient import TestClient

from api.app.main import create_app


@pytest.fixture
def client(settings_limpios):
    return TestClient(create_app())


def test_retiradas_devuelve_tablero(client, registros_marzo):
    resp = client.post(
        "/reports/retiradas",
        json={"records": registros_marzo, "periodo": {"mes": 2, "anio": 2024}, "meta_percent": 70},
    )
    assert resp.status_code == 200
    assert "X-Request-ID" in resp.headers
    data = resp.json()
    total = data["kpis"]["total"]
    assert (total["base"], total["sucesso"], total["sucesso_pct"]) == (2, 1, 50)
    assert total["faltam_para_meta"] == 1
    assert data["evolucion"][3]["backlog"] == 1
    assert data["evolucion"][9]["retiradas"] == 1
    assert data["evolucion"][9]["date"] == "10/03"
    assert data["periodo"] == {"mes": 2, "anio": 2024}


def test_retiradas_aplica_filtros(client, registros_marzo):
    resp = client.post(
        "/reports/retiradas",
        json={
            "records": registros_marzo,
            "periodo": {"mes": 2, "anio": 2024},
            "filtros": {"modelo": "MODEM FIBRA", "creacion_desde": "01/03/2024"},
        },
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["total_filtrados"] == 2
    assert data["filtros_activos"] == 2
    assert data["kpis"]["total"]["faltam_para_meta"] is None


def test_retiradas_sin_registros_devuelve_tablero_vacio(client):
    resp = client.post("/reports/retiradas", json={"periodo": {"mes": 1, "anio": 2024}})
    assert resp.status_code == 200
    data = resp.json()
    assert data["total_registros"] == 0
    assert data["status_agrupado"] == []
    assert len(data["evolucion"]) == 29


@pytest.mark.parametrize(
    "cuerpo",
    [
        {"records": [], "periodo": {"mes": 12, "anio": 2024}},
        {"records": [], "meta_percent": 150},
        {"records": [], "meta_percent": -1},
        {"records": "no-es-lista"},
        {"records": [], "filtros": {"tecnicos": 5}},
        {"records": [], "filtros": {"tecnicos": ["Ana", 7]}},
    ],
)
def test_retiradas_rechaza_parametros_invalidos(client, cuerpo):
    resp = client.post("/reports/retiradas", json=cuerpo)
    assert resp.status_code == 422


def test_retiradas_acepta_registros_en_camel_case(client):
    registros = [
        {"id": "1", "statusLabel": "Sucesso-Reuso", "model": "MODEM FIBRA",
         "creationDate": "05/03/2024", "executionDate": "10/03/2024"},
        {"id": "2", "statusLabel": "Backlog > 4 Dias", "model": "OUTRO", "creationDate": "01/03/2024"},
        {"id": "3", "statusLabel": "Cancelado", "model": "MODEM FIBRA", "creationDate": "02/03/2024"},
    ]
    resp = client.post("/reports/retiradas", json={"records": registros, "periodo": {"mes": 2, "anio": 2024}})
    assert resp.status_code == 200
    total = resp.json()["kpis"]["total"]
    assert (total["base"], total["sucesso"], total["sucesso_pct"]) == (2, 1, 50)
