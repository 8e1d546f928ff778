# Nombre de archivo: conftest.py
# Ubicación de archivo: tests/conftest.py
# Descripción: Configuraciones comunes para Pytest (PYTHONPATH y datos de retiradas)

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:  # pragma: no cover - inicialización
    sys.path.insert(0, str(ROOT_DIR))

from core.config import get_settings  # noqa: E402


@pytest.fixture
def registros_marzo() -> list[dict]:
    """Tres órdenes de marzo/2024 con encabezados de la planilla de origen."""

    return [
        {
            "OS": "1001",
            "Status iCare": "Sucesso-Reuso",
            "Modelo": "MODEM FIBRA",
            "Data Criação": "05/03/2024",
            "Data Execução": "10/03/2024",
            "Técnico - Último Atendimento": "",
            "Cycle Time": 5,
        },
        {
            "OS": "1002",
            "Status iCare": "Backlog > 4 Dias",
            "Modelo": "OUTRO",
            "Data Criação": "01/03/2024",
            "Data Execução": None,
            "Técnico - Último Atendimento": "",
            "Cycle Time": None,
        },
        {
            "OS": "1003",
            "Status iCare": "Cancelado",
            "Modelo": "MODEM FIBRA",
            "Data Criação": "02/03/2024",
            "Data Execução": None,
            "Técnico - Último Atendimento": "",
            "Cycle Time": None,
        },
    ]


@pytest.fixture
def settings_limpios():
    """Reinicia el cache de ``get_settings`` antes y después de la prueba."""

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
