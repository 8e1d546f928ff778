# Nombre de archivo: status.py
# Ubicación de archivo: modules/informes_retiradas/status.py
# Descripción: Clasificación de status libres en categorías semánticas de retiradas

"""Clasificador único de status para todo el motor de métricas.

Cada etiqueta cae en exactamente una categoría. El orden de evaluación es
parte del contrato: "Insucesso" contiene "sucesso", por lo que debe
evaluarse antes que el éxito.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import List, Optional

import pandas as pd


class StatusCategoria(str, Enum):
    SUCESSO = "Sucesso"
    BACKLOG = "Backlog"
    INSUCESSO = "Insucesso"
    CANCELADO = "Cancelado"
    OUTROS = "Outros"


# Orden de negocio para gráficos y listados
CATEGORIA_ORDEN: List[StatusCategoria] = [
    StatusCategoria.BACKLOG,
    StatusCategoria.SUCESSO,
    StatusCategoria.INSUCESSO,
    StatusCategoria.CANCELADO,
    StatusCategoria.OUTROS,
]

_REGLAS = (
    ("cancel", StatusCategoria.CANCELADO),
    ("insucesso", StatusCategoria.INSUCESSO),
    ("sucesso", StatusCategoria.SUCESSO),
    ("backlog", StatusCategoria.BACKLOG),
)

_SEVERIDAD_RE = re.compile(r"(?P<op>>=|<=|≥|≤|>|<)?\s*(?P<n>\d+)")


def classify(status_label: Optional[str]) -> StatusCategoria:
    """Devuelve la categoría de un status libre (sin distinguir mayúsculas)."""

    if status_label is None:
        return StatusCategoria.OUTROS
    try:
        if pd.isna(status_label):
            return StatusCategoria.OUTROS
    except (TypeError, ValueError):
        pass
    texto = str(status_label).casefold()
    for fragmento, categoria in _REGLAS:
        if fragmento in texto:
            return categoria
    return StatusCategoria.OUTROS


def classify_series(series: pd.Series) -> pd.Series:
    """Aplica :func:`classify` a una serie y retorna los valores de la categoría."""

    return series.map(lambda v: classify(v).value).astype(object)


def categoria_rank(categoria: StatusCategoria | str) -> int:
    return CATEGORIA_ORDEN.index(StatusCategoria(categoria))


def backlog_severity(label: str) -> float:
    """Clave de severidad de una banda de backlog (mayor = más antiguo).

    ``> 30 Dias`` > ``> 14 Dias`` > ``> 4 Dias`` > ``≤ 4 Dias``. Las bandas
    sin número quedan al final.
    """

    match = _SEVERIDAD_RE.search(str(label or ""))
    if not match:
        return float("-inf")
    valor = float(match.group("n"))
    op = match.group("op")
    if op in (">",):
        return valor + 0.5
    if op in ("<",):
        return valor - 0.5
    return valor
