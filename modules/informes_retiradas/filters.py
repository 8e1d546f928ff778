# Nombre de archivo: filters.py
# Ubicación de archivo: modules/informes_retiradas/filters.py
# Descripción: Motor de filtros combinables sobre la colección de retiradas

import logging
from datetime import date
from typing import Callable, Dict, List, Optional

import pandas as pd

from .config import TECNICO_CON_VALOR, TECNICO_VACIO
from .schemas import FiltrosRetiradas

logger = logging.getLogger(__name__)

# Filtros categóricos: campo de FiltrosRetiradas -> columna canónica
_CATEGORICOS: Dict[str, str] = {
    "status": "STATUS",
    "status_atividade": "STATUS_ATIVIDADE",
    "tipo_servicio": "TIPO_SERVICIO",
    "modelo": "MODELO",
}


def date_mask(serie: pd.Series, predicate: Callable[[date], bool]) -> pd.Series:
    """Máscara booleana sobre una columna de fechas; sin fecha -> ``False``."""

    return serie.map(lambda v: isinstance(v, date) and bool(predicate(v))).astype(bool)


def date_range_mask(serie: pd.Series, desde: Optional[date], hasta: Optional[date]) -> pd.Series:
    """Rango inclusivo en ambos extremos; registros sin fecha quedan fuera."""

    def _dentro(valor: date) -> bool:
        if desde is not None and valor < desde:
            return False
        if hasta is not None and valor > hasta:
            return False
        return True

    return date_mask(serie, _dentro)


def has_value_mask(serie: pd.Series) -> pd.Series:
    return serie.map(lambda v: isinstance(v, str) and bool(v.strip())).astype(bool)


def technician_mask(serie: pd.Series, tokens: List[str]) -> pd.Series:
    """OR entre los tokens: ``filled``, ``empty`` o nombre exacto."""

    con_valor = has_value_mask(serie)
    mask = pd.Series(False, index=serie.index, dtype=bool)
    nombres = [t for t in tokens if t not in (TECNICO_CON_VALOR, TECNICO_VACIO)]
    if TECNICO_CON_VALOR in tokens:
        mask |= con_valor
    if TECNICO_VACIO in tokens:
        mask |= ~con_valor
    if nombres:
        mask |= serie.map(lambda v: isinstance(v, str) and v.strip() in nombres).astype(bool)
    return mask


def active_filter_count(filtros: FiltrosRetiradas) -> int:
    """Cantidad de dimensiones de filtro activas."""

    total = 0
    if filtros.creacion_desde or filtros.creacion_hasta:
        total += 1
    if filtros.ejecucion_desde or filtros.ejecucion_hasta:
        total += 1
    total += sum(1 for campo in _CATEGORICOS if getattr(filtros, campo))
    if filtros.tecnicos:
        total += 1
    return total


def apply_filters(df: pd.DataFrame, filtros: Optional[FiltrosRetiradas]) -> pd.DataFrame:
    """Aplica la conjunción de todos los filtros activos.

    No modifica ``df``. Aplicar dos veces los mismos filtros produce el mismo
    resultado que aplicarlos una vez.
    """
    if filtros is None or active_filter_count(filtros) == 0:
        return df.copy()

    mask = pd.Series(True, index=df.index, dtype=bool)

    if filtros.creacion_desde or filtros.creacion_hasta:
        mask &= date_range_mask(df["FECHA_CREACION"], filtros.creacion_desde, filtros.creacion_hasta)

    if filtros.ejecucion_desde or filtros.ejecucion_hasta:
        mask &= date_range_mask(df["FECHA_EJECUCION"], filtros.ejecucion_desde, filtros.ejecucion_hasta)

    for campo, columna in _CATEGORICOS.items():
        valor = getattr(filtros, campo)
        if valor:
            mask &= df[columna] == valor

    if filtros.tecnicos:
        mask &= technician_mask(df["TECNICO"], filtros.tecnicos)

    filtrado = df[mask].copy()
    logger.debug(
        "action=apply_filters activos=%s antes=%s despues=%s",
        active_filter_count(filtros),
        len(df),
        len(filtrado),
    )
    return filtrado


def filter_options(df: pd.DataFrame) -> Dict[str, List[str]]:
    """Valores disponibles para poblar los selectores de filtro."""

    opciones: Dict[str, List[str]] = {}
    for campo, columna in _CATEGORICOS.items():
        opciones[campo] = sorted({v for v in df[columna] if isinstance(v, str) and v})
    tecnicos = sorted({v for v in df["TECNICO"] if isinstance(v, str) and v})
    opciones["tecnicos"] = [TECNICO_CON_VALOR, TECNICO_VACIO] + tecnicos
    return opciones
