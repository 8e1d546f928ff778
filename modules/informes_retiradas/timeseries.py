# Nombre de archivo: timeseries.py
# Ubicación de archivo: modules/informes_retiradas/timeseries.py
# Descripción: Series diarias de backlog/retiradas y resumen mensual

from __future__ import annotations

import logging
from bisect import bisect_right
from collections import Counter
from datetime import date
from typing import Iterator, List, Optional

import pandas as pd

from core.utils.datefmt import format_ddmm

from .aggregation import cycle_time_average
from .config import MESES_PT_CORTOS
from .filters import has_value_mask
from .processor import CATEGORIA_COL
from .schemas import PeriodoReferencia, PuntoEvolucion, PuntoMensual
from .status import StatusCategoria

logger = logging.getLogger(__name__)


def last_day(periodo: PeriodoReferencia, hoy: Optional[date] = None) -> int:
    """Último día a graficar: hoy si el período es el mes en curso."""

    hoy = hoy or date.today()
    dias = periodo.dias_en_mes
    if hoy.year == periodo.anio and hoy.month == periodo.mes + 1:
        return min(hoy.day, dias)
    return dias


def _fechas_ordenadas(serie: pd.Series) -> List[date]:
    return sorted(v for v in serie if isinstance(v, date))


def iter_daily_evolution(
    df: pd.DataFrame,
    periodo: PeriodoReferencia,
    hoy: Optional[date] = None,
) -> Iterator[PuntoEvolucion]:
    """Genera un punto por día del período, en orden.

    Backlog al día ``d``: status Backlog y creación ``<= d``. Retiradas del
    día: éxitos ejecutados exactamente en ``d``. Las variantes "with previous"
    exigen además técnico del último atendimiento informado.
    """
    es_backlog = df[CATEGORIA_COL] == StatusCategoria.BACKLOG.value
    es_sucesso = df[CATEGORIA_COL] == StatusCategoria.SUCESSO.value
    con_previo = has_value_mask(df["TECNICO"])

    creacion_backlog = _fechas_ordenadas(df.loc[es_backlog, "FECHA_CREACION"])
    creacion_backlog_previo = _fechas_ordenadas(df.loc[es_backlog & con_previo, "FECHA_CREACION"])
    ejecuciones = Counter(v for v in df.loc[es_sucesso, "FECHA_EJECUCION"] if isinstance(v, date))
    ejecuciones_previo = Counter(
        v for v in df.loc[es_sucesso & con_previo, "FECHA_EJECUCION"] if isinstance(v, date)
    )

    for dia in range(1, last_day(periodo, hoy) + 1):
        medicion = periodo.fecha(dia)
        yield PuntoEvolucion(
            day=f"{dia:02d}",
            backlog=bisect_right(creacion_backlog, medicion),
            retiradas=ejecuciones.get(medicion, 0),
            backlog_with_previous=bisect_right(creacion_backlog_previo, medicion),
            sucesso_with_previous=ejecuciones_previo.get(medicion, 0),
            date=format_ddmm(medicion),
        )


def build_daily_evolution(
    df: pd.DataFrame,
    periodo: PeriodoReferencia,
    hoy: Optional[date] = None,
) -> List[PuntoEvolucion]:
    puntos = list(iter_daily_evolution(df, periodo, hoy))
    logger.debug(
        "action=build_daily_evolution periodo=%s dias=%s backlog_final=%s",
        periodo.etiqueta(),
        len(puntos),
        puntos[-1].backlog if puntos else 0,
    )
    return puntos


def _es_finalizado(status: str, categoria: str) -> bool:
    return categoria == StatusCategoria.SUCESSO.value or "finalizado" in status.casefold()


def build_monthly_summary(df: pd.DataFrame, anio: int) -> List[PuntoMensual]:
    """Doce puntos (ene-dic) por mes de creación dentro de ``anio``."""

    puntos: List[PuntoMensual] = []
    meses = df["FECHA_CREACION"].map(lambda v: v.month if isinstance(v, date) and v.year == anio else 0)
    for indice, nombre in enumerate(MESES_PT_CORTOS, start=1):
        grupo = df[meses == indice]
        status = grupo["STATUS"].astype(str)
        finalizados = sum(
            1 for st, cat in zip(status, grupo[CATEGORIA_COL]) if _es_finalizado(st, cat)
        )
        puntos.append(
            PuntoMensual(
                month=nombre,
                finalizados=finalizados,
                pendentes=int(status.str.contains("Pendente", case=False, regex=False).sum()),
                em_andamento=int(status.str.contains("Andamento", case=False, regex=False).sum()),
                cycle_time=cycle_time_average(grupo),
            )
        )
    return puntos
