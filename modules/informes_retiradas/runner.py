# Nombre de archivo: runner.py
# Ubicación de archivo: modules/informes_retiradas/runner.py
# Descripción: Orquestador del cálculo completo del tablero de retiradas

import logging
import re
from datetime import date
from typing import Optional

from core.config import get_settings

from . import aggregation, filters, processor, timeseries
from .config import MESES_PT
from .schemas import FiltrosRetiradas, PeriodoReferencia, ResultadoRetiradas

logger = logging.getLogger(__name__)


def periodo_desde_nombre(mes: object, anio: int, hoy: Optional[date] = None) -> PeriodoReferencia:
    """Construye el período a partir de un nombre de mes o un número 1-12.

    Acepta ``"MARÇO"``, ``"marco"`` o ``"3"``. Si el mes no se reconoce se
    usa el mes actual.
    """
    hoy = hoy or date.today()
    texto = str(mes or "").strip()
    if re.fullmatch(r"\d+", texto):
        indice = max(1, min(12, int(texto))) - 1
        return PeriodoReferencia(mes=indice, anio=anio)

    clave = processor.clean_key(texto)
    for indice, nombre in enumerate(MESES_PT):
        if processor.clean_key(nombre) == clave:
            return PeriodoReferencia(mes=indice, anio=anio)

    logger.debug("action=periodo_desde_nombre mes_no_reconocido=%s fallback=%s", texto, hoy.month)
    return PeriodoReferencia(mes=hoy.month - 1, anio=anio)


def run(
    records: processor.Registros,
    filtros: Optional[FiltrosRetiradas] = None,
    periodo: Optional[PeriodoReferencia] = None,
    meta_percent: Optional[float] = None,
    hoy: Optional[date] = None,
) -> ResultadoRetiradas:
    """Ejecuta el flujo completo: normaliza, filtra y calcula todas las series.

    Las agregaciones y la serie diaria consumen la vista filtrada. El período
    por defecto es el mes de ``hoy``; la meta por defecto sale de ``Settings``.
    """
    settings = get_settings()
    hoy = hoy or date.today()
    filtros = filtros or FiltrosRetiradas()
    periodo = periodo or PeriodoReferencia(mes=hoy.month - 1, anio=hoy.year)
    if meta_percent is None:
        meta_percent = settings.meta_percent

    df = processor.normalize(records)
    filtrado = filters.apply_filters(df, filtros)

    kpis = aggregation.compute_all_kpis(
        filtrado,
        periodo,
        meta_percent=meta_percent,
        excluir_cancelados=settings.excluir_cancelados_base,
        modelo_fibra=settings.modelo_fibra,
    )

    resultado = ResultadoRetiradas(
        periodo=periodo,
        meta_percent=meta_percent,
        total_registros=len(df),
        total_filtrados=len(filtrado),
        filtros_activos=filters.active_filter_count(filtros),
        kpis=kpis,
        record_kpis=aggregation.record_kpis(filtrado),
        cycle_time_promedio=aggregation.cycle_time_average(filtrado),
        status_agrupado=aggregation.group_by_classified_status(filtrado),
        status_detallado=aggregation.group_by_raw_status(filtrado),
        tipo_servicio=aggregation.group_by_service_type(filtrado, settings.top_n),
        modelo=aggregation.group_by_model(filtrado, settings.top_n),
        status_por_modelo=aggregation.status_by_model(filtrado),
        status_por_tecnico=aggregation.status_by_technician(filtrado, filtros.tecnicos),
        status_detallado_por_tecnico=aggregation.status_detail_by_technician(filtrado, filtros.tecnicos),
        evolucion=timeseries.build_daily_evolution(filtrado, periodo, hoy),
        mensual=timeseries.build_monthly_summary(filtrado, periodo.anio),
    )

    total = kpis["total"]
    logger.info(
        "action=run periodo=%s registros=%s filtrados=%s entrantes=%s base=%s sucesso=%s sucesso_pct=%s backlog=%s meta=%s faltam=%s",
        periodo.etiqueta(),
        resultado.total_registros,
        resultado.total_filtrados,
        total.entrantes,
        total.base,
        total.sucesso,
        total.sucesso_pct,
        total.backlog,
        meta_percent,
        total.faltam_para_meta,
    )
    return resultado
