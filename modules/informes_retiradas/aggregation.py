# Nombre de archivo: aggregation.py
# Ubicación de archivo: modules/informes_retiradas/aggregation.py
# Descripción: Agregaciones, porcentajes sobre período de referencia y brecha de meta

"""Motor de agregación del tablero de retiradas.

Todas las funciones son puras: reciben un DataFrame normalizado por
``processor.normalize`` (más período/meta) y devuelven estructuras simples.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Callable, Dict, List, Optional

import pandas as pd

from .config import (
    ETIQUETA_OUTROS,
    FAMILIAS_MODELO,
    MODELO_FIBRA,
    TECNICO_CON_VALOR,
    TECNICO_VACIO,
    TOP_N_DEFAULT,
)
from .filters import date_mask, has_value_mask
from .processor import CATEGORIA_COL
from .schemas import AggregatedMetric, PeriodoReferencia, RecordKpis, SegmentKpis
from .status import CATEGORIA_ORDEN, StatusCategoria, backlog_severity, categoria_rank, classify

logger = logging.getLogger(__name__)

SegmentPredicate = Callable[[pd.DataFrame, str], pd.Series]


@dataclass(slots=True)
class ModelSegments:
    """Partición binaria de la colección por modelo."""

    fibra: pd.DataFrame
    outros: pd.DataFrame


# --- Predicados de segmento -------------------------------------------------

def is_fibra(df: pd.DataFrame, modelo_fibra: str = MODELO_FIBRA) -> pd.Series:
    objetivo = modelo_fibra.strip().upper()
    return df["MODELO"].map(lambda v: isinstance(v, str) and v.strip().upper() == objetivo).astype(bool)


def segmento_total(df: pd.DataFrame, modelo_fibra: str = MODELO_FIBRA) -> pd.Series:
    return pd.Series(True, index=df.index, dtype=bool)


def segmento_fibra(df: pd.DataFrame, modelo_fibra: str = MODELO_FIBRA) -> pd.Series:
    return is_fibra(df, modelo_fibra)


def segmento_outros(df: pd.DataFrame, modelo_fibra: str = MODELO_FIBRA) -> pd.Series:
    return ~is_fibra(df, modelo_fibra)


SEGMENTOS: Dict[str, SegmentPredicate] = {
    "total": segmento_total,
    "fibra": segmento_fibra,
    "paytv": segmento_outros,
}


def segment_by_model(df: pd.DataFrame, modelo_fibra: str = MODELO_FIBRA) -> ModelSegments:
    mask = is_fibra(df, modelo_fibra)
    return ModelSegments(fibra=df[mask].copy(), outros=df[~mask].copy())


# --- Porcentajes y meta -----------------------------------------------------

def _round_half_up(valor: Decimal) -> int:
    return int(valor.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def percent_of_base(count: int, base: int) -> int:
    """``round(100 * count / base)``; 0 cuando la base es nula."""

    if base <= 0 or count <= 0:
        return 0
    return _round_half_up(Decimal(100) * Decimal(count) / Decimal(base))


def success_rate(success_count: int, base_count: int) -> int:
    """Porcentaje de éxito sobre la base, acotado a [0, 100]."""

    return min(100, percent_of_base(success_count, base_count))


def _meta_decimal(goal_percent: Optional[float]) -> Optional[Decimal]:
    if goal_percent is None:
        return None
    try:
        meta = Decimal(str(goal_percent))
    except (InvalidOperation, ValueError):
        return None
    if not meta.is_finite():
        return None
    return meta


def goal_gap(success_count: int, base_count: int, goal_percent: Optional[float]) -> Optional[int]:
    """Éxitos adicionales necesarios para alcanzar ``goal_percent`` de la base.

    ``None`` cuando no hay meta configurada. Nunca negativo.
    """
    meta = _meta_decimal(goal_percent)
    if meta is None:
        return None
    requeridos = math.ceil(meta * Decimal(max(base_count, 0)) / Decimal(100))
    return max(0, requeridos - success_count)


# --- Ventanas de período ----------------------------------------------------

def reference_period_mask(serie: pd.Series, periodo: PeriodoReferencia) -> pd.Series:
    return date_mask(serie, periodo.contiene)


def categoria_mask(df: pd.DataFrame, categoria: StatusCategoria) -> pd.Series:
    return df[CATEGORIA_COL] == categoria.value


def entrants(df: pd.DataFrame, periodo: PeriodoReferencia, excluir_cancelados: bool = True) -> pd.DataFrame:
    """Registros creados en el período (sin cancelados si así se configura)."""

    mask = reference_period_mask(df["FECHA_CREACION"], periodo)
    if excluir_cancelados:
        mask &= ~categoria_mask(df, StatusCategoria.CANCELADO)
    return df[mask]


def executed_successes(df: pd.DataFrame, periodo: PeriodoReferencia) -> pd.DataFrame:
    """Éxitos cuya fecha de ejecución cae en el período."""

    mask = reference_period_mask(df["FECHA_EJECUCION"], periodo) & categoria_mask(df, StatusCategoria.SUCESSO)
    return df[mask]


def backlog_mask(df: pd.DataFrame, measurement_date: date) -> pd.Series:
    """Backlog vigente al día ``measurement_date`` (creado en o antes)."""

    creado = date_mask(df["FECHA_CREACION"], lambda d: d <= measurement_date)
    return categoria_mask(df, StatusCategoria.BACKLOG) & creado


def backlog_as_of(df: pd.DataFrame, measurement_date: date) -> int:
    return int(backlog_mask(df, measurement_date).sum())


# --- Agrupaciones -----------------------------------------------------------

def _metricas(conteos: Dict[str, int], orden: List[str]) -> List[AggregatedMetric]:
    return [AggregatedMetric(name=nombre, value=int(conteos[nombre])) for nombre in orden]


def group_by_classified_status(df: pd.DataFrame) -> List[AggregatedMetric]:
    """Una entrada por categoría presente, en el orden de negocio."""

    conteos = df[CATEGORIA_COL].value_counts().to_dict()
    orden = [c.value for c in CATEGORIA_ORDEN if conteos.get(c.value)]
    return _metricas(conteos, orden)


def _raw_status_key(label: str) -> tuple:
    categoria = classify(label)
    severidad = backlog_severity(label) if categoria is StatusCategoria.BACKLOG else 0.0
    return (categoria_rank(categoria), -severidad, label)


def group_by_raw_status(df: pd.DataFrame) -> List[AggregatedMetric]:
    """Una entrada por status literal, en el orden de negocio.

    Backlog primero (más antiguo a más reciente), luego Sucesso, Insucesso,
    Cancelado y el resto. Empates alfabéticos.
    """
    etiquetas = df["STATUS"].map(lambda v: v if isinstance(v, str) and v else ETIQUETA_OUTROS)
    conteos = etiquetas.value_counts().to_dict()
    orden = sorted(conteos, key=_raw_status_key)
    return _metricas(conteos, orden)


def _top_counts(serie: pd.Series, top_n: int) -> List[AggregatedMetric]:
    etiquetas = serie.map(lambda v: v if isinstance(v, str) and v else ETIQUETA_OUTROS)
    conteos = etiquetas.value_counts().to_dict()
    orden = sorted(conteos, key=lambda k: (-conteos[k], k))[:top_n]
    return _metricas(conteos, orden)


def group_by_service_type(df: pd.DataFrame, top_n: int = TOP_N_DEFAULT) -> List[AggregatedMetric]:
    return _top_counts(df["TIPO_SERVICIO"], top_n)


def group_by_model(df: pd.DataFrame, top_n: int = TOP_N_DEFAULT) -> List[AggregatedMetric]:
    return _top_counts(df["MODELO"], top_n)


def model_family(modelo: str) -> Optional[str]:
    """Agrupa variantes de modelo en familias; ``None`` si no pertenece a ninguna."""

    valor = str(modelo or "").strip().upper()
    if "MODEM FIBRA" in valor:
        return "MODEM FIBRA"
    if "DVR ANDROID 4K" in valor:
        return "DVR ANDROID 4K"
    if valor == "HD" or "HD PLUS" in valor:
        return "HD PLUS"
    if any(k in valor for k in ("HD SLIM", "SLIM", "SH10", "ZAPPER")):
        return "ZAPPER"
    if valor in ("LINHA", "S14"):
        return "LINHA"
    return None


_STATUS_OPERATIVOS = (StatusCategoria.BACKLOG, StatusCategoria.SUCESSO, StatusCategoria.INSUCESSO)


def status_by_model(df: pd.DataFrame) -> List[AggregatedMetric]:
    """Conteo ``"<familia> - <status>"`` para Backlog, Sucesso e Insucesso."""

    conteos: Dict[str, int] = {}
    for modelo, categoria in zip(df["MODELO"], df[CATEGORIA_COL]):
        familia = model_family(modelo)
        if familia is None or StatusCategoria(categoria) not in _STATUS_OPERATIVOS:
            continue
        clave = f"{familia} - {categoria}"
        conteos[clave] = conteos.get(clave, 0) + 1

    def _orden(clave: str) -> tuple:
        familia, _, categoria = clave.rpartition(" - ")
        return (FAMILIAS_MODELO.index(familia), categoria_rank(categoria))

    return _metricas(conteos, sorted(conteos, key=_orden))


def _tecnicos_literales(tecnicos: List[str]) -> List[str]:
    return [t for t in tecnicos if t not in (TECNICO_CON_VALOR, TECNICO_VACIO)]


def status_by_technician(df: pd.DataFrame, tecnicos: List[str]) -> List[AggregatedMetric]:
    """Status agrupado restringido a los técnicos seleccionados por nombre."""

    nombres = _tecnicos_literales(tecnicos)
    if not nombres:
        return []
    subset = df[df["TECNICO"].isin(nombres)]
    return group_by_classified_status(subset)


def status_detail_by_technician(df: pd.DataFrame, tecnicos: List[str]) -> List[AggregatedMetric]:
    """Conteo ``"<técnico> - <status>"`` sin cancelados.

    Orden: Backlog, Sucesso y el resto; dentro de cada grupo por técnico.
    """
    nombres = _tecnicos_literales(tecnicos)
    if not nombres:
        return []
    conteos: Dict[str, int] = {}
    claves: Dict[str, tuple] = {}
    for tecnico, categoria in zip(df["TECNICO"], df[CATEGORIA_COL]):
        if tecnico not in nombres or categoria == StatusCategoria.CANCELADO.value:
            continue
        clave = f"{tecnico} - {categoria}"
        conteos[clave] = conteos.get(clave, 0) + 1
        claves[clave] = (min(categoria_rank(categoria), 2), tecnico.casefold(), categoria_rank(categoria))
    return _metricas(conteos, sorted(conteos, key=lambda k: claves[k]))


# --- KPIs -------------------------------------------------------------------

def compute_segment_kpis(
    df: pd.DataFrame,
    periodo: PeriodoReferencia,
    meta_percent: Optional[float] = None,
    segmento: str = "total",
    excluir_cancelados: bool = True,
    modelo_fibra: str = MODELO_FIBRA,
) -> SegmentKpis:
    """Bloque único de KPIs para Total, Fibra o PayTV.

    - ``entrantes``: creados en el período (incluye cancelados).
    - ``base``: entrantes según la política de cancelados; denominador de
      éxito e insucesso.
    - ``sucesso``: éxitos ejecutados en el período.
    - ``backlog`` e ``insucesso``: sobre toda la colección del segmento.
    - ``cancelados``: cancelados entre los entrantes; % sobre entrantes.
    """
    datos = df[SEGMENTOS[segmento](df, modelo_fibra)]

    entrantes_todos = entrants(datos, periodo, excluir_cancelados=False)
    base = len(entrants(datos, periodo, excluir_cancelados=excluir_cancelados))
    sucesso = len(executed_successes(datos, periodo))
    backlog = int(categoria_mask(datos, StatusCategoria.BACKLOG).sum())
    insucesso = int(categoria_mask(datos, StatusCategoria.INSUCESSO).sum())
    cancelados = int(categoria_mask(entrantes_todos, StatusCategoria.CANCELADO).sum())

    kpis = SegmentKpis(
        segmento=segmento,
        entrantes=len(entrantes_todos),
        base=base,
        backlog=backlog,
        sucesso=sucesso,
        sucesso_pct=success_rate(sucesso, base),
        faltam_para_meta=goal_gap(sucesso, base, meta_percent),
        insucesso=insucesso,
        insucesso_pct=percent_of_base(insucesso, base),
        cancelados=cancelados,
        cancelados_pct=percent_of_base(cancelados, len(entrantes_todos)),
    )
    logger.debug(
        "action=compute_segment_kpis segmento=%s periodo=%s base=%s sucesso=%s pct=%s",
        segmento,
        periodo.etiqueta(),
        base,
        sucesso,
        kpis.sucesso_pct,
    )
    return kpis


def compute_all_kpis(
    df: pd.DataFrame,
    periodo: PeriodoReferencia,
    meta_percent: Optional[float] = None,
    excluir_cancelados: bool = True,
    modelo_fibra: str = MODELO_FIBRA,
) -> Dict[str, SegmentKpis]:
    return {
        nombre: compute_segment_kpis(df, periodo, meta_percent, nombre, excluir_cancelados, modelo_fibra)
        for nombre in SEGMENTOS
    }


def record_kpis(df: pd.DataFrame) -> RecordKpis:
    con_ultimo = df["FECHA_ULTIMO_ATENDIMIENTO"].map(lambda v: isinstance(v, date)).astype(bool) | has_value_mask(
        df["TECNICO"]
    )
    return RecordKpis(
        total=len(df),
        con_ejecucion=int(df["FECHA_EJECUCION"].map(lambda v: isinstance(v, date)).sum()),
        con_ultimo_atendimento=int(con_ultimo.sum()),
    )


def cycle_time_average(df: pd.DataFrame) -> float:
    """Promedio del cycle time (días, un decimal); ausentes cuentan como 0."""

    if df.empty:
        return 0.0
    valores = pd.to_numeric(df["CYCLE_TIME_DIAS"], errors="coerce").fillna(0)
    promedio = Decimal(int(valores.sum())) / Decimal(len(valores))
    return float(promedio.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))
