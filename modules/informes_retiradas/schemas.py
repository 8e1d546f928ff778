# Nombre de archivo: schemas.py
# Ubicación de archivo: modules/informes_retiradas/schemas.py
# Descripción: Modelos de datos del tablero de retiradas

from __future__ import annotations

import calendar
from datetime import date
from typing import Dict, List, Optional

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from core.utils.datefmt import parse_flexible_date, value_to_days

from .config import FILTRO_TODOS, MESES_PT


def clean_text(value: object) -> str:
    """Texto sin espacios extremos; ausentes -> ``""`` y ``1001.0`` -> ``"1001"``."""
    if value is None or value is pd.NA or value is pd.NaT:
        return ""
    if isinstance(value, float):
        if value != value:  # NaN
            return ""
        if value.is_integer():
            return str(int(value))
    return str(value).strip()


class ServiceRecord(BaseModel):
    """Orden de servicio de retirada ya normalizada.

    Acepta los nombres de campo en snake_case o camelCase (``statusLabel``).
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = ""
    creation_date: Optional[date] = None
    scheduled_date: Optional[date] = None
    execution_date: Optional[date] = None
    last_service_date: Optional[date] = None
    status_label: str = ""
    activity_status: str = ""
    model: str = ""
    service_type_label: str = ""
    last_technician: str = ""
    cycle_time_days: Optional[int] = None

    @field_validator("creation_date", "scheduled_date", "execution_date", "last_service_date", mode="before")
    @classmethod
    def _parse_fecha(cls, value: object) -> Optional[date]:
        return parse_flexible_date(value)

    @field_validator(
        "id", "status_label", "activity_status", "model", "service_type_label", "last_technician", mode="before"
    )
    @classmethod
    def _parse_texto(cls, value: object) -> str:
        return clean_text(value)

    @field_validator("cycle_time_days", mode="before")
    @classmethod
    def _parse_cycle_time(cls, value: object) -> Optional[int]:
        return value_to_days(value)


class PeriodoReferencia(BaseModel):
    """Mes/año usado como base de los porcentajes (mes 0-11)."""

    mes: int = Field(ge=0, le=11)
    anio: int = Field(ge=1900, le=9999)

    @property
    def nombre_mes(self) -> str:
        return MESES_PT[self.mes]

    @property
    def dias_en_mes(self) -> int:
        return calendar.monthrange(self.anio, self.mes + 1)[1]

    def fecha(self, dia: int) -> date:
        return date(self.anio, self.mes + 1, dia)

    def contiene(self, valor: Optional[date]) -> bool:
        return valor is not None and valor.year == self.anio and valor.month == self.mes + 1

    def etiqueta(self) -> str:
        return f"{self.nombre_mes}/{self.anio}"


class FiltrosRetiradas(BaseModel):
    """Selección de filtros del usuario. ``None`` o ``"todos"`` = sin filtro."""

    creacion_desde: Optional[date] = None
    creacion_hasta: Optional[date] = None
    ejecucion_desde: Optional[date] = None
    ejecucion_hasta: Optional[date] = None
    status: Optional[str] = None
    status_atividade: Optional[str] = None
    tipo_servicio: Optional[str] = None
    modelo: Optional[str] = None
    tecnicos: List[str] = Field(default_factory=list)

    @field_validator("creacion_desde", "creacion_hasta", "ejecucion_desde", "ejecucion_hasta", mode="before")
    @classmethod
    def _parse_fecha(cls, value: object) -> Optional[date]:
        return parse_flexible_date(value)

    @field_validator("status", "status_atividade", "tipo_servicio", "modelo", mode="before")
    @classmethod
    def _parse_categoria(cls, value: object) -> Optional[str]:
        texto = clean_text(value)
        if not texto or texto.lower() == FILTRO_TODOS:
            return None
        return texto

    @field_validator("tecnicos", mode="before")
    @classmethod
    def _parse_tecnicos(cls, value: object) -> List[str]:
        if value is None:
            return []
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, (list, tuple, set)):
            raise ValueError("tecnicos debe ser un texto o una lista de textos")
        vistos: List[str] = []
        for item in value:
            if item is not None and not isinstance(item, str):
                raise ValueError(f"tecnico no válido: {item!r}")
            texto = clean_text(item)
            if texto and texto not in vistos:
                vistos.append(texto)
        return vistos


class AggregatedMetric(BaseModel):
    """Par ``{name, value}`` con porcentaje opcional sobre la base."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    value: int
    percent_of_base: Optional[float] = Field(default=None, alias="percentOfBase")


class PuntoEvolucion(BaseModel):
    """Punto diario de la evolución de backlog y retiradas."""

    model_config = ConfigDict(populate_by_name=True)

    day: str
    backlog: int
    retiradas: int
    backlog_with_previous: int = Field(alias="backlogWithPrevious")
    sucesso_with_previous: int = Field(alias="sucessoWithPrevious")
    date: str


class PuntoMensual(BaseModel):
    """Resumen de un mes del año de referencia."""

    model_config = ConfigDict(populate_by_name=True)

    month: str
    finalizados: int
    pendentes: int
    em_andamento: int = Field(alias="emAndamento")
    cycle_time: float = Field(alias="cycleTime")


class SegmentKpis(BaseModel):
    """KPIs de un segmento de modelo (Total, Fibra o PayTV)."""

    segmento: str
    entrantes: int
    base: int
    backlog: int
    sucesso: int
    sucesso_pct: int
    faltam_para_meta: Optional[int] = None
    insucesso: int
    insucesso_pct: int
    cancelados: int
    cancelados_pct: int


class RecordKpis(BaseModel):
    """Conteos simples sobre la colección filtrada."""

    total: int
    con_ejecucion: int
    con_ultimo_atendimento: int


class ResultadoRetiradas(BaseModel):
    """Resultado completo del tablero, listo para serializar a JSON."""

    periodo: PeriodoReferencia
    meta_percent: Optional[float] = None
    total_registros: int
    total_filtrados: int
    filtros_activos: int
    kpis: Dict[str, SegmentKpis]
    record_kpis: RecordKpis
    cycle_time_promedio: float
    status_agrupado: List[AggregatedMetric]
    status_detallado: List[AggregatedMetric]
    tipo_servicio: List[AggregatedMetric]
    modelo: List[AggregatedMetric]
    status_por_modelo: List[AggregatedMetric]
    status_por_tecnico: List[AggregatedMetric]
    status_detallado_por_tecnico: List[AggregatedMetric]
    evolucion: List[PuntoEvolucion]
    mensual: List[PuntoMensual]
