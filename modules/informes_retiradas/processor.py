# Nombre de archivo: processor.py
# Ubicación de archivo: modules/informes_retiradas/processor.py
# Descripción: Normalización de registros de retiradas a un DataFrame canónico

import logging
import unicodedata
from collections.abc import Iterable, Mapping
from typing import Dict, List, Union

import pandas as pd

from core.utils.datefmt import parse_flexible_date, value_to_days

from .config import (
    COLUMNAS_CANONICAS,
    COLUMNAS_FECHA,
    COLUMNAS_MAPPER,
    COLUMNAS_TEXTO,
)
from .schemas import ServiceRecord, clean_text
from .status import classify_series

logger = logging.getLogger(__name__)

CATEGORIA_COL = "CATEGORIA"

# Campos de ServiceRecord -> columnas canónicas
_RECORD_FIELDS: Dict[str, str] = {
    "id": "ID",
    "creation_date": "FECHA_CREACION",
    "scheduled_date": "FECHA_AGENDADA",
    "execution_date": "FECHA_EJECUCION",
    "last_service_date": "FECHA_ULTIMO_ATENDIMIENTO",
    "status_label": "STATUS",
    "activity_status": "STATUS_ATIVIDADE",
    "model": "MODELO",
    "service_type_label": "TIPO_SERVICIO",
    "last_technician": "TECNICO",
    "cycle_time_days": "CYCLE_TIME_DIAS",
}

Registros = Union[pd.DataFrame, Iterable]


def clean_key(s: str) -> str:
    """Normaliza un nombre de columna facilitando comparaciones."""

    s = str(s)
    s_no_accents = "".join(c for c in unicodedata.normalize("NFD", s) if unicodedata.category(c) != "Mn")
    cleaned = s_no_accents.lower()
    for ch in (" ", "_", "\n", "\r", ".", "-"):
        cleaned = cleaned.replace(ch, "")
    return cleaned


_MAPPER_CLEAN: Dict[str, str] = {clean_key(k): v for k, v in COLUMNAS_MAPPER.items()}
_CANONICAS_CLEAN: Dict[str, str] = {clean_key(c): c for c in COLUMNAS_CANONICAS}


def _to_frame(data: Registros) -> pd.DataFrame:
    if isinstance(data, pd.DataFrame):
        return data.copy()
    if isinstance(data, (str, bytes, Mapping)) or not isinstance(data, Iterable):
        raise TypeError("Se esperaba un DataFrame o una colección de registros")

    filas: List[Dict[str, object]] = []
    for item in data:
        if isinstance(item, ServiceRecord):
            filas.append({_RECORD_FIELDS[k]: v for k, v in item.model_dump().items()})
        elif isinstance(item, Mapping):
            filas.append(dict(item))
        else:
            raise TypeError(f"Registro no soportado: {type(item).__name__}")
    return pd.DataFrame(filas)


def _rename_columns(df: pd.DataFrame) -> pd.DataFrame:
    rename_map: Dict[object, str] = {}
    destinos: Dict[str, object] = {}
    descartadas: List[object] = []
    ignoradas: List[str] = []

    for col in df.columns:
        cleaned = clean_key(col)
        target = _MAPPER_CLEAN.get(cleaned) or _CANONICAS_CLEAN.get(cleaned)
        if target is None:
            ignoradas.append(str(col))
            continue
        if target in destinos:
            descartadas.append(col)
            continue
        destinos[target] = col
        if col != target:
            rename_map[col] = target

    if descartadas:
        logger.warning(
            "action=retiradas_normalize level=warning columnas_duplicadas=%s",
            [str(c) for c in descartadas],
        )
        df = df.drop(columns=descartadas)
    if ignoradas:
        logger.info("action=retiradas_normalize columnas_ignoradas=%s", ignoradas)
    if rename_map:
        logger.debug("action=retiradas_normalize rename=%s", {str(k): v for k, v in rename_map.items()})
    return df.rename(columns=rename_map)


def _texto_col(serie: pd.Series) -> pd.Series:
    return serie.map(clean_text).astype(object)


def normalize(data: Registros) -> pd.DataFrame:
    """Normaliza registros de retiradas a columnas canónicas.

    Estrategia:
    1. Acepta un DataFrame, una lista de diccionarios con los encabezados de la
       planilla o una lista de ``ServiceRecord``.
    2. Renombra encabezados con ``COLUMNAS_MAPPER`` (sin acentos ni espacios).
    3. Crea vacías las columnas canónicas ausentes.
    4. Convierte fechas con ``parse_flexible_date`` (inválidas -> ``None``).
    5. Agrega ``CATEGORIA`` con el status clasificado.
    """
    df = _rename_columns(_to_frame(data))

    for col in COLUMNAS_CANONICAS:
        if col not in df.columns:
            df[col] = None

    for col in COLUMNAS_FECHA:
        df[col] = df[col].map(parse_flexible_date).astype(object)

    for col in COLUMNAS_TEXTO:
        df[col] = _texto_col(df[col])

    df["CYCLE_TIME_DIAS"] = df["CYCLE_TIME_DIAS"].map(value_to_days).astype(object)
    df[CATEGORIA_COL] = classify_series(df["STATUS"])
    df = df.reset_index(drop=True)

    logger.debug(
        "action=retiradas_normalize filas=%s sin_creacion=%s sin_ejecucion=%s",
        len(df),
        int(df["FECHA_CREACION"].isna().sum()),
        int(df["FECHA_EJECUCION"].isna().sum()),
    )
    return df


def records_from_frame(df: pd.DataFrame) -> List[ServiceRecord]:
    """Reconstruye ``ServiceRecord`` a partir de un DataFrame normalizado."""

    inverso = {v: k for k, v in _RECORD_FIELDS.items()}
    registros: List[ServiceRecord] = []
    for fila in df.to_dict(orient="records"):
        registros.append(ServiceRecord(**{inverso[c]: fila.get(c) for c in inverso}))
    return registros
