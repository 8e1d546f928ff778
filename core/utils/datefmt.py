# Nombre de archivo: datefmt.py
# Ubicación de archivo: core/utils/datefmt.py
# Descripción: Conversión tolerante de fechas de planillas (seriales Excel, DD/MM/YYYY, ISO)

from __future__ import annotations

import math
import re
from datetime import date, datetime, timedelta
from typing import Optional

import numpy as np
import pandas as pd

BR_DATE_RE = re.compile(r"^\s*(?P<d>\d{1,2})/(?P<m>\d{1,2})/(?P<y>\d{4})(?:\s+\d{1,2}:\d{2}(?::\d{2})?)?\s*$")
ISO_DATE_RE = re.compile(r"^\s*(?P<y>\d{4})-(?P<m>\d{1,2})-(?P<d>\d{1,2})(?:[T\s].*)?$")
SERIAL_RE = re.compile(r"^\s*\d+(?:[\.,]\d+)?\s*$")
DAYS_RE = re.compile(r"^\s*(?P<n>-?\d+(?:[\.,]\d+)?)\s*(?:d|dia|dias|días)?\s*$", re.IGNORECASE)

EXCEL_EPOCH = date(1900, 1, 1)
# Serial 60 es el 29/02/1900 inexistente que Excel cuenta igual
EXCEL_LEAP_BUG_SERIAL = 59


def excel_serial_to_date(serial: float) -> Optional[date]:
    """Convierte un serial de Excel (días desde 01/01/1900) a ``date``.

    El serial 1 corresponde al 01/01/1900. A partir del serial 60 se descuenta
    un día adicional por el 29/02/1900 que Excel considera válido. La fracción
    horaria se descarta. Retorna ``None`` para seriales no positivos.
    """

    if serial is None or (isinstance(serial, float) and math.isnan(serial)):
        return None
    whole = int(math.floor(serial))
    if whole <= 0:
        return None
    days = whole - 1
    if whole > EXCEL_LEAP_BUG_SERIAL:
        days -= 1
    try:
        return EXCEL_EPOCH + timedelta(days=days)
    except OverflowError:
        return None


def _safe_date(year: int, month: int, day: int) -> Optional[date]:
    try:
        return date(year, month, day)
    except ValueError:
        return None


def parse_flexible_date(raw: object) -> Optional[date]:
    """Interpreta una fecha proveniente de una planilla.

    Admite seriales numéricos de Excel, strings ``DD/MM/YYYY`` (con hora
    opcional), strings ISO ``YYYY-MM-DD`` y objetos ``date``/``datetime``/
    ``Timestamp``. Cualquier valor vacío o no interpretable devuelve ``None``;
    la función nunca lanza excepciones.
    """

    if raw is None or raw is pd.NA or raw is pd.NaT:
        return None

    if isinstance(raw, pd.Timestamp):
        return None if pd.isna(raw) else raw.date()

    if isinstance(raw, datetime):
        return raw.date()

    if isinstance(raw, date):
        return raw

    if isinstance(raw, np.datetime64):
        ts = pd.Timestamp(raw)
        return None if pd.isna(ts) else ts.date()

    if isinstance(raw, bool):
        return None

    if isinstance(raw, (int, np.integer)):
        return excel_serial_to_date(int(raw))

    if isinstance(raw, (float, np.floating)):
        if math.isnan(raw) or math.isinf(raw):
            return None
        return excel_serial_to_date(float(raw))

    try:
        text = str(raw).strip()
    except Exception:  # noqa: BLE001 - __str__ arbitrario
        return None
    if not text:
        return None

    match = BR_DATE_RE.match(text)
    if match:
        return _safe_date(int(match.group("y")), int(match.group("m")), int(match.group("d")))

    match = ISO_DATE_RE.match(text)
    if match:
        return _safe_date(int(match.group("y")), int(match.group("m")), int(match.group("d")))

    if SERIAL_RE.match(text):
        return excel_serial_to_date(float(text.replace(",", ".")))

    return None


def value_to_days(value: object) -> Optional[int]:
    """Convierte el valor de la columna ``Cycle Time`` a días enteros."""

    if value is None or value is pd.NA:
        return None

    if isinstance(value, bool):
        return None

    if isinstance(value, (int, np.integer)):
        return int(value)

    if isinstance(value, (float, np.floating)):
        if math.isnan(value):
            return None
        return int(value)

    if isinstance(value, (pd.Timedelta, timedelta)):
        return int(value.total_seconds() // 86400)

    match = DAYS_RE.match(str(value))
    if match:
        return int(float(match.group("n").replace(",", ".")))
    return None


def format_ddmm(value: Optional[date]) -> str:
    """Formatea una fecha como ``DD/MM`` (``-`` si no hay fecha)."""

    if value is None:
        return "-"
    return value.strftime("%d/%m")


def format_br(value: Optional[date]) -> str:
    """Formatea una fecha como ``DD/MM/YYYY`` (``-`` si no hay fecha)."""

    if value is None:
        return "-"
    return value.strftime("%d/%m/%Y")
