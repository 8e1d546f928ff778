# Nombre de archivo: retiradas.py
# Ubicación de archivo: api/app/routes/retiradas.py
# Descripción: Endpoint para calcular el tablero de retiradas

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from modules.informes_retiradas import runner
from modules.informes_retiradas.schemas import FiltrosRetiradas, PeriodoReferencia

router = APIRouter(prefix="/reports", tags=["reports"])

logger = logging.getLogger(__name__)


class RetiradasRequest(BaseModel):
    """Cuerpo de la solicitud: registros crudos más filtros y período."""

    records: List[Dict[str, Any]] = Field(default_factory=list)
    filtros: FiltrosRetiradas = Field(default_factory=FiltrosRetiradas)
    periodo: Optional[PeriodoReferencia] = None
    meta_percent: Optional[float] = Field(default=None, ge=0, le=100)


@router.post("/retiradas")
def calcular_retiradas(payload: RetiradasRequest) -> Dict[str, Any]:
    """Calcula KPIs, agrupaciones y series del tablero de retiradas."""

    logger.info(
        "action=reports_retiradas registros=%s filtros=%s",
        len(payload.records),
        payload.filtros.model_dump(exclude_defaults=True, mode="json"),
    )
    try:
        resultado = runner.run(
            payload.records,
            filtros=payload.filtros,
            periodo=payload.periodo,
            meta_percent=payload.meta_percent,
        )
    except (TypeError, ValueError) as exc:
        logger.warning("action=reports_retiradas level=warning error=%s", exc)
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return resultado.model_dump(by_alias=True, mode="json")
