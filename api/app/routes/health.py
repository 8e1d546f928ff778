# Nombre de archivo: health.py
# Ubicación de archivo: api/app/routes/health.py
# Descripción: Endpoints de health y métricas básicas del servicio
from datetime import datetime, timezone

from fastapi import APIRouter, Request

from core.config import get_settings

router = APIRouter()


@router.get("/health")
def health():
    return {
        "status": "ok",
        "service": get_settings().service_name,
        "time": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/metrics")
def metrics(request: Request) -> dict:
    """Devuelve cantidad de solicitudes y latencia promedio."""
    return request.app.state.metrics.snapshot()
