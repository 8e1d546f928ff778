# Nombre de archivo: metrics.py
# Ubicación de archivo: core/metrics.py
# Descripción: Acumulador de solicitudes, errores y latencia de la API de retiradas

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class Metrics:
    """Acumulador en memoria de la API (único estado del servicio)."""

    total_requests: int = 0
    total_latency: float = 0.0
    total_errors: int = 0
    por_ruta: Counter = field(default_factory=Counter)

    def record(self, latency: float, path: Optional[str] = None, status_code: int = 200) -> None:
        """Registra una solicitud con su latencia (segundos) y resultado."""
        self.total_requests += 1
        self.total_latency += latency
        if status_code >= 500:
            self.total_errors += 1
        if path:
            self.por_ruta[path] += 1

    def snapshot(self) -> dict[str, object]:
        """Resumen con latencia promedio en ms y conteo por ruta."""
        promedio = self.total_latency / self.total_requests if self.total_requests else 0.0
        return {
            "total_requests": self.total_requests,
            "total_errors": self.total_errors,
            "average_latency_ms": round(promedio * 1000, 3),
            "requests_by_path": dict(self.por_ruta),
        }

    def reset(self) -> None:
        self.total_requests = 0
        self.total_latency = 0.0
        self.total_errors = 0
        self.por_ruta.clear()
