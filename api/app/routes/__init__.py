# Nombre de archivo: __init__.py
# Ubicación de archivo: api/app/routes/__init__.py
# Descripción: Init del paquete routes

"""Routers de la API del tablero de retiradas."""

from .health import router as health_router
from .retiradas import router as retiradas_router

__all__ = ["health_router", "retiradas_router"]
