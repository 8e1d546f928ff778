# Nombre de archivo: middlewares.py
# Ubicación de archivo: core/middlewares.py
# Descripción: Middleware de identificador de solicitud para la API de retiradas

import logging
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.types import ASGIApp

from core.logging import request_id_var

logger = logging.getLogger(__name__)

HEADER_REQUEST_ID = "X-Request-ID"


def _request_id_entrante(valor: str | None) -> str | None:
    """Devuelve el identificador recibido si es un UUID válido."""
    if not valor:
        return None
    try:
        return str(uuid.UUID(valor))
    except ValueError:
        return None


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Reutiliza o genera ``X-Request-ID`` y lo expone a los logs."""

    def __init__(self, app: ASGIApp) -> None:
        super().__init__(app)

    async def dispatch(self, request: Request, call_next):
        request_id = _request_id_entrante(request.headers.get(HEADER_REQUEST_ID)) or str(uuid.uuid4())
        request.state.request_id = request_id
        token = request_id_var.set(request_id)
        try:
            response = await call_next(request)
            logger.debug(
                "action=http_request method=%s path=%s status=%s",
                request.method,
                request.url.path,
                response.status_code,
            )
        finally:
            request_id_var.reset(token)
        response.headers[HEADER_REQUEST_ID] = request_id
        return response
