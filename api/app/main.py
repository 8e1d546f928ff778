# Nombre de archivo: main.py
# Ubicación de archivo: api/app/main.py
# Descripción: Aplicación FastAPI principal (health, métricas y tablero de retiradas)

import time

from fastapi import FastAPI, Request

from core.config import get_settings
from core.logging import setup_logging
from core.metrics import Metrics
from core.middlewares import RequestIDMiddleware

from .routes import health_router, retiradas_router


def create_app() -> FastAPI:
    settings = get_settings()
    setup_logging(settings.service_name, settings.log_level, enable_file=settings.log_to_file)

    app = FastAPI(title="Retiradas API", version="0.1.0")
    app.state.metrics = Metrics()
    app.add_middleware(RequestIDMiddleware)

    @app.middleware("http")
    async def collect_metrics(request: Request, call_next):
        inicio = time.perf_counter()
        response = await call_next(request)
        request.app.state.metrics.record(
            time.perf_counter() - inicio,
            path=request.url.path,
            status_code=response.status_code,
        )
        return response

    app.include_router(health_router, tags=["health"])
    app.include_router(retiradas_router)
    return app


app = create_app()
