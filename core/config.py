# Nombre de archivo: config.py
# Ubicación de archivo: core/config.py
# Descripción: Configuración centralizada (entorno) del tablero de retiradas

"""Settings del servicio, leídos de variables de entorno ``RETIRADAS_*``."""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import ConfigDict, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Parámetros configurables del motor de métricas y su API."""

    service_name: str = Field(default="retiradas", description="Nombre lógico del servicio")
    log_level: str = Field(default="INFO", description="Nivel de logging del servicio")
    log_to_file: Optional[bool] = Field(
        default=None,
        description="Fuerza el log a archivo rotativo; si None depende de ENV",
    )
    meta_percent: Optional[float] = Field(
        default=None,
        ge=0,
        le=100,
        description="Meta de éxito (%) por defecto cuando la solicitud no la informa",
    )
    excluir_cancelados_base: bool = Field(
        default=True,
        description="Excluye cancelados del denominador de los porcentajes",
    )
    modelo_fibra: str = Field(default="MODEM FIBRA", description="Modelo que define el segmento Fibra")
    top_n: int = Field(default=10, ge=1, description="Cantidad de categorías en rankings por tipo/modelo")

    model_config = ConfigDict(env_prefix="RETIRADAS_", case_sensitive=False)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Retorna settings cacheados para reutilizar en el proyecto."""

    return Settings()


__all__ = ["Settings", "get_settings"]
