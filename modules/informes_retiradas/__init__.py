# Nombre de archivo: __init__.py
# Ubicación de archivo: modules/informes_retiradas/__init__.py
# Descripción: Inicializa el paquete del tablero de retiradas

from .runner import periodo_desde_nombre, run
from .schemas import FiltrosRetiradas, PeriodoReferencia, ResultadoRetiradas, ServiceRecord
from .status import StatusCategoria, classify

__all__ = [
    "FiltrosRetiradas",
    "PeriodoReferencia",
    "ResultadoRetiradas",
    "ServiceRecord",
    "StatusCategoria",
    "classify",
    "periodo_desde_nombre",
    "run",
]
