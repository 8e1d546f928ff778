# Nombre de archivo: config.py
# Ubicación de archivo: modules/informes_retiradas/config.py
# Descripción: Configuración y constantes para el tablero de retiradas

from typing import Dict, List

# Mapeo de encabezados de la planilla a nombres canónicos.
# Las claves se comparan normalizadas (sin acentos, espacios, guiones bajos ni
# puntos, en minúsculas). Si varias columnas de la planilla apuntan al mismo
# destino, se usa la primera encontrada en el orden de la planilla.
COLUMNAS_MAPPER: Dict[str, str] = {
    # Identificador de la orden de servicio
    "os": "ID",
    "id": "ID",
    "numero os": "ID",

    # Fechas
    "data criação": "FECHA_CREACION",
    "data criacao": "FECHA_CREACION",
    "creation date": "FECHA_CREACION",
    "data agend.": "FECHA_AGENDADA",
    "data agendamento": "FECHA_AGENDADA",
    "data exec.": "FECHA_EJECUCION",
    "data execução": "FECHA_EJECUCION",
    "data execucao": "FECHA_EJECUCION",
    "último atendimento": "FECHA_ULTIMO_ATENDIMIENTO",
    "ultimo atendimento": "FECHA_ULTIMO_ATENDIMIENTO",

    # Status
    "status icare": "STATUS",
    "satus icare": "STATUS",
    "status": "STATUS",
    "status atividade": "STATUS_ATIVIDADE",

    # Equipo y servicio
    "modelo": "MODELO",
    "model": "MODELO",
    "tipo-subtipo de serviço": "TIPO_SERVICIO",
    "tipo-subtipo de servico": "TIPO_SERVICIO",
    "tipo-subtipo": "TIPO_SERVICIO",

    # Técnico del último atendimiento
    "técnico - último atendimento": "TECNICO",
    "tecnico - ultimo atendimento": "TECNICO",
    "tecnico": "TECNICO",

    "cycle time": "CYCLE_TIME_DIAS",

    # Nombres de campo de ServiceRecord (camelCase o snake_case)
    "scheduled date": "FECHA_AGENDADA",
    "execution date": "FECHA_EJECUCION",
    "last service date": "FECHA_ULTIMO_ATENDIMIENTO",
    "status label": "STATUS",
    "activity status": "STATUS_ATIVIDADE",
    "service type label": "TIPO_SERVICIO",
    "last technician": "TECNICO",
    "cycle time days": "CYCLE_TIME_DIAS",
}

COLUMNAS_FECHA: List[str] = [
    "FECHA_CREACION",
    "FECHA_AGENDADA",
    "FECHA_EJECUCION",
    "FECHA_ULTIMO_ATENDIMIENTO",
]

COLUMNAS_TEXTO: List[str] = [
    "ID",
    "STATUS",
    "STATUS_ATIVIDADE",
    "MODELO",
    "TIPO_SERVICIO",
    "TECNICO",
]

# Columnas canónicas que siempre existen tras normalizar
COLUMNAS_CANONICAS: List[str] = COLUMNAS_TEXTO[:1] + COLUMNAS_FECHA + COLUMNAS_TEXTO[1:] + ["CYCLE_TIME_DIAS"]

MODELO_FIBRA = "MODEM FIBRA"

# Valor de los selectores que desactiva el filtro
FILTRO_TODOS = "todos"

# Tokens especiales del filtro multi-selección de técnicos
TECNICO_CON_VALOR = "filled"
TECNICO_VACIO = "empty"

# Etiqueta para status o modelo ausente
ETIQUETA_OUTROS = "Outros"

TOP_N_DEFAULT = 10

# Familias de modelo para el gráfico Status por Modelo
FAMILIAS_MODELO: List[str] = [
    "MODEM FIBRA",
    "DVR ANDROID 4K",
    "HD PLUS",
    "ZAPPER",
    "LINHA",
]

MESES_PT: List[str] = [
    "JANEIRO",
    "FEVEREIRO",
    "MARÇO",
    "ABRIL",
    "MAIO",
    "JUNHO",
    "JULHO",
    "AGOSTO",
    "SETEMBRO",
    "OUTUBRO",
    "NOVEMBRO",
    "DEZEMBRO",
]

MESES_PT_CORTOS: List[str] = [
    "jan",
    "fev",
    "mar",
    "abr",
    "mai",
    "jun",
    "jul",
    "ago",
    "set",
    "out",
    "nov",
    "dez",
]
