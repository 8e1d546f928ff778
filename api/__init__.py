# Nombre de archivo: __init__.py
# Ubicación de archivo: api/__init__.py
# Descripción: Init del paquete api
