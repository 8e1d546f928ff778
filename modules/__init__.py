# Nombre de archivo: __init__.py
# Ubicación de archivo: modules/__init__.py
# Descripción: Init del paquete de informes
