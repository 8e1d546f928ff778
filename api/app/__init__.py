# Nombre de archivo: __init__.py
# Ubicación de archivo: api/app/__init__.py
# Descripción: Init del paquete de la aplicación FastAPI
