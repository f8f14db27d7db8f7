"""Servicios del Core: construcción de requests, clasificación de errores y orquestación."""
