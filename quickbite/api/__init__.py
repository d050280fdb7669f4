"""Capa HTTP: app FastAPI, routers, DTOs y mapeo de errores."""
