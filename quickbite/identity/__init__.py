"""
Identidad y control de acceso: hashing de credenciales, tokens firmados,
gate de autenticación por request y política RBAC por ruta.
"""
