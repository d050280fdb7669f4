"""
Casos de uso agrupados por subdominio (auth, users, restaurants, menu_items).

Cada caso de uso expone execute(input) y devuelve un resultado tipado
(valor + error con código estable) en lugar de propagar excepciones de
dominio hacia la API.
"""
