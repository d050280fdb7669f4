"""Routers por recurso (auth, users, restaurants, menu-items)."""
