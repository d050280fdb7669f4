"""Implementaciones de los puertos de persistencia (Postgres / in-memory)."""
