"""Adaptadores de infraestructura: pool DB y repositorios (Postgres / in-memory)."""
