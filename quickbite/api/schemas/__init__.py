"""DTOs HTTP (pydantic) por recurso."""
