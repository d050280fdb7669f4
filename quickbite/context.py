"""
===============================================================================
TARJETA CRC — quickbite/context.py (Contexto de logging por request)
===============================================================================

Responsabilidades:
  - Guardar la correlación del request en curso (request_id, method, path)
    en una ContextVar, aislada por task/hilo.

Colaboradores:
  - crosscutting.middleware: la setea al entrar y la limpia al salir.
  - crosscutting.logger: la agrega a cada línea de log.

Restricciones:
  - La identidad autenticada no vive acá: viaja en request.state
    (ver identity.gate).
===============================================================================
"""

from __future__ import annotations

from contextvars import ContextVar
from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class RequestContext:
    request_id: str = ""
    method: str = ""
    path: str = ""


_EMPTY = RequestContext()
_current: ContextVar[RequestContext] = ContextVar("quickbite_request", default=_EMPTY)


def set_request_context(*, request_id: str = "", method: str = "", path: str = "") -> None:
    _current.set(RequestContext(request_id or "", method or "", path or ""))


def current_context() -> RequestContext:
    return _current.get()


def get_context_dict() -> dict[str, str]:
    """Solo las claves con valor."""
    return {key: value for key, value in asdict(_current.get()).items() if value}


def clear_context() -> None:
    _current.set(_EMPTY)
