# quickbite/crosscutting/logger.py
"""
===============================================================================
MÓDULO: Logging JSON de QuickBite
===============================================================================

Un registro por línea, con request_id/method/path del request en curso.
Passwords, hashes, secretos y tokens nunca salen en claro.

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  JSONFormatter + redact() + setup_logger()

Responsabilidades:
  - Serializar LogRecord a JSON compacto
  - Copiar los `extra` del caller (saneados)
  - Enmascarar claves sensibles y acotar strings largos / anidamientos

Colaboradores:
  - quickbite/context.py (request_id, method, path)
  - api/main.py (reconfigura nivel y formato desde Settings)
===============================================================================
"""

from __future__ import annotations

import json
import logging
import os
import sys
import traceback
from datetime import datetime, timezone
from typing import Any

from ..context import get_context_dict

# R: atributos estándar de LogRecord; todo lo demás vino por `extra=`.
_STANDARD_ATTRS = frozenset(logging.makeLogRecord({}).__dict__) | {"message", "asctime"}

SENSITIVE_KEYS = frozenset(
    {
        "password",
        "current_password",
        "new_password",
        "password_hash",
        "secret",
        "jwt_secret",
        "token",
        "authorization",
        "credential",
    }
)

MASK = "[redactado]"
MAX_STRING = 2_000
MAX_DEPTH = 4


def redact(value: Any, key: str | None = None, depth: int = 0) -> Any:
    """Copia JSON-friendly de `value` con claves sensibles enmascaradas."""
    if key is not None and key.lower() in SENSITIVE_KEYS:
        return MASK
    if depth >= MAX_DEPTH:
        return "[profundidad]"
    if isinstance(value, str):
        return value if len(value) <= MAX_STRING else f"{value[:MAX_STRING]}[+{len(value) - MAX_STRING}]"
    if isinstance(value, (bool, int, float)) or value is None:
        return value
    if isinstance(value, dict):
        return {str(k): redact(v, str(k), depth + 1) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [redact(item, key, depth + 1) for item in value]
    return str(value)


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "where": f"{record.module}:{record.funcName}:{record.lineno}",
        }
        entry.update(get_context_dict())
        entry.update(
            (name, redact(value, name))
            for name, value in vars(record).items()
            if name not in _STANDARD_ATTRS
        )

        if record.exc_info and record.exc_info[0] is not None:
            error_type, error, tb = record.exc_info
            entry["exception"] = {
                "type": error_type.__name__,
                "message": str(error),
                "traceback": "".join(traceback.format_exception(error_type, error, tb)),
            }

        return json.dumps(entry, ensure_ascii=False, default=str)


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


def setup_logger(
    name: str = "quickbite", *, level: str | None = None, use_json: bool | None = None
) -> logging.Logger:
    """
    Configura (o reconfigura) el logger de la app sin duplicar handlers.

    Sin argumentos toma LOG_LEVEL / LOG_JSON del entorno.
    """
    log = logging.getLogger(name)
    resolved = logging.getLevelName((level or os.getenv("LOG_LEVEL", "INFO")).upper())
    log.setLevel(resolved if isinstance(resolved, int) else logging.INFO)

    if use_json is None:
        use_json = _env_flag("LOG_JSON", "true")
    formatter: logging.Formatter = (
        JSONFormatter() if use_json else logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
    )

    if not log.handlers:
        log.addHandler(logging.StreamHandler(sys.stdout))
    for handler in log.handlers:
        handler.setFormatter(formatter)
    return log


logger = setup_logger()
