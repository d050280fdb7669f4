"""
===============================================================================
ARCHIVO: crosscutting/metrics.py
===============================================================================
CRC CARD (Módulo)
-------------------------------------------------------------------------------
Nombre:
    Métricas (Prometheus)

Responsabilidades:
    - Definir métricas en un registry propio (no el global del proceso).
    - Funciones pequeñas para registrar requests, queries y rechazos de auth.
    - Cuidar cardinalidad: paths normalizados, status agrupados, reasons fijos.
    - Generar la respuesta de /metrics.

Colaboradores:
    - crosscutting.middleware: latencia y conteo HTTP.
    - infrastructure.db.instrumentation: duración de queries.
    - identity.gate / identity.policy: rechazos por motivo.
===============================================================================
"""

from __future__ import annotations

import re

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

_registry = CollectorRegistry()

_requests_total = Counter(
    "quickbite_requests_total",
    "Total de requests HTTP",
    ["endpoint", "method", "status"],
    registry=_registry,
)

_request_latency = Histogram(
    "quickbite_request_latency_seconds",
    "Latencia de requests HTTP (segundos)",
    ["endpoint", "method"],
    buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0),
    registry=_registry,
)

_db_query_duration = Histogram(
    "quickbite_db_query_duration_seconds",
    "Duración de queries DB por tipo de statement",
    ["kind"],
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0),
    registry=_registry,
)

# R: reason es un set cerrado (token_expired, forbidden, ...), nunca input libre.
_auth_rejections_total = Counter(
    "quickbite_auth_rejections_total",
    "Rechazos de autenticación/autorización por motivo",
    ["reason"],
    registry=_registry,
)


def record_request_metrics(
    endpoint: str,
    method: str,
    status_code: int,
    latency_seconds: float,
) -> None:
    """Registra métricas HTTP con endpoint normalizado y status agrupado."""
    normalized = _normalize_endpoint(endpoint)
    _requests_total.labels(
        endpoint=normalized,
        method=method,
        status=_status_bucket(status_code),
    ).inc()
    _request_latency.labels(endpoint=normalized, method=method).observe(
        latency_seconds
    )


def observe_db_query_duration(kind: str, seconds: float) -> None:
    _db_query_duration.labels(kind=kind).observe(seconds)


def record_auth_rejection(reason: str) -> None:
    _auth_rejections_total.labels(reason=reason).inc()


def _normalize_endpoint(path: str) -> str:
    """Reemplaza IDs numéricos por `{id}`."""
    return re.sub(r"/\d+", "/{id}", path)


def _status_bucket(code: int) -> str:
    if 200 <= code < 300:
        return "2xx"
    if 400 <= code < 500:
        return "4xx"
    if 500 <= code < 600:
        return "5xx"
    return "other"


def get_metrics_response() -> tuple[bytes, str]:
    """Genera el body y content-type para /metrics."""
    return generate_latest(_registry), CONTENT_TYPE_LATEST
