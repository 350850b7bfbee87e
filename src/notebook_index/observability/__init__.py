"""Observability module for OpenTelemetry-aligned tracing, metrics, and logging."""

from notebook_index.observability.logging import JsonFormatter, configure_logging, configure_logging_from_settings
from notebook_index.observability.metrics import (
    INDEX_BUILD_COUNT,
    INDEX_SIZE,
    OPERATION_LATENCY,
    get_metrics,
    get_metrics_content_type,
    get_sample_value,
    init_metrics,
    track_latency,
)
from notebook_index.observability.tracing import create_span, current_trace_ids, get_tracer, init_tracing


__all__ = [
    "INDEX_BUILD_COUNT",
    "INDEX_SIZE",
    "OPERATION_LATENCY",
    "JsonFormatter",
    "configure_logging",
    "configure_logging_from_settings",
    "create_span",
    "current_trace_ids",
    "get_metrics",
    "get_metrics_content_type",
    "get_sample_value",
    "get_tracer",
    "init_metrics",
    "init_tracing",
    "track_latency",
]
