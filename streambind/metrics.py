"""
Prometheus metrics for stream binding.

Counters are created by init_metrics(); until then every track_* helper is a
no-op, so the library stays silent for applications that do not opt in.

Environment Variables (read via streambind.config.Settings):
    STREAMBIND_METRICS_ENABLED: Enable metrics server (true/false) - default: false
    STREAMBIND_METRICS_PORT: HTTP port for /metrics endpoint - default: 8080

Usage:
    from streambind.metrics import init_metrics, start_metrics_server

    start_metrics_server(enabled=True, port=8080)
    # curl http://localhost:8080/metrics
"""

import logging
import threading
from typing import Optional

from prometheus_client import REGISTRY, CollectorRegistry, Counter, start_http_server

logger = logging.getLogger(__name__)

MESSAGES_TOTAL: Optional[Counter] = None
EVENTS_APPLIED: Optional[Counter] = None
DECODE_ERRORS: Optional[Counter] = None
IGNORED_TOTAL: Optional[Counter] = None
MESSAGES_ENCODED: Optional[Counter] = None

_metrics_initialized = False
_metrics_lock = threading.Lock()


def init_metrics(registry: Optional[CollectorRegistry] = None) -> None:
    """
    Initialize Prometheus metrics (call once at startup).

    Args:
        registry: Registry to register counters in (default: global REGISTRY)
    """
    global MESSAGES_TOTAL, EVENTS_APPLIED, DECODE_ERRORS, IGNORED_TOTAL, MESSAGES_ENCODED
    global _metrics_initialized

    with _metrics_lock:
        if _metrics_initialized:
            return

        if registry is None:
            registry = REGISTRY

        # Inbound messages with a usable stream name (labels: stream)
        MESSAGES_TOTAL = Counter(
            "streambind_messages_total",
            "Total number of inbound messages handled, by handler stream",
            labelnames=["stream"],
            registry=registry,
        )

        # Binding events handed to a reducer (labels: stream, action)
        EVENTS_APPLIED = Counter(
            "streambind_events_applied_total",
            "Total number of binding events applied to a collection",
            labelnames=["stream", "action"],
            registry=registry,
        )

        # Swallowed decode failures (labels: operation)
        DECODE_ERRORS = Counter(
            "streambind_decode_errors_total",
            "Total number of messages dropped because they failed to decode",
            labelnames=["operation"],
            registry=registry,
        )

        # Well-formed messages with nothing to do (labels: reason)
        IGNORED_TOTAL = Counter(
            "streambind_ignored_total",
            "Total number of messages ignored (unknown action or stream)",
            labelnames=["reason"],
            registry=registry,
        )

        MESSAGES_ENCODED = Counter(
            "streambind_messages_encoded_total",
            "Total number of outbound messages encoded",
            labelnames=["stream", "action"],
            registry=registry,
        )

        _metrics_initialized = True
        logger.info("Prometheus metrics initialized")


def reset_metrics() -> None:
    """Forget initialized counters (used by tests with private registries)."""
    global MESSAGES_TOTAL, EVENTS_APPLIED, DECODE_ERRORS, IGNORED_TOTAL, MESSAGES_ENCODED
    global _metrics_initialized

    with _metrics_lock:
        MESSAGES_TOTAL = EVENTS_APPLIED = DECODE_ERRORS = IGNORED_TOTAL = MESSAGES_ENCODED = None
        _metrics_initialized = False


def start_metrics_server(enabled: bool, port: int) -> None:
    """
    Start Prometheus metrics HTTP server in background thread.

    Args:
        enabled: Whether to start metrics server
        port: HTTP port for /metrics endpoint
    """
    if not enabled:
        logger.info("Metrics server disabled")
        return

    init_metrics()

    try:
        start_http_server(port, addr="0.0.0.0")
        logger.info(f"Metrics server started on http://0.0.0.0:{port}/metrics")
    except OSError as e:
        logger.error(f"Failed to start metrics server: {e}")


def track_message(stream: str) -> None:
    if MESSAGES_TOTAL is not None:
        MESSAGES_TOTAL.labels(stream=stream).inc()


def track_applied(stream: str, action: str) -> None:
    if EVENTS_APPLIED is not None:
        EVENTS_APPLIED.labels(stream=stream, action=action).inc()


def track_decode_error(operation: str) -> None:
    """
    Track a swallowed DecodeError.

    Args:
        operation: "classify", "binding" or "initial"
    """
    if DECODE_ERRORS is not None:
        DECODE_ERRORS.labels(operation=operation).inc()


def track_ignored(reason: str) -> None:
    """
    Track a well-formed message that produced no change.

    Args:
        reason: "unknown_action" or "unknown_stream"
    """
    if IGNORED_TOTAL is not None:
        IGNORED_TOTAL.labels(reason=reason).inc()


def track_encoded(stream: str, action: str) -> None:
    if MESSAGES_ENCODED is not None:
        MESSAGES_ENCODED.labels(stream=stream, action=action).inc()
