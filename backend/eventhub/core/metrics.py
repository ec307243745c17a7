"""
Metrics instrumentation for observability.
Exposes Prometheus-compatible metrics at /metrics endpoint.
"""

from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from fastapi import Response

# Registration metrics
registration_attempts = Counter(
    'registration_attempts_total',
    'Total registration attempts',
    ['outcome']  # success, invalid, not_found, capacity_exceeded, error
)

registration_latency = Histogram(
    'registration_latency_seconds',
    'Time spent in the register workflow, including waiting on the event guard',
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0]
)

tickets_registered = Counter(
    'tickets_registered_total',
    'Tickets confirmed by successful registrations'
)

# Storage metrics
storage_errors_total = Counter(
    'storage_errors_total',
    'Persistence failures surfaced as StorageError',
    ['operation']
)

# Cache metrics
cache_operations = Counter(
    'cache_operations_total',
    'Cache operations',
    ['operation', 'result']  # get/set/invalidate, hit/miss/ok/error
)


def metrics_endpoint() -> Response:
    """Prometheus metrics endpoint."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


def record_registration(outcome: str, tickets: int = 0):
    """Record a registration outcome and, on success, the tickets it consumed."""
    registration_attempts.labels(outcome=outcome).inc()
    if outcome == "success" and tickets:
        tickets_registered.inc(tickets)


def record_storage_error(operation: str):
    storage_errors_total.labels(operation=operation).inc()


def record_cache_operation(operation: str, result: str):
    cache_operations.labels(operation=operation, result=result).inc()
