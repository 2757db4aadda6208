"""
Metrics instrumentation for observability.
Exposes Prometheus-compatible metrics at /metrics endpoint.
"""

from typing import Optional

from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from fastapi import Response

# Booking metrics
booking_attempts = Counter(
    'booking_attempts_total',
    'Total room reservation attempts',
    ['status']  # success, not_found, ineligible, no_vacancy, error
)

booking_latency = Histogram(
    'booking_latency_seconds',
    'Room reservation latency',
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0]
)

room_changes = Counter(
    'room_changes_total',
    'Total room change attempts',
    ['status']  # success, not_found, no_vacancy, error
)

# Cache metrics
cache_operations = Counter(
    'cache_operations_total',
    'Cache operations',
    ['operation', 'result']  # get/set, hit/miss
)

redis_connection_errors = Counter(
    'redis_connection_errors_total',
    'Redis connection errors'
)

STATUS_BY_ERROR_KIND = {
    "not_found": "not_found",
    "requirements_not_met": "ineligible",
    "no_vacancy": "no_vacancy",
}


def metrics_endpoint() -> Response:
    """Prometheus metrics endpoint."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


def outcome_label(error_kind: Optional[str] = None) -> str:
    """Map an error kind (or None for success) to a metric label."""
    if error_kind is None:
        return "success"
    return STATUS_BY_ERROR_KIND.get(error_kind, "error")


# Convenience functions for instrumentation
def record_booking_attempt(status: str):
    """Record reservation attempt. Status: success, not_found, ineligible, no_vacancy, error"""
    booking_attempts.labels(status=status).inc()

def record_room_change(status: str):
    """Record room change attempt."""
    room_changes.labels(status=status).inc()

def record_cache_operation(operation: str, hit: bool):
    """Record cache operation."""
    result = "hit" if hit else "miss"
    cache_operations.labels(operation=operation, result=result).inc()
