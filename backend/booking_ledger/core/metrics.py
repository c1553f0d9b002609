"""
Metrics instrumentation for observability.
Exposes Prometheus-compatible metrics at /metrics endpoint.
"""

from prometheus_client import Counter, Gauge, generate_latest, CONTENT_TYPE_LATEST
from fastapi import Response

# Store metrics
booking_operations = Counter(
    'booking_operations_total',
    'Booking store operations',
    ['operation']  # create, update, delete, import, export
)

bookings_stored = Gauge(
    'bookings_stored',
    'Number of bookings currently held by the store'
)

# Storage slot metrics
storage_operations = Counter(
    'storage_operations_total',
    'Storage slot reads and writes',
    ['operation', 'result']  # load/save, ok/error/skipped
)


def metrics_endpoint() -> Response:
    """
    Prometheus metrics endpoint.

    Usage:
        @app.get("/metrics")
        def metrics():
            return metrics_endpoint()
    """
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


def record_collection_size(stored: int):
    bookings_stored.set(stored)


def record_booking_operation(operation: str, stored: int):
    """Record a store operation and the resulting collection size."""
    booking_operations.labels(operation=operation).inc()
    record_collection_size(stored)


def record_storage_operation(operation: str, result: str):
    """Record storage access. Result: ok, error, skipped"""
    storage_operations.labels(operation=operation, result=result).inc()
