"""
Metrics instrumentation for observability.
Exposes Prometheus-compatible metrics at /metrics endpoint.
"""

import functools
import time

from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from fastapi import Response

from app.core.exceptions import ForbiddenError, NotFoundError

# Booking metrics
booking_operations = Counter(
    'booking_operations_total',
    'Booking operations by outcome',
    ['operation', 'outcome']  # get/create/update; success, not_found, forbidden, error
)

booking_latency = Histogram(
    'booking_latency_seconds',
    'Booking operation latency',
    ['operation'],
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0]
)

# Cache metrics
cache_operations = Counter(
    'cache_operations_total',
    'Cache operations',
    ['operation', 'result']  # get; hit/miss
)


def metrics_endpoint() -> Response:
    """Prometheus metrics endpoint."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


def _outcome(exc: BaseException | None) -> str:
    if exc is None:
        return "success"
    if isinstance(exc, NotFoundError):
        return "not_found"
    if isinstance(exc, ForbiddenError):
        return "forbidden"
    return "error"


def track_booking(operation: str):
    """Decorator for async service methods: counts outcomes and times each call."""
    def decorator(func):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            start = time.perf_counter()
            error = None
            try:
                return await func(*args, **kwargs)
            except Exception as e:
                error = e
                raise
            finally:
                booking_latency.labels(operation=operation).observe(time.perf_counter() - start)
                booking_operations.labels(operation=operation, outcome=_outcome(error)).inc()
        return wrapper
    return decorator


def record_cache_operation(operation: str, hit: bool):
    """Record cache operation."""
    result = "hit" if hit else "miss"
    cache_operations.labels(operation=operation, result=result).inc()
