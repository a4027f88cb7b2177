"""
Metrics instrumentation for observability.
Prometheus-compatible; the embedding process decides how to expose them.
"""

from prometheus_client import Counter, Gauge, generate_latest

# Booking metrics
booking_attempts = Counter(
    'booking_attempts_total',
    'Total booking attempts',
    ['kind', 'status']  # course/study, success/not_found/no_seats/invalid_input
)

# Admin metrics
admin_operations = Counter(
    'admin_operations_total',
    'Admin controller operations',
    ['operation', 'result']  # ok, unauthorized, invalid_credentials, ...
)

# Persistence metrics
store_writes = Counter(
    'store_writes_total',
    'Writes to the persistent store',
    ['key', 'result']  # ok, error
)

# Inventory gauges
study_hall_seats_available = Gauge(
    'study_hall_seats_available',
    'Study hall seats currently available'
)


def render_metrics() -> bytes:
    """Prometheus text exposition of the default registry."""
    return generate_latest()


# Convenience functions for instrumentation
def record_booking_attempt(kind: str, status: str):
    """Record booking attempt. Status: success or an error kind value."""
    booking_attempts.labels(kind=kind, status=status).inc()

def record_admin_operation(operation: str, result: str):
    admin_operations.labels(operation=operation, result=result).inc()

def record_store_write(key: str, ok: bool):
    result = "ok" if ok else "error"
    store_writes.labels(key=key, result=result).inc()
