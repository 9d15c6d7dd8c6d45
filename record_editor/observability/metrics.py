"""Prometheus metrics for backend synchronization."""

from prometheus_client import Counter, Histogram

SYNC_OPERATIONS = Counter(
    "record_editor_sync_operations_total",
    "Total number of sync operations by outcome",
    labelnames=["operation", "outcome"],
)

SYNC_LATENCY = Histogram(
    "record_editor_sync_latency_seconds",
    "Backend round-trip latency per sync operation",
    labelnames=["operation"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)


def record_sync(operation: str, outcome: str, latency: float | None = None) -> None:
    """Count one sync operation and, when a backend call was made, its latency."""
    SYNC_OPERATIONS.labels(operation=operation, outcome=outcome).inc()
    if latency is not None:
        SYNC_LATENCY.labels(operation=operation).observe(latency)
