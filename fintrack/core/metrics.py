"""Prometheus metrics for the fintrack service.

Metrics are organized into two categories:

Ledger Metrics:
- fintrack_transaction_mutations_total: Store mutations by operation
- fintrack_persistence_failures_total: Failed writes to local storage

Sync Metrics:
- fintrack_remote_sync_total: Remote document requests by operation/status
- fintrack_remote_sync_latency_seconds: Remote document request latency
- fintrack_sync_debounce_reschedules_total: Pending writes replaced by newer ones
- fintrack_http_requests_total: HTTP requests by endpoint/status
"""

import time
from contextlib import contextmanager
from typing import Generator

from prometheus_client import Counter, Histogram, REGISTRY, generate_latest
from prometheus_client.exposition import CONTENT_TYPE_LATEST


# =============================================================================
# Ledger Metrics
# =============================================================================

transaction_mutations = Counter(
    "fintrack_transaction_mutations_total",
    "Total number of transaction store mutations",
    ["operation"],  # add, remove, toggle_split, replace_all, merge_import, clear
)

persistence_failures = Counter(
    "fintrack_persistence_failures_total",
    "Total number of failed writes to local storage",
    ["key"],
)


# =============================================================================
# Sync Metrics
# =============================================================================

remote_sync_total = Counter(
    "fintrack_remote_sync_total",
    "Total number of remote document requests",
    ["operation", "status"],  # create/update/fetch, success/failure
)

remote_sync_failures = Counter(
    "fintrack_remote_sync_failures_total",
    "Total number of remote document failures by cause",
    ["operation", "error_type"],  # auth, not_found, timeout, error, malformed
)

remote_sync_latency = Histogram(
    "fintrack_remote_sync_latency_seconds",
    "Remote document request latency in seconds",
    ["operation"],
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

debounce_reschedules = Counter(
    "fintrack_sync_debounce_reschedules_total",
    "Total number of pending remote writes replaced by a newer mutation",
)

http_requests_total = Counter(
    "fintrack_http_requests_total",
    "Total HTTP requests by endpoint and status",
    ["method", "endpoint", "status"],
)

http_request_latency = Histogram(
    "fintrack_http_request_latency_seconds",
    "HTTP request latency by endpoint",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)


# =============================================================================
# Helper Functions
# =============================================================================

def record_mutation(operation: str) -> None:
    """Record a transaction store mutation."""
    transaction_mutations.labels(operation=operation).inc()


def record_persistence_failure(key: str) -> None:
    """Record a failed local storage write."""
    persistence_failures.labels(key=key).inc()


@contextmanager
def track_remote_sync_latency(operation: str) -> Generator[None, None, None]:
    """Context manager to track remote document request latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        duration = time.perf_counter() - start
        remote_sync_latency.labels(operation=operation).observe(duration)


def record_remote_sync_success(operation: str) -> None:
    """Record a successful remote document request."""
    remote_sync_total.labels(operation=operation, status="success").inc()


def record_remote_sync_failure(operation: str, error_type: str) -> None:
    """Record a failed remote document request."""
    remote_sync_total.labels(operation=operation, status="failure").inc()
    remote_sync_failures.labels(operation=operation, error_type=error_type).inc()


def record_debounce_reschedule() -> None:
    """Record a pending write being replaced by a newer one."""
    debounce_reschedules.inc()


def record_http_request(method: str, endpoint: str, status: int, duration: float) -> None:
    """Record an HTTP request."""
    http_requests_total.labels(method=method, endpoint=endpoint, status=str(status)).inc()
    http_request_latency.labels(method=method, endpoint=endpoint).observe(duration)


def get_metrics() -> bytes:
    """Get current metrics in Prometheus format."""
    return generate_latest(REGISTRY)


def get_metrics_content_type() -> str:
    """Get the content type for metrics response."""
    return CONTENT_TYPE_LATEST
