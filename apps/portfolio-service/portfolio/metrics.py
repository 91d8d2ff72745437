"""
Prometheus instrumentation for the portfolio service.

Collectors live in a service-local registry so the auth service can be
imported into the same interpreter without duplicate registrations.
"""
from prometheus_client import CollectorRegistry, Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST

REGISTRY = CollectorRegistry()

HTTP_REQUESTS_TOTAL = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "path", "status"],
    registry=REGISTRY,
)

HTTP_REQUEST_DURATION = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency in seconds",
    ["method", "path", "status"],
    registry=REGISTRY,
)

ENTITY_OPERATIONS_TOTAL = Counter(
    "portfolio_entity_operations_total",
    "Create/update/delete operations per entity",
    ["entity", "operation", "status"],
    registry=REGISTRY,
)


def observe_request(method: str, path: str, status: int, seconds: float) -> None:
    HTTP_REQUESTS_TOTAL.labels(method=method, path=path, status=str(status)).inc()
    HTTP_REQUEST_DURATION.labels(method=method, path=path, status=str(status)).observe(seconds)


def record_operation(entity: str, operation: str, status: str = "success") -> None:
    ENTITY_OPERATIONS_TOTAL.labels(entity=entity, operation=operation, status=status).inc()


def render_latest():
    """Return ``(body, content_type)`` for the /metrics endpoint."""
    return generate_latest(REGISTRY), CONTENT_TYPE_LATEST
