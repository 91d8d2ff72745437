"""
Prometheus instrumentation for the auth service.
"""
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    generate_latest,
)

REGISTRY = CollectorRegistry()

HTTP_REQUESTS_TOTAL = Counter(
    "http_requests_total",
    "Total number of HTTP requests",
    ["method", "path", "status"],
    registry=REGISTRY,
)

HTTP_REQUEST_DURATION = Histogram(
    "http_request_duration_seconds",
    "Duration of HTTP requests in seconds",
    ["method", "path", "status"],
    registry=REGISTRY,
)

AUTH_ATTEMPTS = Counter(
    "authentication_attempts_total",
    "Total number of authentication attempts",
    ["type", "status"],
    registry=REGISTRY,
)

JWT_TOKENS_GENERATED = Counter(
    "jwt_tokens_generated_total",
    "Total number of JWT tokens generated",
    ["type"],
    registry=REGISTRY,
)

ACTIVE_USERS = Gauge("active_users_total", "Total number of registered users", registry=REGISTRY)
DB_CONNECTIONS_ACTIVE = Gauge("database_connections_active", "Number of active database connections", registry=REGISTRY)
DB_CONNECTIONS_IDLE = Gauge("database_connections_idle", "Number of idle database connections", registry=REGISTRY)


def observe_request(method: str, path: str, status: int, seconds: float) -> None:
    HTTP_REQUESTS_TOTAL.labels(method=method, path=path, status=str(status)).inc()
    HTTP_REQUEST_DURATION.labels(method=method, path=path, status=str(status)).observe(seconds)


def record_auth_attempt(kind: str, status: str) -> None:
    AUTH_ATTEMPTS.labels(type=kind, status=status).inc()


def record_token_issued(kind: str) -> None:
    JWT_TOKENS_GENERATED.labels(type=kind).inc()


def set_active_users(count: int) -> None:
    ACTIVE_USERS.set(count)


def set_pool_stats(active: int, idle: int) -> None:
    DB_CONNECTIONS_ACTIVE.set(active)
    DB_CONNECTIONS_IDLE.set(idle)


def render_latest():
    return generate_latest(REGISTRY), CONTENT_TYPE_LATEST
