"""
FastAPI app assembly for the auth service.
"""
import logging
import os
import time

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import JSONResponse

# Configure logging
LOG_LEVEL_NAME = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_LEVEL = getattr(logging, LOG_LEVEL_NAME, logging.INFO)
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)
logger.setLevel(LOG_LEVEL)
logger.info("app_startup: service=auth-service log_level=%s", LOG_LEVEL_NAME)

from auth_service import metrics
from auth_service.api.auth import router as auth_router
from auth_service.api.profile import router as profile_router
from auth_service.api.support import router as support_router

# Database schema is managed by Alembic migrations.

app = FastAPI(
    title="Auth Service",
    description="User registration, login and profile management issuing JWT access tokens.",
    version="1.0.0",
)

app.router.redirect_slashes = False

# Paths whose body validation failures count as authentication attempts
_AUTH_ATTEMPT_PATHS = {
    "/api/auth/register": "register",
    "/api/auth/login": "login",
}


def _allowed_origins():
    raw = os.getenv("CORS_ALLOWED_ORIGINS", "*")
    return [o.strip() for o in raw.split(",") if o.strip()] or ["*"]


app.add_middleware(
    CORSMiddleware,
    allow_origins=_allowed_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Origin", "Content-Type", "Accept", "Authorization"],
)


@app.middleware("http")
async def log_and_measure_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    elapsed = time.perf_counter() - started
    route = request.scope.get("route")
    path = getattr(route, "path", None) or "unmatched"
    if path != "/metrics":
        metrics.observe_request(request.method, path, response.status_code, elapsed)
    logger.info(
        "http_request: method=%s path=%s status=%s latency_ms=%.1f client_ip=%s user_agent=%s request_size=%s",
        request.method,
        request.url.path,
        response.status_code,
        elapsed * 1000,
        request.client.host if request.client else "-",
        request.headers.get("user-agent", "-"),
        request.headers.get("content-length", "0"),
    )
    return response


def validation_message(errors) -> str:
    parts = []
    for err in errors:
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")]
        msg = err.get("msg", "invalid value")
        parts.append(f"{'.'.join(loc)}: {msg}" if loc else msg)
    return "; ".join(parts) or "Invalid request"


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    kind = _AUTH_ATTEMPT_PATHS.get(request.url.path)
    if kind:
        metrics.record_auth_attempt(kind, "validation_error")
        logger.warning("%s_validation_failed: ip=%s", kind, request.client.host if request.client else "-")
    return JSONResponse(status_code=400, content={"error": validation_message(exc.errors())})


app.include_router(auth_router)
app.include_router(profile_router)
app.include_router(support_router)
