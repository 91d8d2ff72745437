"""
FastAPI app assembly: logging, middleware, error mapping and router wiring.
"""
import logging
import os
import time

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import JSONResponse, Response

# Configure logging
LOG_LEVEL_NAME = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_LEVEL = getattr(logging, LOG_LEVEL_NAME, logging.INFO)
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)
logger.setLevel(LOG_LEVEL)
logger.info("app_startup: service=portfolio-service log_level=%s", LOG_LEVEL_NAME)

from portfolio.api.portfolios import router as portfolios_router
from portfolio.api.categories import router as categories_router
from portfolio.api.projects import router as projects_router
from portfolio.api.sections import router as sections_router
from portfolio.api.section_contents import router as section_contents_router
from portfolio.api.support import router as support_router
from portfolio.metrics import observe_request, render_latest

# Database schema is managed by Alembic migrations.

app = FastAPI(
    title="Portfolio Service",
    description="API for managing portfolios, categories, projects and sections.",
    version="1.0.0",
)

# Avoid implicit trailing-slash redirects for predictable URLs
app.router.redirect_slashes = False

DEFAULT_ORIGINS = [
    "http://localhost",
    "http://localhost:3000",
    "http://localhost:5173",
    "http://localhost:8000",
]


def _allowed_origins():
    raw = os.getenv("CORS_ALLOWED_ORIGINS", "")
    origins = [o.strip() for o in raw.split(",") if o.strip()]
    return origins or DEFAULT_ORIGINS


app.add_middleware(
    CORSMiddleware,
    allow_origins=_allowed_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _route_template(request: Request) -> str:
    route = request.scope.get("route")
    return getattr(route, "path", None) or "unmatched"


# Middleware: request log line and HTTP metrics
@app.middleware("http")
async def log_and_measure_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    elapsed = time.perf_counter() - started
    path = _route_template(request)
    if path != "/metrics":
        observe_request(request.method, path, response.status_code, elapsed)
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
    """Flatten pydantic errors into `field: message; ...`."""
    parts = []
    for err in errors:
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")]
        msg = err.get("msg", "invalid value")
        parts.append(f"{'.'.join(loc)}: {msg}" if loc else msg)
    return "; ".join(parts) or "Invalid request"


# Error bodies are always {"error": "<message>"}
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.info("request_validation_failed: path=%s errors=%d", request.url.path, len(exc.errors()))
    return JSONResponse(status_code=400, content={"error": validation_message(exc.errors())})


@app.get("/metrics", include_in_schema=False)
def metrics():
    body, content_type = render_latest()
    return Response(content=body, media_type=content_type)


app.include_router(portfolios_router)
app.include_router(categories_router)
app.include_router(projects_router)
app.include_router(sections_router)
app.include_router(section_contents_router)
app.include_router(support_router)
