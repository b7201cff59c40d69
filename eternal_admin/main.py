"""FastAPI application entry point"""
import traceback
from contextlib import asynccontextmanager
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_fastapi_instrumentator import Instrumentator
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from eternal_admin import __version__
from eternal_admin.api import auth, health
from eternal_admin.config import settings
from eternal_admin.errors import AppError
from eternal_admin.middleware.monitoring import MonitoringMiddleware, record_auth_failure
from eternal_admin.middleware.rate_limit import limiter
from eternal_admin.utils.logger import logger, setup_logging

# Setup logging
setup_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler"""
    # Startup
    logger.info("Eternal admin backend starting up", extra={
        "version": __version__,
        "environment": settings.ENVIRONMENT,
        "rate_limiting": settings.RATE_LIMIT_ENABLED,
        "monitoring": settings.METRICS_ENABLED,
    })
    yield
    # Shutdown
    logger.info("Eternal admin backend shutting down")


# Create FastAPI app
app = FastAPI(
    title="Eternal Backend API",
    description="Admin backend for the Eternal marketing site: accounts and authentication",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# ===== Middleware Setup =====

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Monitoring middleware
if settings.METRICS_ENABLED:
    app.add_middleware(MonitoringMiddleware)

    # Prometheus metrics
    instrumentator = Instrumentator(
        should_group_status_codes=True,
        should_ignore_untemplated=True,
        excluded_handlers=["/metrics", "/health", "/health/live"],
    )
    instrumentator.instrument(app)
    instrumentator.expose(app, endpoint=settings.METRICS_PATH, include_in_schema=False)

# Rate limiting (login has its own limit, other routes get RATE_LIMIT_DEFAULT;
# both follow limiter.enabled)
app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)

# ===== Route Setup =====

app.include_router(health.router)
app.include_router(auth.router)


@app.get("/")
def root():
    """Root endpoint"""
    return {
        "message": "Eternal Backend API",
        "version": __version__,
        "endpoints": {
            "health": "/health",
            "auth": "/api/auth",
            "docs": "/docs",
            "metrics": settings.METRICS_PATH if settings.METRICS_ENABLED else None,
        },
    }


# ===== Error Handlers =====

def _error_body(request: Request, message: str, exc: Exception) -> Dict[str, Any]:
    """Uniform error envelope; internals only in development/debug"""
    body: Dict[str, Any] = {"status": "error", "message": message}
    if settings.is_development or settings.DEBUG:
        body["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    if settings.DEBUG:
        body["path"] = request.url.path
        body["method"] = request.method
    return body


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    """Operation failures raised by the routes"""
    if exc.status_code == 401:
        record_auth_failure(exc.kind.value)
    logger.info(
        f"[{request.method} {request.url.path}] Error {exc.status_code}: {exc.message}",
        extra={"path": request.url.path, "method": request.method, "status": exc.status_code},
    )
    return JSONResponse(status_code=exc.status_code, content=_error_body(request, exc.message, exc))


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies answer 400, not FastAPI's default 422"""
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
    else:
        message = "Invalid request"
    return JSONResponse(status_code=400, content=_error_body(request, message, exc))


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Framework HTTP errors (unknown route, wrong method) in the same envelope"""
    return JSONResponse(
        status_code=exc.status_code,
        content={"status": "error", "message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RateLimitExceeded)
def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    """Handle rate limit exceeded errors (sync: SlowAPIMiddleware calls it directly)"""
    logger.warning(
        "Rate limit exceeded",
        extra={
            "path": request.url.path,
            "method": request.method,
            "reason": str(exc.detail),
        }
    )
    return JSONResponse(
        status_code=429,
        content={"status": "error", "message": "Too many requests. Please try again later."},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler for uncaught errors"""
    logger.error(
        f"Unhandled exception: {str(exc)}",
        extra={
            "path": request.url.path,
            "method": request.method
        },
        exc_info=True
    )
    return JSONResponse(status_code=500, content=_error_body(request, "Internal server error", exc))
