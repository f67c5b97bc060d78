"""FastAPI application entry point"""
import uuid
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from prometheus_fastapi_instrumentator import Instrumentator

from sge.api import attendance, auth, departments, employees, health, leave_requests
from sge.config import settings
from sge.database import Base, SessionLocal, engine, utcnow
from sge.exceptions import SGEError, ValidationError
from sge.middleware.rate_limit import limiter
from sge.seed import seed
from sge.utils.logger import logger, setup_logging

# Setup logging
setup_logging(settings.LOG_LEVEL)

API_PREFIX = "/api"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler"""
    # Startup
    logger.info("SGE backend starting up", extra={"action": "startup"})
    if settings.DB_AUTO_CREATE:
        Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        seed(db)
    finally:
        db.close()

    yield
    # Shutdown
    logger.info("SGE backend shutting down", extra={"action": "shutdown"})


# Create FastAPI app
app = FastAPI(
    title="SGE",
    description="HR management API - employees, departments, attendance and leave",
    version=health.SERVICE_VERSION,
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
    from sge.middleware.monitoring import MonitoringMiddleware
    app.add_middleware(MonitoringMiddleware)

    # Prometheus metrics
    instrumentator = Instrumentator(
        should_group_status_codes=True,
        should_ignore_untemplated=True,
        should_respect_env_var=True,
        should_instrument_requests_inprogress=True,
        excluded_handlers=["/metrics", "/health", "/health/ready", "/health/live"],
        inprogress_name="sge_requests_inprogress",
        inprogress_labels=True
    )
    instrumentator.instrument(app)
    instrumentator.expose(app, endpoint=settings.METRICS_PATH, include_in_schema=False)

# Rate limiting: RATE_LIMIT_DEFAULT applies to every route without its own limit.
# The limiter is a no-op when RATE_LIMIT_ENABLED is false.
app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    """Handle rate limit exceeded errors"""
    logger.warning(
        "Rate limit exceeded",
        extra={"request_id": _trace_id(request), "action": "rate_limited"}
    )
    return JSONResponse(
        status_code=429,
        content={
            "error": "RATE_LIMIT_EXCEEDED",
            "message": "Too many requests. Please try again later.",
            "status_code": 429,
            "timestamp": utcnow().isoformat(),
            "trace_id": _trace_id(request),
        }
    )

# ===== Route Setup =====

app.include_router(health.router)
app.include_router(auth.router, prefix=API_PREFIX)
app.include_router(departments.router, prefix=API_PREFIX)
app.include_router(employees.router, prefix=API_PREFIX)
app.include_router(attendance.router, prefix=API_PREFIX)
app.include_router(leave_requests.router, prefix=API_PREFIX)


@app.get("/")
def root():
    """Root endpoint"""
    return {
        "service": health.SERVICE_NAME,
        "version": health.SERVICE_VERSION,
        "status": "operational",
        "docs": "/docs",
        "health": "/health",
        "metrics": settings.METRICS_PATH if settings.METRICS_ENABLED else None
    }


# ===== Error Handlers =====

def _trace_id(request: Request) -> str:
    request_id = getattr(request.state, "request_id", None)
    if request_id is None:
        request_id = f"req_{uuid.uuid4().hex[:16]}"
        request.state.request_id = request_id
    return request_id


@app.exception_handler(SGEError)
async def sge_error_handler(request: Request, exc: SGEError):
    """Render domain errors as the JSON error envelope"""
    trace_id = _trace_id(request)
    logger.warning(
        f"{exc.error_code}: {exc.message}",
        extra={"request_id": trace_id, "error_code": exc.error_code}
    )

    content = {
        "error": exc.error_code,
        "message": exc.message,
        "status_code": exc.status_code,
        "timestamp": utcnow().isoformat(),
        "trace_id": trace_id,
    }
    if isinstance(exc, ValidationError):
        content["validation_errors"] = exc.errors

    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(status_code=exc.status_code, content=content, headers=headers)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler for uncaught errors"""
    trace_id = _trace_id(request)
    logger.error(
        f"Unhandled exception: {str(exc)}",
        extra={"request_id": trace_id},
        exc_info=True
    )
    return JSONResponse(
        status_code=500,
        content={
            "error": "INTERNAL_SERVER_ERROR",
            "message": "An unexpected error occurred. Please contact support.",
            "status_code": 500,
            "timestamp": utcnow().isoformat(),
            "trace_id": trace_id,
        }
    )
