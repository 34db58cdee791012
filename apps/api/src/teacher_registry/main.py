"""
Teacher Registry API - Main Application Entry Point

This module initializes and configures the FastAPI application including:
- Database and Redis connections
- CORS, compression and request body size middleware
- JSON error responses with a top-level ``message``
- API routing and the uploaded files mount
- Health check endpoints
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from teacher_registry.api import api_router
from teacher_registry.core.config import settings
from teacher_registry.core.database import close_db, init_db
from teacher_registry.core.redis import close_redis, init_redis

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Handles startup and shutdown events including:
    - Upload directory creation
    - Redis connection (rate limit store)
    - Database connection and table creation
    """
    # Startup
    print(f"Starting Teacher Registry API in {settings.python_env} mode...")

    settings.upload_dir.mkdir(parents=True, exist_ok=True)

    # Initialize Redis
    try:
        await init_redis()
        print("[OK] Redis connected")
    except Exception as e:
        print(f"[FAIL] Redis connection failed, rate limits kept in memory: {e}")
        if settings.is_production:
            raise

    # Initialize Database
    try:
        await init_db(app, settings.database_url)
        print("[OK] Database connected")
    except Exception as e:
        print(f"[FAIL] Database connection failed: {e}")
        if settings.is_production:
            raise

    yield  # Application runs here

    # Shutdown
    print("Shutting down Teacher Registry API...")

    await close_redis()
    await close_db(app)
    print("[OK] Cleanup complete")


app = FastAPI(
    title="Teacher Registry API",
    description="Teacher registration forms with cascading location lookups and admin export",
    version="0.1.0",
    docs_url="/docs" if settings.is_development else None,
    redoc_url="/redoc" if settings.is_development else None,
    lifespan=lifespan,
)


# ============================================
# Error responses
# ============================================
# Every error body is a JSON object with a human-readable "message".


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if isinstance(exc.detail, dict):
        content = exc.detail
    else:
        content = {"message": str(exc.detail)}
    return JSONResponse(
        status_code=exc.status_code,
        content=content,
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    fields = [".".join(str(part) for part in error["loc"][1:]) for error in exc.errors()]
    logger.info(f"Request validation failed on {request.url.path}: {fields}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "VALIDATION_ERROR",
            "message": f"Invalid request: {', '.join(field for field in fields if field)}",
        },
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "INTERNAL_ERROR",
            "message": "Internal Server Error",
        },
    )


# ============================================
# Middleware
# ============================================


@app.middleware("http")
async def limit_request_body(request: Request, call_next):
    """
    Reject requests whose declared body exceeds the configured maximum.

    Multipart bodies get the upload limit plus an allowance for the form
    fields, so a photo of exactly the upload limit still reaches the upload
    handler, which makes the final size decision.
    """
    content_length = request.headers.get("content-length")
    if content_length is not None:
        try:
            declared = int(content_length)
        except ValueError:
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content={"error": "BAD_REQUEST", "message": "Invalid Content-Length header."},
            )

        content_type = request.headers.get("content-type", "").lower()
        if content_type.startswith("multipart/form-data"):
            max_bytes = settings.max_multipart_body_bytes
            max_mb = settings.max_upload_size_bytes // (1024 * 1024)
        else:
            max_bytes = settings.max_body_size_bytes
            max_mb = settings.max_body_size_bytes // (1024 * 1024)

        if declared > max_bytes:
            logger.warning(f"Rejected {declared}-byte request to {request.url.path}")
            return JSONResponse(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                content={
                    "error": "PAYLOAD_TOO_LARGE",
                    "message": f"File too large. Max size is {max_mb}MB.",
                },
            )
    return await call_next(request)


app.add_middleware(GZipMiddleware, minimum_size=1000)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================
# Routes
# ============================================

app.include_router(api_router, prefix="/api")

# Uploaded ID photos; the directory is created by the lifespan handler
app.mount(
    settings.uploads_url_prefix,
    StaticFiles(directory=settings.upload_dir, check_dir=False),
    name="uploads",
)


@app.get("/health", tags=["Health"])
async def health_check() -> dict[str, str]:
    """Health check endpoint for container orchestration."""
    return {"status": "healthy"}


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    import uvicorn

    uvicorn.run("teacher_registry.main:app", host="0.0.0.0", port=settings.port)
