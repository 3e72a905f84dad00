"""
FastAPI application entry point.

This module sets up the FastAPI application with all middleware,
routers, and configuration for production use.
"""
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from routers import health
from core.config import settings, validate_production_config
from core.database import check_db_connection
from core.logging import setup_logging
from core.exceptions import APIException
from core.security_headers import SecurityHeadersMiddleware
from services.health_analysis import utc_timestamp
import logging
import time

# Setup logging first
setup_logging()
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Health BMI Analysis API",
    description="Body Mass Index calculation, classification and health recommendations",
    version=settings.APP_VERSION,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
)


@app.on_event("startup")
async def verify_startup_requirements():
    """Fail fast on unsafe production config or an unreachable database."""
    validate_production_config(
        environment=settings.ENVIRONMENT,
        debug=settings.DEBUG,
        cors_origins=settings.CORS_ORIGINS,
        postgres_password=settings.POSTGRES_PASSWORD,
    )
    if not check_db_connection():
        logger.error("Failed to connect to database. Check the database configuration.")
        raise RuntimeError("Database unavailable at startup")
    logger.info(
        f"Health BMI Analysis API started ({settings.ENVIRONMENT})",
        extra={"extra_fields": {"environment": settings.ENVIRONMENT, "version": settings.APP_VERSION}},
    )


# CORS middleware
# Production: set CORS_ORIGINS env var (comma-separated)
# Development: DEBUG=True allows all origins
if settings.DEBUG:
    allowed_origins = ["*"]
elif settings.CORS_ORIGINS:
    allowed_origins = [origin.strip() for origin in settings.CORS_ORIGINS.split(",") if origin.strip()]
else:
    # Fallback for local development (includes static file servers)
    allowed_origins = [
        "http://localhost:3001",
        "http://localhost:5500",
        "http://127.0.0.1:5500",
    ]
app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "Accept"],
)

# Security headers middleware
app.add_middleware(SecurityHeadersMiddleware)


# Request logging middleware
@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all requests with timing information."""
    start_time = time.time()

    logger.info(
        f"Request: {request.method} {request.url.path}",
        extra={
            "extra_fields": {
                "method": request.method,
                "path": request.url.path,
                "client_ip": request.client.host if request.client else None,
            }
        }
    )

    try:
        response = await call_next(request)
        process_time = time.time() - start_time

        logger.info(
            f"Response: {request.method} {request.url.path} - {response.status_code}",
            extra={
                "extra_fields": {
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": response.status_code,
                    "process_time_ms": round(process_time * 1000, 2),
                }
            }
        )

        response.headers["X-Process-Time"] = str(process_time)
        return response
    except Exception as e:
        logger.error(
            f"Request failed: {request.method} {request.url.path}",
            exc_info=True,
            extra={
                "extra_fields": {
                    "method": request.method,
                    "path": request.url.path,
                    "error": str(e),
                }
            }
        )
        raise


@app.exception_handler(APIException)
async def api_exception_handler(request: Request, exc: APIException):
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_content(),
        headers=exc.headers,
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Unparseable bodies get the same 400 envelope as rule violations."""
    errors = [error.get("msg", "Invalid request") for error in exc.errors()]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "message": "Invalid data", "errors": errors},
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "success": False,
                "message": "Endpoint not found",
                "path": request.url.path,
                "method": request.method,
                "timestamp": utc_timestamp(),
            },
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


# Error handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler for unhandled errors."""
    logger.error(
        f"Unhandled exception: {exc}",
        exc_info=True,
        extra={
            "extra_fields": {
                "method": request.method,
                "path": request.url.path,
            }
        }
    )
    content = {"success": False, "message": "Internal server error"}
    if settings.ENVIRONMENT != "production":
        content["error"] = str(exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=content,
    )


@app.get("/health")
async def health_check():
    """
    Liveness probe for load balancers and uptime monitors.
    No dependencies checked - just confirms the API is responding.
    """
    return {
        "success": True,
        "message": "Health BMI Analysis API is running",
        "timestamp": utc_timestamp(),
        "version": settings.APP_VERSION,
    }


@app.get("/health/detailed")
def health_detailed():
    """
    Readiness check including the database.

    Returns:
        - 200: database reachable
        - 503: database unavailable
    """
    start = time.time()
    db_healthy = check_db_connection()
    latency_ms = round((time.time() - start) * 1000, 2)

    content = {
        "success": db_healthy,
        "status": "healthy" if db_healthy else "unhealthy",
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "timestamp": utc_timestamp(),
        "checks": {
            "database": {
                "status": "healthy" if db_healthy else "unavailable",
                "latency_ms": latency_ms,
            },
        },
    }
    if not db_healthy:
        return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=content)
    return content


@app.get("/")
async def root():
    """Describe the API surface."""
    return {
        "success": True,
        "message": "Welcome to the Health BMI Analysis API",
        "description": "Simple health BMI calculator backend",
        "version": settings.APP_VERSION,
        "endpoints": {
            "health_check": "GET /health",
            "analyze_health": "POST /api/v1/health/analyze",
        },
        "usage": {
            "description": "Send health data to analyze BMI",
            "endpoint": "/api/v1/health/analyze",
            "method": "POST",
            "body": {
                "name": "string (required)",
                "age": "number (required, 1-120)",
                "gender": "string (required, male/female)",
                "height": "number (required, 50-250 cm)",
                "weight": "number (required, 10-300 kg)",
            },
        },
    }


# Include routers
app.include_router(health.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.API_RELOAD,
    )
