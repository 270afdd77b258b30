"""
FastAPI Application Entry Point.

This module creates and configures the FastAPI application instance.
It handles:
1. Application initialization
2. Router registration
3. Middleware configuration (audit logging, security headers, CORS)
4. Exception handlers (every error uses the {"error": {...}} envelope)

Run with: uvicorn weather_api.api.main:app --reload
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from weather_api.core.audit import AuditMiddleware, SecurityHeadersMiddleware
from weather_api.core.config import get_settings
from weather_api.core.exceptions import AIResolutionError, WeatherAppException, error_envelope
from weather_api.core.logging_config import setup_logging, get_logger
from weather_api.api.routes import ai_router, auth_router, health_router


# Initialize logging before anything else
settings = get_settings()
setup_logging(settings.log_level)
logger = get_logger(__name__)

if settings.uses_default_jwt_secret():
    logger.warning(
        "Warning: JWT_SECRET is not set. Using default secret (not recommended for production)."
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log configuration at startup and shutdown."""
    logger.info(f"Starting {settings.app_name} in {settings.app_env} mode")
    logger.info(f"Groq configured: {bool(settings.groq_api_key)} (model: {settings.groq_model})")
    logger.info(f"Gemini configured: {bool(settings.gemini_api_key)}")
    logger.info(f"Provider timeout: {settings.provider_timeout_seconds}s")
    if settings.dev_mode:
        logger.warning("DEV_MODE enabled: authentication is bypassed")

    yield

    logger.info(f"Shutting down {settings.app_name}")


app = FastAPI(
    title="Weather App Backend",
    description="""
    Backend for the kids' weather app.

    ## Features

    - **Accounts**: register, log in, bearer tokens
    - **AI weather advice**: Groq first, then every available Gemini model
    - **Tolerant parsing**: JSON wrapped in markdown fences is recovered
    """,
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)


# ============================================================
# Middleware Configuration (Order matters!)
# ============================================================

app.add_middleware(SecurityHeadersMiddleware)

if settings.enable_audit_logging:
    app.add_middleware(AuditMiddleware)
    logger.info("Audit logging middleware enabled")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================
# Exception Handlers
# ============================================================

@app.exception_handler(AIResolutionError)
async def ai_resolution_handler(request: Request, exc: AIResolutionError):
    """Log provider diagnostics, return only the public message."""
    logger.error(f"AI analysis error: {type(exc).__name__}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(WeatherAppException)
async def app_exception_handler(request: Request, exc: WeatherAppException):
    """Handle all custom application exceptions."""
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies get the same envelope as every other error."""
    logger.warning(f"Invalid request to {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=400, content=error_envelope("Invalid request body", 400))


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    message = "Route not found" if exc.status_code == 404 else str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content=error_envelope(message, exc.status_code),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Anything unexpected becomes a generic 500 without internal detail."""
    logger.exception(f"Unhandled exception: {exc}")
    return JSONResponse(status_code=500, content=error_envelope("Internal Server Error", 500))


# ============================================================
# Routers
# ============================================================

app.include_router(health_router)
app.include_router(auth_router)
app.include_router(ai_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "weather_api.api.main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=settings.is_development()
    )
