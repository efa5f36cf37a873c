import logging
from contextlib import asynccontextmanager
from typing import Annotated, Any

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.application.interfaces.repositories import ICatalogStore
from src.infrastructure.config.settings import get_settings
from src.infrastructure.persistence.database import create_schema, engine
from src.presentation.api.dependencies import get_catalog_store
from src.presentation.api.error_handlers import register_exception_handlers
from src.presentation.api.v1.routes import events, venues
from src.presentation.middleware import (CorrelationIDMiddleware,
                                         TimeoutMiddleware)
from src.shared.telemetry.logging import setup_logging
from src.shared.telemetry.telemetry import (TelemetryConfig, get_telemetry,
                                            set_telemetry)

logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan events for application initialization and cleanup"""
    # Initialize logging
    setup_logging()

    # Initialize OpenTelemetry distributed tracing
    if settings.telemetry_enabled:
        try:
            telemetry = TelemetryConfig(
                service_name=settings.app_name,
                service_version=settings.app_version,
                environment=settings.telemetry_environment,
                enabled=True,
            )

            # Setup telemetry with configured exporter
            telemetry.setup_telemetry(
                exporter_type=settings.telemetry_exporter,
                otlp_endpoint=settings.telemetry_otlp_endpoint,
                sample_rate=settings.telemetry_sample_rate,
            )

            telemetry.instrument_fastapi(app)
            if settings.store_backend == "sql":
                telemetry.instrument_sqlalchemy(engine)

            # Instrument logging for trace correlation
            telemetry.instrument_logging()

            set_telemetry(telemetry)
            logger.info(f"Distributed tracing initialized: exporter={settings.telemetry_exporter}")
        except Exception as e:
            logger.warning(f"Telemetry initialization failed: {e}. Continuing without tracing.")
    else:
        logger.info("Distributed tracing disabled in configuration")

    # Schema is created on startup unless migrations own it
    if settings.store_backend == "sql" and settings.database_create_schema:
        await create_schema()

    logger.info(f"{settings.app_name} started with '{settings.store_backend}' store")

    yield

    # Shutdown telemetry (flush remaining spans)
    if settings.telemetry_enabled:
        try:
            telemetry_instance = get_telemetry()
            if telemetry_instance:
                telemetry_instance.shutdown()
        except Exception as e:
            logger.warning(f"Error during telemetry shutdown: {e}")

    await engine.dispose()
    logger.info("Database engine disposed")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    debug=settings.debug,
    lifespan=lifespan,
)

register_exception_handlers(app)

# Middleware (order matters - applied in reverse)
# 1. Request timeout
app.add_middleware(TimeoutMiddleware, timeout=settings.request_timeout)

# 2. Correlation ID for request tracing
app.add_middleware(CorrelationIDMiddleware)

# 3. CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(events.router, prefix="/api/events", tags=["events"])
app.include_router(venues.router, prefix="/api/venues", tags=["venues"])


@app.get("/")
async def root():
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "status": "running",
    }


@app.get("/health")
async def health_check(store: Annotated[ICatalogStore, Depends(get_catalog_store)]):
    """
    Health check endpoint for load balancers and monitoring.

    Validates:
    - API is responsive
    - Store connectivity

    Returns:
    - 200 OK if healthy
    - 503 Service Unavailable if unhealthy
    """
    checks: dict[str, Any] = {
        "api": True,  # If we got here, API is responding
        "store": False,
        "backend": settings.store_backend,
    }

    try:
        checks["store"] = await store.ping()
    except Exception as e:
        logger.warning(f"Health check failed: {e}")
        checks["error"] = "store unreachable"

    if checks["api"] and checks["store"]:
        return {"status": "healthy", "checks": checks}
    return JSONResponse(status_code=503, content={"status": "unhealthy", "checks": checks})
