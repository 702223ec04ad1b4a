# src/main.py
import asyncio
import os
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator
import logging
import uvicorn as uv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from core.config import settings
from db.database import check_db_connection, create_tables, disconnect_db
from services.storage_service import storage_gateway
from utils.exception_handler import setup_exception_handlers
from utils.logger import setup_logger
from utils.rate_limiter import limiter
from utils.responses import api_response
from routes import (
    patients_router,
    family_members_router,
    medical_history_router,
    consultations_router,
    medical_reports_router,
    dental_images_router,
    reports_router,
    queries_router,
)

# Quiet noisy third-party loggers
for log in ["watchfiles", "uvicorn.access", "httpx", "httpcore"]:
    logging.getLogger(log).setLevel(logging.WARNING)

logger = setup_logger("SERVER")

PACKAGE_DIRS = ("core", "db", "models", "schemas", "services", "routes", "utils")


async def measure_event_loop_lag() -> float:
    """Milliseconds a zero-length sleep waits beyond its deadline"""
    started = time.perf_counter()
    await asyncio.sleep(0)
    return round((time.perf_counter() - started) * 1000, 3)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    logger.info("Starting Dental Tele-Health API...")

    try:
        await create_tables()
        if await check_db_connection():
            logger.info("Database connection verified")
        else:
            logger.warning("Database connection check failed at startup")

        logger.info("Application startup complete")
        yield

    except Exception as e:
        logger.error(f"Startup failed: {str(e)}")
        raise
    finally:
        logger.info("Closing storage client")
        await storage_gateway.aclose()
        logger.info("Closing database connection")
        await disconnect_db()
        logger.info("Shutting down application...")


app = FastAPI(
    title="Dental Tele-Health API",
    description="Patient records, dental imaging and consultation backend",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs" if settings.ENVIRONMENT != "production" else None,
    redoc_url="/redoc" if settings.ENVIRONMENT != "production" else None,
)

# Rate limiting configuration
app.state.limiter = limiter

# Exception handling
setup_exception_handlers(app)

# CORS Configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


app.include_router(patients_router, prefix=settings.API_PREFIX)
app.include_router(family_members_router, prefix=settings.API_PREFIX)
app.include_router(medical_history_router, prefix=settings.API_PREFIX)
app.include_router(consultations_router, prefix=settings.API_PREFIX)
app.include_router(medical_reports_router, prefix=settings.API_PREFIX)
app.include_router(dental_images_router, prefix=settings.API_PREFIX)
app.include_router(reports_router, prefix=settings.API_PREFIX)
app.include_router(queries_router, prefix=settings.API_PREFIX)


@app.get("/health", tags=["health"])
async def health_check():
    """Database connectivity and event-loop responsiveness"""
    db_healthy = await check_db_connection()
    data = {
        "status": "healthy" if db_healthy else "degraded",
        "database": "connected" if db_healthy else "disconnected",
        "eventLoopLagMs": await measure_event_loop_lag(),
        "environment": settings.ENVIRONMENT,
        "version": app.version,
    }
    return api_response(data, "Service is healthy" if db_healthy else "Service is degraded")


if __name__ == "__main__":
    uv.run(
        "main:app",
        host=settings.UVICORN_HOST,
        port=settings.UVICORN_PORT,
        reload=settings.RELOAD,
        reload_dirs=[d for d in PACKAGE_DIRS if os.path.isdir(d)],
        workers=1 if settings.RELOAD else settings.WORKERS_COUNT,
        log_level=settings.LOG_LEVEL.lower(),
        timeout_graceful_shutdown=10,
    )
