# src/main.py
import os
from contextlib import asynccontextmanager
from typing import AsyncIterator
import logging
import uvicorn as uv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from core.config import settings
from db.database import create_tables, check_db_connection, disconnect_db
from utils.exception_handler import setup_exception_handlers
from utils.logger import setup_logger, add_file_handler
from routes import (
    auth_router,
    patients_router,
    ip_screening_router,
    op_screening_router,
    follow_ups_router,
)

# Quiet noisy loggers
for log in ["watchfiles", "uvicorn.error", "uvicorn.access", "uvicorn.asgi"]:
    logging.getLogger(log).setLevel(logging.WARNING)

# Complete logs go to app.log outside of tests
if settings.ENVIRONMENT != "testing":
    add_file_handler("app.log")

logger = setup_logger("SERVER")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create tables and verify the database before serving"""
    logger.info("Starting Nutrition Department Service...")

    try:
        logger.info("Initializing database...")
        await create_tables()

        if await check_db_connection():
            logger.info("Database connection verified")
        else:
            logger.warning("Database connection check failed")

        logger.info("Application startup complete")
        yield

    except Exception as e:
        logger.error(f"Startup failed: {str(e)}")
        raise
    finally:
        logger.info("Closing database connection")
        await disconnect_db()
        logger.info("Shutting down application...")


app = FastAPI(
    title="Nutrition Department Service",
    description="Patient registry, nutritional screenings and follow-ups for a hospital nutrition department",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs" if settings.ENVIRONMENT != "production" else None,
    redoc_url="/redoc" if settings.ENVIRONMENT != "production" else None,
)

# Exception handling
setup_exception_handlers(app)

# CORS Configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


app.include_router(auth_router, prefix=settings.API_PREFIX)
app.include_router(patients_router, prefix=settings.API_PREFIX)
app.include_router(ip_screening_router, prefix=settings.API_PREFIX)
app.include_router(op_screening_router, prefix=settings.API_PREFIX)
app.include_router(follow_ups_router, prefix=settings.API_PREFIX)


@app.get("/")
async def root():
    """Health check endpoint"""
    return {
        "message": "Nutrition Department Service API",
        "status": "healthy",
        "version": app.version,
    }


@app.get(f"{settings.API_PREFIX}/health")
async def health_check():
    """Detailed health check endpoint"""
    db_healthy = await check_db_connection()
    return {
        "status": "healthy" if db_healthy else "degraded",
        "database": "connected" if db_healthy else "disconnected",
        "environment": settings.ENVIRONMENT,
    }


if __name__ == "__main__":
    watch_dirs = [
        os.path.join("core"),
        os.path.join("routes"),
        os.path.join("models"),
        os.path.join("schemas"),
        os.path.join("services"),
        os.path.join("utils"),
        os.path.join("db"),
    ]

    uv.run(
        "main:app",
        host=settings.UVICORN_HOST,
        port=settings.UVICORN_PORT,
        reload=settings.RELOAD,
        reload_dirs=watch_dirs if settings.RELOAD else None,
        reload_excludes=["*.pyc", "*.tmp", "*.swp"] if settings.RELOAD else None,
        workers=1 if settings.RELOAD else settings.WORKERS_COUNT,
        log_level="info",
        access_log=True,
        timeout_graceful_shutdown=10,
    )
