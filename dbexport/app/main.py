"""
FastAPI Application Entry Point
================================

Main application initialization and wiring.
Run with: uvicorn dbexport.app.main:app --reload
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from dbexport.api.routes import router
from dbexport.app.config import VERSION, APP_NAME
from dbexport.app.exceptions import global_exception_handler
from dbexport.app.logging_config import setup_logging


# =============================================================================
# LOGGING
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    yield


# =============================================================================
# APP INITIALIZATION
# =============================================================================

app = FastAPI(
    lifespan=lifespan,
    title=APP_NAME,
    description="Export SQLite and document-store databases to CSV, JSON or SQL",
    version=VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
)


# =============================================================================
# EXCEPTION HANDLERS
# =============================================================================

app.add_exception_handler(Exception, global_exception_handler)


# =============================================================================
# ROUTES
# =============================================================================

app.include_router(router, tags=["Export"])


# =============================================================================
# ROOT
# =============================================================================

@app.get("/")
def root():
    """Root endpoint with API information."""
    return {
        "name": APP_NAME,
        "version": VERSION,
        "docs": "/docs",
        "health": "/health",
        "endpoints": {
            "tables": "POST /tables",
            "export": "POST /export"
        }
    }
