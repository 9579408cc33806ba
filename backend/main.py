import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import SQLModel

from backend.app.core.config import settings
from backend.app.api import api_router

# Import all models to register them with SQLModel metadata
from backend.app.models import GroupCreation  # noqa: F401

# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# --- App Initialization ---
app = FastAPI(
    title="Savings Circle API",
    description="Create public and private rotating savings groups on the ledger",
    version="1.0.0",
)

# CORS middleware for frontend development
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_router)


@app.on_event("startup")
async def startup_event():
    from backend.app.core.database import engine

    if settings.AUTO_CREATE_TABLES and engine:
        SQLModel.metadata.create_all(engine)
        logger.info("Database tables ready")


@app.get("/")
async def root():
    """Root endpoint."""
    return {"message": "Savings Circle API", "version": "1.0.0"}


@app.get("/health")
async def health_check():
    """Service health: database reachability and the configured ledger."""
    from backend.app.core.database import database_status

    database = database_status()
    return {
        "status": "healthy" if database == "connected" else "degraded",
        "database": database,
        "ledger": settings.LEDGER_API_URL,
    }
