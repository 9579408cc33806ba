import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError
from sqlmodel import Session
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from .config import settings

logger = logging.getLogger(__name__)


def _engine_options(database_url: str) -> dict:
    if database_url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True, "pool_recycle": 300}


def _describe(database_url: str) -> str:
    # Never log credentials
    return database_url.split("@")[-1] if "@" in database_url else database_url.split(":")[0]


@retry(
    stop=stop_after_attempt(5),
    wait=wait_exponential(multiplier=1, min=2, max=10),
    retry=retry_if_exception_type(OperationalError),
    reraise=True,
)
def create_database_engine(database_url: Optional[str] = None) -> Engine:
    """
    Create the engine and check the database answers.

    A database server that is still starting refuses connections, so
    connection errors are retried with backoff before giving up.
    """
    database_url = database_url or settings.DATABASE_URL
    logger.info(f"Connecting to database: {_describe(database_url)}")

    engine = create_engine(
        database_url, echo=settings.DEBUG, **_engine_options(database_url)
    )
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))

    return engine


try:
    engine = create_database_engine()
except Exception as e:
    logger.error(f"Database unavailable, group listing disabled: {e}")
    engine = None


def get_db():
    """Get database session."""
    if not engine:
        raise HTTPException(
            status_code=503,
            detail="Database is temporarily unavailable. Please try again later."
        )

    with Session(engine) as session:
        yield session


def database_status() -> str:
    if not engine:
        return "not_available"
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except OperationalError as e:
        return f"error: {e.orig}"
    return "connected"
