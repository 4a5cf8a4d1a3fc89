"""Database engine, session factory and declarative base."""

import logging

import sqlalchemy
from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import declarative_base, sessionmaker
from tenacity import retry, retry_if_exception_type, stop_after_delay, wait_fixed

from arc_hives.config import settings

logger = logging.getLogger(__name__)


def _engine_options(url: str) -> dict:
    """Bound every store call by STORE_TIMEOUT_SECONDS."""
    timeout = settings.STORE_TIMEOUT_SECONDS
    if url.startswith("sqlite"):
        return {
            "connect_args": {"check_same_thread": False, "timeout": timeout},
        }

    connect_args = {"connect_timeout": max(1, int(timeout))}
    if url.startswith("postgresql"):
        connect_args["options"] = f"-c statement_timeout={int(timeout * 1000)}"

    return {
        "pool_pre_ping": True,
        "pool_timeout": timeout,
        "connect_args": connect_args,
    }


engine = create_engine(settings.DATABASE_URL, **_engine_options(settings.DATABASE_URL))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """Yield a database session scoped to one request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@retry(
    retry=retry_if_exception_type(OperationalError),
    stop=stop_after_delay(settings.DB_CONNECT_MAX_WAIT_SECONDS),
    wait=wait_fixed(2),
    reraise=True,
)
def wait_for_database(bind=None) -> None:
    """Block until the database answers a trivial query."""
    bind = bind or engine
    with bind.connect() as conn:
        conn.execute(sqlalchemy.text("SELECT 1"))
    logger.info("Database is ready")
