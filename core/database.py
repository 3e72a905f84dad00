"""
Database connection management with connection pooling.

The pool is the only resource shared between concurrent requests.
Acquisition, queuing when exhausted and release all happen here and in
the ``get_db`` dependency; request handlers only ever see a Session.
"""
from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import declarative_base
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import QueuePool
from core.config import settings
from typing import Iterator
import logging

logger = logging.getLogger(__name__)


def build_database_url() -> str:
    """Explicit DATABASE_URL wins, otherwise assemble the PostgreSQL URL."""
    if settings.DATABASE_URL:
        return settings.DATABASE_URL
    return (
        f"postgresql://{settings.POSTGRES_USER}:"
        f"{settings.POSTGRES_PASSWORD}@"
        f"{settings.POSTGRES_HOST}:"
        f"{settings.POSTGRES_PORT}/"
        f"{settings.POSTGRES_DB}"
    )


DATABASE_URL = build_database_url()

# sslmode is a libpq option; other drivers reject it
_connect_args = {}
if DATABASE_URL.startswith("postgresql"):
    _connect_args["sslmode"] = settings.DB_SSL_MODE
elif DATABASE_URL.startswith("sqlite"):
    _connect_args["check_same_thread"] = False

# Create engine with connection pooling
engine = create_engine(
    DATABASE_URL,
    poolclass=QueuePool,
    pool_size=settings.DB_POOL_SIZE,  # Number of connections to maintain
    max_overflow=settings.DB_MAX_OVERFLOW,  # Additional connections beyond pool_size
    pool_timeout=settings.DB_POOL_TIMEOUT,  # Seconds to wait for connection
    pool_recycle=settings.DB_POOL_RECYCLE,  # Recycle connections after this many seconds
    pool_pre_ping=True,  # Verify connections before using
    connect_args=_connect_args,
    echo=settings.DEBUG,  # Log SQL queries in debug mode
)

# Session factory
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
    expire_on_commit=False,  # Prevent lazy loading issues
)

Base = declarative_base()


# Connection pool event listeners for monitoring
@event.listens_for(engine, "connect")
def on_connect(dbapi_conn, connection_record):
    logger.debug("New database connection established")


@event.listens_for(engine, "checkout")
def receive_checkout(dbapi_conn, connection_record, connection_proxy):
    """Log when connection is checked out from pool."""
    logger.debug("Connection checked out from pool")


@event.listens_for(engine, "checkin")
def receive_checkin(dbapi_conn, connection_record):
    """Log when connection is returned to pool."""
    logger.debug("Connection returned to pool")


def get_db() -> Iterator[Session]:
    """
    Dependency for FastAPI to get database session.

    This function ensures:
    - Connection is acquired from the pool (waiting if it is exhausted)
    - Connection is returned to pool after request
    - Transactions are committed on success and rolled back on error
    """
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception as e:
        db.rollback()
        # Only log actual database errors, not HTTP exceptions
        from fastapi import HTTPException
        if not isinstance(e, HTTPException):
            logger.error(f"Database transaction error: {e}")
        raise
    finally:
        db.close()


def check_db_connection() -> bool:
    """
    Check if database connection is healthy.

    Returns:
        True if connection is healthy, False otherwise
    """
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error(f"Database connection check failed: {e}")
        return False
