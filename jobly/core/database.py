import re
from typing import Any, Sequence

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Result
from sqlalchemy.ext.declarative import declarative_base
from sqlalchemy.orm import Session, sessionmaker
from jobly.core.config import settings

# Create SQLAlchemy engine
engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,  # Verify connections before using them
    pool_size=10,  # Connection pool size
    max_overflow=20  # Allow up to 20 connections beyond pool_size
)

# Create SessionLocal class
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create Base class for models
Base = declarative_base()

# $1, $2, ... positional placeholders
_PLACEHOLDER = re.compile(r"\$(\d+)")


def get_db():
    """
    Dependency function to get database session.
    Used in FastAPI endpoints with Depends(get_db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def run_query(db: Session, sql: str, values: Sequence[Any] = ()) -> Result:
    """
    Execute a SQL template with positional placeholders.

    The template uses $1, $2, ... placeholders (the format produced by the
    helpers in jobly.core.sql). Each placeholder is rewritten to a named bind
    parameter, so values are always bound by the driver and never
    interpolated into the statement.

    Args:
        db: Database session
        sql: Statement template with $n placeholders
        values: Positional values; values[0] binds $1

    Returns:
        SQLAlchemy Result for the executed statement
    """
    statement = _PLACEHOLDER.sub(r":p\1", sql)
    params = {f"p{position}": value for position, value in enumerate(values, start=1)}

    if db.get_bind().dialect.name == "sqlite":
        # SQLite has no ILIKE; its LIKE is case-insensitive for ASCII
        statement = statement.replace(" ILIKE ", " LIKE ")

    return db.execute(text(statement), params)


def init_db():
    """
    Initialize database.

    We rely on Alembic for table creation, so this only makes sure the
    models are imported and registered on Base.metadata.

    Use "alembic upgrade head" to create/update database schema.
    """
    from jobly import models  # noqa: F401  Import models to register them
