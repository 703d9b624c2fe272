import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence

from fastapi import Depends
from sqlalchemy import create_engine, text
from sqlalchemy.ext.declarative import declarative_base
from sqlalchemy.orm import Session, sessionmaker
from app.core.config import settings

logger = logging.getLogger(__name__)

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

# Positional placeholders ($1, $2, ...) as written by the query builders
_PLACEHOLDER = re.compile(r"\$(\d+)")
_ILIKE = re.compile(r"\bILIKE\b")


@dataclass
class QueryResult:
    """Rows returned by a single statement, as plain dicts."""
    rows: List[Dict[str, Any]] = field(default_factory=list)


class Database:
    """
    Storage adapter over a SQLAlchemy session.

    Services hand it SQL written with positional `$n` placeholders and an
    ordered value list. Each call runs exactly one statement and commits it,
    so every create/update/delete is atomic on its own.
    """

    def __init__(self, session: Session):
        self.session = session

    def query(self, sql: str, values: Sequence[Any] = ()) -> QueryResult:
        params = {f"p{idx}": value for idx, value in enumerate(values, start=1)}
        statement = _PLACEHOLDER.sub(r":p\1", sql)

        # SQLite has no ILIKE; its LIKE is already case-insensitive for ASCII
        if self.session.get_bind().dialect.name == "sqlite":
            statement = _ILIKE.sub("LIKE", statement)

        try:
            result = self.session.execute(text(statement), params)
            rows = [dict(row) for row in result.mappings().all()] if result.returns_rows else []
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

        return QueryResult(rows=rows)


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


def get_storage(db: Session = Depends(get_db)) -> Database:
    """Dependency wrapping the request's session in the storage adapter."""
    return Database(db)


def init_db():
    """
    Initialize database.

    Imports the models so they register on Base.metadata, then creates any
    missing tables.
    """
    from app.models import company, job, user, application  # noqa: F401 - register models
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ensured")
