"""Database connection management

Auditing is optional: without a configured database URL no engine is
created and ``SessionLocal`` is left unbound.
"""
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base

from court_fetcher.config.settings import settings

# Base class for models
Base = declarative_base()


def to_sync_url(database_url: str) -> str:
    # Use the psycopg 3 driver for plain postgresql:// URLs
    if database_url.startswith("postgresql://"):
        return database_url.replace("postgresql://", "postgresql+psycopg://", 1)
    return database_url


def build_engine(database_url: str) -> Engine:
    url = to_sync_url(database_url)
    if url.startswith("sqlite"):
        return create_engine(url, connect_args={"check_same_thread": False})
    return create_engine(
        url,
        pool_pre_ping=True,
        pool_size=10,
        max_overflow=20
    )


engine: Optional[Engine] = build_engine(settings.database_url) if settings.database_url else None

# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
