"""
Database session management using SQLModel.
Provides engine construction and the session dependency for FastAPI routes.
"""

from typing import Generator

from fastapi import Request
from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

from accounts.core.config import Settings


def build_engine(settings: Settings) -> Engine:
    """Create the database engine with settings appropriate to the backend."""
    if settings.is_sqlite:
        return create_engine(
            settings.DATABASE_URL,
            echo=settings.DEBUG,
            connect_args={"check_same_thread": False},  # Allow multi-threading for SQLite
        )

    # pool_pre_ping ensures connections are alive before using them
    return create_engine(
        settings.DATABASE_URL,
        echo=settings.DEBUG,
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10,
    )


def create_tables(engine: Engine) -> None:
    # Registers the users table on SQLModel.metadata
    import accounts.models.user  # noqa: F401

    SQLModel.metadata.create_all(engine)


def get_session(request: Request) -> Generator[Session, None, None]:
    """
    Dependency that provides a database session bound to the app's engine.

    Yields:
        Database session instance
    """
    with Session(request.app.state.engine) as session:
        yield session
