"""Database connection and session management."""

from sqlalchemy import create_engine, Engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

Base = declarative_base()


def create_db_engine(database_url: str) -> Engine:
    """Create an engine; in-memory SQLite shares one connection across sessions."""
    if database_url in ("sqlite://", "sqlite:///:memory:"):
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(
        database_url,
        connect_args={"check_same_thread": False},  # SQLite-specific
        echo=False,
    )


def init_db(engine: Engine) -> None:
    """Initialize database tables."""
    from coinfolio.repositories.sqlalchemy import orm_models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def create_session_factory(database_url: str) -> sessionmaker:
    """Create an engine for a database URL, ensure tables exist and return a session factory."""
    engine = create_db_engine(database_url)
    init_db(engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)
