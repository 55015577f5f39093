import logging

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.engine.url import make_url
from sqlalchemy.exc import ArgumentError, SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

# Create Base class for models
Base = declarative_base()


def _is_postgres(database_url: str) -> bool:
    try:
        url = make_url(database_url)
    except ArgumentError:
        # Unparseable URLs get the minimal config; create_engine reports the error
        return False
    return url.drivername.startswith("postgresql") or url.drivername.startswith(
        "postgres"
    )


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """Create a SQLAlchemy engine configured for the target backend.

    PostgreSQL gets a production connection pool; an in-memory SQLite URL
    shares a single connection so the schema survives across sessions.
    """
    if _is_postgres(database_url):
        engine = create_engine(
            database_url,
            pool_size=20,  # ~4 Gunicorn workers x 5 connections
            max_overflow=40,
            pool_pre_ping=True,
            pool_recycle=3600,
            connect_args={
                "application_name": "sweet_shop",
                "connect_timeout": 10,
            },
            echo=echo,
        )
    elif database_url.startswith("sqlite") and (
        ":memory:" in database_url or database_url in ("sqlite://", "sqlite:///")
    ):
        engine = create_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    elif database_url.startswith("sqlite"):
        engine = create_engine(
            database_url, echo=echo, connect_args={"check_same_thread": False}
        )
    else:
        engine = create_engine(database_url, echo=echo)

    logger.debug(
        "SQLAlchemy engine created",
        extra={"context": {"dialect": engine.dialect.name}},
    )
    return engine


def build_session_factory(engine: Engine) -> sessionmaker:
    """Return a sessionmaker bound to ``engine``."""
    # Commits expire loaded rows, so reads after a bulk UPDATE see fresh values
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def create_tables(engine: Engine) -> None:
    """Create all tables in the database."""
    # Models must be imported so Base.metadata is populated
    from sweet_shop.db import base  # noqa: F401

    Base.metadata.create_all(bind=engine)


def check_connection(engine: Engine) -> bool:
    """Return True when a trivial query succeeds against ``engine``."""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError as exc:
        logger.error(
            "Database connectivity check failed",
            extra={"context": {"error": str(exc)}},
        )
        return False
