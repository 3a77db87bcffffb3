"""Database configuration and session management.

Provides the SQLAlchemy engine and session factory.
"""

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from productlists.infrastructure.config import settings

# Base class for models
Base = declarative_base()


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """Create an engine for the given database URL.

    Args:
        database_url: SQLAlchemy database URL.
        echo: Log emitted SQL.

    Returns:
        Configured engine.
    """
    connect_args = {}
    if database_url.startswith("sqlite"):
        # Requests are served from the FastAPI threadpool.
        connect_args["check_same_thread"] = False
    return create_engine(
        database_url,
        echo=echo,
        pool_pre_ping=True,
        connect_args=connect_args,
    )


def build_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Create a session factory bound to an engine."""
    return sessionmaker(engine, class_=Session, expire_on_commit=False)


# Create engine
engine = build_engine(settings.database_url, echo=settings.debug)

# Session factory
session_factory = build_session_factory(engine)


def init_db(bind: Engine | None = None) -> None:
    """Create all tables.

    Args:
        bind: Engine to create tables on, defaults to the application engine.
    """
    # Import models so they register with the metadata
    from productlists.infrastructure import models  # noqa: F401

    Base.metadata.create_all(bind or engine)
