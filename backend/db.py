import logging

from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine

import config

logger = logging.getLogger(__name__)


def create_db_engine(database_url: str | None = None, echo: bool = False) -> Engine:
    """Create the engine backing the mood store.

    Server databases get a bounded connection pool; SQLite gets a single
    shared connection when it lives in memory.
    """
    url = database_url or config.get_database_url()

    # Log database driver for observability
    db_driver = url.split(":", 1)[0] if ":" in url else "unknown"
    logger.info(f"DB_URL_DRIVER={db_driver}")

    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, echo=echo, **kwargs)

    return create_engine(
        url,
        echo=echo,
        pool_size=config.DB_POOL_SIZE,
        max_overflow=config.DB_MAX_OVERFLOW,
        pool_timeout=config.DB_POOL_TIMEOUT,
        pool_pre_ping=True,
    )


def create_db_and_tables(engine: Engine):
    """Create database and tables if they don't exist.
    This is safe to call multiple times - it won't wipe existing data.
    """
    # Registers the moods table on SQLModel.metadata
    import models  # noqa: F401

    SQLModel.metadata.create_all(engine)
