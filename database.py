from typing import Optional

from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import create_engine

from core.config import settings
from core.logging_config import logger


def build_engine(database_url: Optional[str] = None, echo: bool = False) -> Engine:
    url = (database_url if database_url is not None else settings.DATABASE_URL).strip()

    # Render/Neon often provide 'postgres://'. SQLAlchemy prefers 'postgresql+psycopg2://'
    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql+psycopg2://", 1)

    if not url.startswith("sqlite"):
        return create_engine(url, echo=echo, pool_pre_ping=True)

    connect_args = {"check_same_thread": False}
    if url in ("sqlite://", "sqlite:///:memory:"):
        # One shared connection, otherwise every checkout sees an empty database
        return create_engine(url, echo=echo, connect_args=connect_args, poolclass=StaticPool)
    return create_engine(url, echo=echo, connect_args=connect_args)


def build_storage(database_url: Optional[str] = None):
    """MemStorage when no database is configured, SqlStorage otherwise."""
    from storage.memory import MemStorage
    from storage.sql import SqlStorage

    url = database_url if database_url is not None else settings.DATABASE_URL
    if not url:
        logger.info("No DATABASE_URL configured, using in-memory storage")
        return MemStorage()

    storage = SqlStorage(build_engine(url))
    storage.create_all()
    return storage
