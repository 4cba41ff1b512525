"""Database setup helpers (SQLAlchemy engine/session)."""
from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from city_directory.config import get_settings

Base = declarative_base()


@lru_cache()
def get_engine() -> Engine:
    """Build the engine lazily so the in-memory store never needs a driver."""
    return create_engine(get_settings().get_database_url(), future=True, pool_pre_ping=True)


@lru_cache()
def get_session_factory() -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=get_engine(), future=True)
