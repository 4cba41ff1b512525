"""Database initialization - runs on backend startup."""
import logging

from sqlalchemy.exc import SQLAlchemyError

from city_directory.infrastructure.persistence import models  # noqa: F401  registers tables on Base
from city_directory.infrastructure.persistence.db import Base, get_engine

logger = logging.getLogger(__name__)


def initialize_database() -> bool:
    """Create the documents table if it does not exist yet.

    Returns:
        bool: True on success, False if the database could not be reached
    """
    try:
        Base.metadata.create_all(bind=get_engine())
        logger.info("✅ Database schema initialized successfully")
        return True
    except SQLAlchemyError as e:
        logger.error(f"Error initializing database: {e}")
        return False
