"""SQLAlchemy models for the document table."""
from sqlalchemy import BigInteger, Column, DateTime, JSON, String

from city_directory.infrastructure.persistence.db import Base


class Document(Base):
    __tablename__ = "documents"

    collection = Column(String(255), primary_key=True)
    doc_id = Column(String(255), primary_key=True)
    data = Column(JSON, nullable=False)
    revision = Column(BigInteger, nullable=False, default=1)
    created_at = Column(DateTime)
    updated_at = Column(DateTime)
