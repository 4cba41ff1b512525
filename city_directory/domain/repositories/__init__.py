"""Repository interfaces."""
from city_directory.domain.repositories.document_store import DocumentStore

__all__ = [
    "DocumentStore",
]
