"""Document store interface - abstraction for data access."""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from city_directory.domain.entities.document import StoredDocument


class DocumentStore(ABC):
    """Key-value document store addressed by collection name and document id.

    Every write bumps the document's revision. Passing ``if_revision`` to
    ``set_document`` turns the write into a compare-and-swap that raises
    ``RevisionConflictError`` when the stored revision differs (or the
    document is gone). Backend failures surface as ``StoreUnavailableError``.
    """

    @abstractmethod
    async def list_documents(self, collection: str) -> List[StoredDocument]:
        """List every document in a collection in a stable order."""
        pass

    @abstractmethod
    async def get_document(self, collection: str, doc_id: str) -> Optional[StoredDocument]:
        """Get document by ID, None if absent."""
        pass

    @abstractmethod
    async def set_document(
        self,
        collection: str,
        doc_id: str,
        data: Dict[str, Any],
        if_revision: Optional[int] = None,
    ) -> StoredDocument:
        """Create or fully replace a document."""
        pass

    @abstractmethod
    async def delete_document(self, collection: str, doc_id: str) -> bool:
        """Delete document, returning False if it did not exist."""
        pass

    @abstractmethod
    async def ping(self) -> bool:
        """Return True if the backend is reachable, raise StoreUnavailableError if not."""
        pass
