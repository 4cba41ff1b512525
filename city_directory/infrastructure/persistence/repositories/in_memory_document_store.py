"""In-memory implementation of DocumentStore for development and testing.
Can replace any DocumentStore."""
import copy
from typing import Any, Dict, List, Optional

from city_directory.domain.entities.document import StoredDocument
from city_directory.domain.exceptions import RevisionConflictError
from city_directory.domain.repositories.document_store import DocumentStore


class InMemoryDocumentStore(DocumentStore):
    """In-memory implementation for testing.

    Collections enumerate in insertion order. Bodies are deep-copied on the
    way in and out so callers never share state with the store.
    """

    def __init__(self):
        self._collections: Dict[str, Dict[str, StoredDocument]] = {}

    def _collection(self, collection: str) -> Dict[str, StoredDocument]:
        return self._collections.setdefault(collection, {})

    @staticmethod
    def _copy(document: StoredDocument) -> StoredDocument:
        return StoredDocument(id=document.id, data=copy.deepcopy(document.data), revision=document.revision)

    async def list_documents(self, collection: str) -> List[StoredDocument]:
        return [self._copy(doc) for doc in self._collection(collection).values()]

    async def get_document(self, collection: str, doc_id: str) -> Optional[StoredDocument]:
        document = self._collection(collection).get(doc_id)
        return self._copy(document) if document else None

    async def set_document(
        self,
        collection: str,
        doc_id: str,
        data: Dict[str, Any],
        if_revision: Optional[int] = None,
    ) -> StoredDocument:
        documents = self._collection(collection)
        current = documents.get(doc_id)

        if if_revision is not None and (current is None or current.revision != if_revision):
            raise RevisionConflictError(collection, doc_id, if_revision)

        revision = current.revision + 1 if current else 1
        documents[doc_id] = StoredDocument(id=doc_id, data=copy.deepcopy(data), revision=revision)
        return self._copy(documents[doc_id])

    async def delete_document(self, collection: str, doc_id: str) -> bool:
        return self._collection(collection).pop(doc_id, None) is not None

    async def ping(self) -> bool:
        return True
