"""City record persistence service.

Maps stored documents to ``CityRecord`` entities and back. Documents are
validated against ``CityDocumentSchema`` on every read, so a corrupt body
surfaces as ``TypeMismatchError`` instead of leaking odd values into the
API. Read-modify-write goes through ``mutate``, which writes with the
revision it read and retries from a fresh read when another writer got in
first.
"""
import logging
from typing import Callable, List, Optional

from pydantic import BaseModel, ConfigDict, StrictStr, ValidationError

from city_directory.domain.entities.city import CityRecord, validate_city_id
from city_directory.domain.entities.document import StoredDocument
from city_directory.domain.exceptions import (
    CityNotFoundError,
    RevisionConflictError,
    TypeMismatchError,
)
from city_directory.domain.repositories.document_store import DocumentStore

logger = logging.getLogger(__name__)


class CityDocumentSchema(BaseModel):
    """Shape of a stored city document body."""
    model_config = ConfigDict(extra="ignore")

    friends: Optional[List[StrictStr]] = None
    neighbour: Optional[StrictStr] = None


class CityRecordService:
    """Loads, writes and mutates city records in one collection."""

    def __init__(self, store: DocumentStore, collection: str = "cities", max_write_attempts: int = 5):
        self._store = store
        self._collection = collection
        self._max_write_attempts = max(1, max_write_attempts)

    @property
    def store(self) -> DocumentStore:
        return self._store

    def to_record(self, document: StoredDocument) -> CityRecord:
        if isinstance(document.data, dict):
            # A stored null is neither absent nor empty
            for field in CityDocumentSchema.model_fields:
                if field in document.data and document.data[field] is None:
                    raise TypeMismatchError(document.id, field, "must not be null")
        try:
            parsed = CityDocumentSchema.model_validate(document.data)
        except ValidationError as e:
            error = e.errors()[0]
            field = ".".join(str(part) for part in error["loc"]) or "document"
            raise TypeMismatchError(document.id, field, error["msg"]) from e
        return CityRecord(
            id=document.id,
            friends=parsed.friends,
            neighbour=parsed.neighbour,
            revision=document.revision,
        )

    async def list_records(self) -> List[CityRecord]:
        """List every readable city; corrupt documents are logged and left out."""
        records = []
        for document in await self._store.list_documents(self._collection):
            try:
                records.append(self.to_record(document))
            except TypeMismatchError as e:
                logger.error(f"Skipping corrupt city document: {e.message}")
        return records

    async def load(self, city_id: str) -> CityRecord:
        validate_city_id(city_id)
        document = await self._store.get_document(self._collection, city_id)
        if document is None:
            raise CityNotFoundError(city_id)
        return self.to_record(document)

    async def replace(self, record: CityRecord) -> CityRecord:
        """Upsert the record unconditionally."""
        validate_city_id(record.id)
        stored = await self._store.set_document(self._collection, record.id, record.to_document())
        record.revision = stored.revision
        return record

    async def mutate(self, city_id: str, change: Callable[[CityRecord], None]) -> CityRecord:
        """Apply ``change`` to the current record and write it back conditionally.

        Args:
            city_id: City to update
            change: Callback that edits the record in place

        Returns:
            The record as written

        Raises:
            CityNotFoundError: The city does not exist (or was deleted mid-retry)
            RevisionConflictError: Every attempt lost against a concurrent writer
        """
        attempt = 1
        while True:
            record = await self.load(city_id)
            change(record)
            try:
                stored = await self._store.set_document(
                    self._collection,
                    city_id,
                    record.to_document(),
                    if_revision=record.revision,
                )
            except RevisionConflictError:
                if attempt >= self._max_write_attempts:
                    logger.warning(f"Giving up on city '{city_id}' after {attempt} conflicting writes")
                    raise
                logger.warning(
                    f"Concurrent write on city '{city_id}', retrying ({attempt}/{self._max_write_attempts})"
                )
                attempt += 1
                continue
            record.revision = stored.revision
            return record

    async def delete(self, city_id: str) -> None:
        validate_city_id(city_id)
        if not await self._store.delete_document(self._collection, city_id):
            raise CityNotFoundError(city_id, "City to be deleted is not found")
