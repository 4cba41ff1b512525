"""SQLAlchemy implementation of DocumentStore."""
import copy
import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, List, Optional

from sqlalchemy import text, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from city_directory.domain.entities.document import StoredDocument
from city_directory.domain.exceptions import RevisionConflictError, StoreUnavailableError
from city_directory.domain.repositories.document_store import DocumentStore
from city_directory.infrastructure.persistence import models

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _to_document(row: models.Document) -> StoredDocument:
    return StoredDocument(id=row.doc_id, data=copy.deepcopy(row.data), revision=int(row.revision))


class SQLAlchemyDocumentStore(DocumentStore):
    """Document store on a single ``documents`` table.

    Uses one short-lived session per call. Compare-and-swap is an UPDATE
    filtered on the expected revision; zero affected rows means a
    concurrent writer (or a delete) got there first.
    """

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    @contextmanager
    def _session(self) -> Iterator[Session]:
        session: Session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"Document store error: {e}")
            raise StoreUnavailableError(f"Document store unavailable: {e.__class__.__name__}") from e
        finally:
            session.close()

    async def list_documents(self, collection: str) -> List[StoredDocument]:
        with self._session() as session:
            rows = (
                session.query(models.Document)
                .filter(models.Document.collection == collection)
                .order_by(models.Document.doc_id)
                .all()
            )
            return [_to_document(r) for r in rows]

    async def get_document(self, collection: str, doc_id: str) -> Optional[StoredDocument]:
        with self._session() as session:
            row = session.get(models.Document, (collection, doc_id))
            return _to_document(row) if row else None

    async def set_document(
        self,
        collection: str,
        doc_id: str,
        data: Dict[str, Any],
        if_revision: Optional[int] = None,
    ) -> StoredDocument:
        now = _utcnow()
        with self._session() as session:
            if if_revision is not None:
                result = session.execute(
                    update(models.Document)
                    .where(
                        models.Document.collection == collection,
                        models.Document.doc_id == doc_id,
                        models.Document.revision == if_revision,
                    )
                    .values(data=data, revision=if_revision + 1, updated_at=now)
                )
                if result.rowcount != 1:
                    session.rollback()
                    raise RevisionConflictError(collection, doc_id, if_revision)
                session.commit()
                return StoredDocument(id=doc_id, data=copy.deepcopy(data), revision=if_revision + 1)

            try:
                revision = self._upsert(session, collection, doc_id, data, now)
            except IntegrityError:
                # Another request inserted the same id between our read and commit;
                # the row exists now, so overwrite it
                session.rollback()
                revision = self._upsert(session, collection, doc_id, data, now)
            return StoredDocument(id=doc_id, data=copy.deepcopy(data), revision=revision)

    @staticmethod
    def _upsert(session: Session, collection: str, doc_id: str, data: Dict[str, Any], now: datetime) -> int:
        row = session.get(models.Document, (collection, doc_id))
        if row is None:
            revision = 1
            session.add(
                models.Document(
                    collection=collection,
                    doc_id=doc_id,
                    data=data,
                    revision=revision,
                    created_at=now,
                    updated_at=now,
                )
            )
        else:
            revision = int(row.revision) + 1
            row.data = data
            row.revision = revision
            row.updated_at = now
        session.commit()
        return revision

    async def delete_document(self, collection: str, doc_id: str) -> bool:
        with self._session() as session:
            deleted = (
                session.query(models.Document)
                .filter(models.Document.collection == collection, models.Document.doc_id == doc_id)
                .delete(synchronize_session=False)
            )
            session.commit()
            return deleted > 0

    async def ping(self) -> bool:
        with self._session() as session:
            session.execute(text("SELECT 1"))
            return True
