"""Dependency injection for FastAPI routes.
Routes depend on the DocumentStore abstraction, never on a concrete client."""
from functools import lru_cache

from fastapi import Depends

from city_directory.application.services.city_record_service import CityRecordService
from city_directory.application.use_cases.create_or_replace_city import CreateOrReplaceCityUseCase
from city_directory.application.use_cases.delete_city import DeleteCityUseCase
from city_directory.application.use_cases.get_neighbour import GetNeighbourUseCase
from city_directory.application.use_cases.list_cities import ListCitiesUseCase
from city_directory.application.use_cases.update_friends import AddFriendUseCase, RemoveFriendUseCase
from city_directory.config import get_settings
from city_directory.domain.repositories.document_store import DocumentStore
from city_directory.infrastructure.persistence.db import get_session_factory
from city_directory.infrastructure.persistence.repositories.in_memory_document_store import (
    InMemoryDocumentStore,
)
from city_directory.infrastructure.persistence.repositories.sqlalchemy_document_store import (
    SQLAlchemyDocumentStore,
)


@lru_cache()
def get_document_store() -> DocumentStore:
    """Get the process-wide document store.

    - Default: in-memory (fast tests/dev)
    - If USE_DB_STORE=true: SQLAlchemy store with a session per call
    """
    if get_settings().USE_DB_STORE:
        return SQLAlchemyDocumentStore(get_session_factory())
    return InMemoryDocumentStore()


def get_city_record_service(store: DocumentStore = Depends(get_document_store)) -> CityRecordService:
    settings = get_settings()
    return CityRecordService(
        store,
        collection=settings.CITY_COLLECTION,
        max_write_attempts=settings.STORE_MAX_WRITE_ATTEMPTS,
    )


# Use case instances
def get_list_cities_use_case(
    records: CityRecordService = Depends(get_city_record_service),
) -> ListCitiesUseCase:
    return ListCitiesUseCase(records)


def get_create_or_replace_city_use_case(
    records: CityRecordService = Depends(get_city_record_service),
) -> CreateOrReplaceCityUseCase:
    return CreateOrReplaceCityUseCase(records)


def get_neighbour_use_case(
    records: CityRecordService = Depends(get_city_record_service),
) -> GetNeighbourUseCase:
    return GetNeighbourUseCase(records)


def get_add_friend_use_case(
    records: CityRecordService = Depends(get_city_record_service),
) -> AddFriendUseCase:
    return AddFriendUseCase(records)


def get_remove_friend_use_case(
    records: CityRecordService = Depends(get_city_record_service),
) -> RemoveFriendUseCase:
    return RemoveFriendUseCase(records)


def get_delete_city_use_case(
    records: CityRecordService = Depends(get_city_record_service),
) -> DeleteCityUseCase:
    return DeleteCityUseCase(records)
