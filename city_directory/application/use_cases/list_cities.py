"""Use case: List every city in the directory."""
from typing import List

from city_directory.application.services.city_record_service import CityRecordService
from city_directory.domain.entities.city import CityRecord


class ListCitiesUseCase:
    """Use case to list all stored city records."""

    def __init__(self, record_service: CityRecordService):
        self._records = record_service

    async def execute(self) -> List[CityRecord]:
        """Return all cities in the store's enumeration order (possibly empty)."""
        return await self._records.list_records()
