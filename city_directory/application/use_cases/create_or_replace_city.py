"""Use case: Create a city or replace an existing one."""
import logging
from typing import List

from city_directory.application.services.city_record_service import CityRecordService
from city_directory.domain.entities.city import CityRecord

logger = logging.getLogger(__name__)


class CreateOrReplaceCityUseCase:
    """Use case to upsert a city with its friends list.

    The written record never carries a neighbour; any neighbour stored
    under the same id before is dropped with the rest of the document.
    """

    def __init__(self, record_service: CityRecordService):
        self._records = record_service

    async def execute(self, city_id: str, friends: List[str]) -> CityRecord:
        """Execute use case to upsert a city.

        Args:
            city_id: Client chosen city id
            friends: Friend city ids, kept in order with duplicates

        Returns:
            The written CityRecord
        """
        record = await self._records.replace(CityRecord(id=city_id, friends=list(friends)))
        logger.info(f"Stored city '{city_id}' with {len(friends)} friends")
        return record
