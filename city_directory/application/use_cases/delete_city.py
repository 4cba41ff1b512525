"""Use case: Delete a city."""
import logging

from city_directory.application.services.city_record_service import CityRecordService

logger = logging.getLogger(__name__)


class DeleteCityUseCase:
    """Use case to remove a city record.

    Other cities that list it as a friend or neighbour are left untouched.
    """

    def __init__(self, record_service: CityRecordService):
        self._records = record_service

    async def execute(self, city_id: str) -> None:
        await self._records.delete(city_id)
        logger.info(f"Deleted city '{city_id}'")
