"""Use case: Get the designated neighbour of a city."""
from city_directory.application.services.city_record_service import CityRecordService


class GetNeighbourUseCase:
    """Use case to read a city's neighbour."""

    def __init__(self, record_service: CityRecordService):
        self._records = record_service

    async def execute(self, city_id: str) -> str:
        """Execute use case to get the neighbour.

        Raises:
            CityNotFoundError: No city stored under ``city_id``
            MissingFieldError: The city has no neighbour set
        """
        record = await self._records.load(city_id)
        return record.require_neighbour()
