"""Use cases: Add or remove a friend on an existing city."""
import logging

from city_directory.application.services.city_record_service import CityRecordService
from city_directory.domain.entities.city import CityRecord

logger = logging.getLogger(__name__)


class AddFriendUseCase:
    """Use case to append a friend to a city's friends list.

    The friend is not checked for existence and may already be listed.
    """

    def __init__(self, record_service: CityRecordService):
        self._records = record_service

    async def execute(self, city_id: str, new_friend: str) -> CityRecord:
        record = await self._records.mutate(city_id, lambda city: city.add_friend(new_friend))
        logger.info(f"Added friend '{new_friend}' to city '{city_id}'")
        return record


class RemoveFriendUseCase:
    """Use case to remove every occurrence of a friend from a city."""

    def __init__(self, record_service: CityRecordService):
        self._records = record_service

    async def execute(self, city_id: str, friend: str) -> CityRecord:
        record = await self._records.mutate(city_id, lambda city: city.remove_friend(friend))
        logger.info(f"Removed friend '{friend}' from city '{city_id}'")
        return record
