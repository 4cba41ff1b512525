#!/usr/bin/env python3
"""Seed the city directory from a JSON file.

The file maps city ids to document bodies, e.g.::

    {"paris": {"friends": ["lyon"], "neighbour": "versailles"}}

This is the only way a city acquires a ``neighbour``: the API's add-city
call never writes one. Existing documents with the same id are replaced.
"""
import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from city_directory.application.services.city_record_service import CityRecordService
from city_directory.config import get_settings
from city_directory.core.database_init import initialize_database
from city_directory.core.dependencies import get_document_store
from city_directory.domain.entities.document import StoredDocument
from city_directory.domain.exceptions import CityDirectoryError

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def seed_cities(records: CityRecordService, payload: dict) -> int:
    """Validate and write every city in ``payload``.

    Returns:
        Number of cities written
    """
    written = 0
    for city_id, body in payload.items():
        # Validate the body the same way reads do before writing it
        record = records.to_record(StoredDocument(id=city_id, data=body))
        await records.replace(record)
        logger.info(f"Seeded city '{city_id}'")
        written += 1
    return written


def main() -> int:
    parser = argparse.ArgumentParser(description="Seed the city directory from a JSON file")
    parser.add_argument("path", type=Path, help="JSON file mapping city ids to documents")
    parser.add_argument("--collection", default=None, help="Override CITY_COLLECTION")
    args = parser.parse_args()

    settings = get_settings()
    if not settings.USE_DB_STORE:
        logger.warning("USE_DB_STORE is false; seeding the in-memory store has no lasting effect")
    elif not initialize_database():
        return 1

    payload = json.loads(args.path.read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        logger.error("Seed file must contain a JSON object keyed by city id")
        return 1

    records = CityRecordService(
        get_document_store(),
        collection=args.collection or settings.CITY_COLLECTION,
    )
    try:
        count = asyncio.run(seed_cities(records, payload))
    except CityDirectoryError as e:
        logger.error(f"Seeding failed: {e.message}")
        return 1

    logger.info(f"✅ Seeded {count} cities")
    return 0


if __name__ == "__main__":
    sys.exit(main())
