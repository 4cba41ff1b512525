"""Health check service for monitoring system components."""
import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict

from city_directory.config import get_settings
from city_directory.domain.exceptions import StoreUnavailableError
from city_directory.domain.repositories.document_store import DocumentStore

logger = logging.getLogger(__name__)


class HealthStatus(str, Enum):
    """Health status values."""
    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"


class HealthCheckService:
    """Service for checking health of system components."""

    def __init__(self, store: DocumentStore):
        self._store = store

    async def check_document_store(self) -> Dict[str, Any]:
        """Check document store connectivity.

        Returns:
            Dictionary with status and details
        """
        backend = type(self._store).__name__
        try:
            await self._store.ping()
            return {
                "status": HealthStatus.HEALTHY,
                "message": "Document store reachable",
                "details": {"backend": backend},
            }
        except StoreUnavailableError as e:
            logger.error(f"Document store health check failed: {e}")
            return {
                "status": HealthStatus.UNHEALTHY,
                "message": f"Document store unreachable: {e.message}",
                "details": {"backend": backend, "error": e.message},
            }

    async def get_overall_health(self) -> Dict[str, Any]:
        """Get overall system health including all components."""
        store = await self.check_document_store()
        return {
            "status": store["status"],
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "version": get_settings().APP_VERSION,
            "components": {"document_store": store},
        }
