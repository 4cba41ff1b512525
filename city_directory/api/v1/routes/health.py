"""Health check endpoints."""
from typing import Any, Dict

from fastapi import APIRouter, Depends, Response, status

from city_directory.core.dependencies import get_document_store
from city_directory.domain.repositories.document_store import DocumentStore
from city_directory.services.health_service import HealthCheckService, HealthStatus

router = APIRouter()


@router.get("/health", tags=["health"])
async def simple_health_check() -> Dict[str, str]:
    """
    Simple health check for load balancer - no dependency checks.

    Returns HTTP 200 OK if the application is running.
    """
    return {"status": "ok"}


@router.get("/health/detailed", tags=["health"])
async def detailed_health_check(
    response: Response,
    store: DocumentStore = Depends(get_document_store),
) -> Dict[str, Any]:
    """
    Detailed health check including the document store.

    Returns HTTP 200 if the store answers, HTTP 503 otherwise.
    """
    health_data = await HealthCheckService(store).get_overall_health()

    if health_data["status"] == HealthStatus.UNHEALTHY:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    else:
        response.status_code = status.HTTP_200_OK

    return health_data
