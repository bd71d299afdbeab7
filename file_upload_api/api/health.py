"""
Health check endpoint.
"""
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from file_upload_api.application.interfaces.di_container import DIContainer, get_container, get_file_repository
from file_upload_api.application.interfaces.service_interfaces import FileRepositoryInterface

router = APIRouter()

@router.get("/")
async def health_check_(container: DIContainer = Depends(get_container)):
    """Basic health check - is service alive?"""
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service": container.settings.api_title,
        "version": container.settings.api_version
    }

# Readiness: Check if dependencies are ready
@router.get("/ready")
async def readiness_check(container: DIContainer = Depends(get_container),
                          file_repository: FileRepositoryInterface = Depends(get_file_repository)):
    """Readiness check - is the document store reachable?"""
    database_ready = await file_repository.ping()

    return JSONResponse(
        status_code=200 if database_ready else 503,
        content={
            "status": "ready" if database_ready else "not_ready",
            "service": container.settings.api_title,
            "version": container.settings.api_version,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "services": {"database": database_ready},
        }
    )
