"""Dependency Injection Container."""
from fastapi import Request

from file_upload_api.application.interfaces.service_interfaces import FileRepositoryInterface, StorageServiceInterface
from file_upload_api.application.services.file_service import FileService
from file_upload_api.infrastructure.repositories.in_memory_file_repository import InMemoryFileRepository
from file_upload_api.infrastructure.repositories.local_disk_storage_service import LocalDiskStorageService
from file_upload_api.infrastructure.repositories.mongo_file_repository import MongoFileRepository
from shared.config.settings import Settings
from shared.utils.logging_config import get_logger

logger = get_logger(__name__)


class DIContainer:
    """
    Simple dependency injection container.

    Built once in the application lifespan and closed on shutdown; request
    handlers reach it through `request.app.state.container`.
    """

    def __init__(self, app_settings: Settings):
        self.settings = app_settings
        self._singletons = {}
        self._setup_services()

    def _setup_services(self):

        logger.info("Setting up Singleton DI Container services...")
        if self.settings.repository_type == "in_memory":
            self._singletons[FileRepositoryInterface] = InMemoryFileRepository()
        else:
            self._singletons[FileRepositoryInterface] = MongoFileRepository(
                mongo_uri=self.settings.mongo_uri,
                database_name=self.settings.mongo_database,
                collection_name=self.settings.files_collection_name,
                server_selection_timeout_ms=self.settings.mongo_server_selection_timeout_ms,
                max_upload_size_bytes=self.settings.max_upload_size_bytes
            )

        if self.settings.is_disk_mode:
            self._singletons[StorageServiceInterface] = LocalDiskStorageService(self.settings.upload_dir)

    def get_service(self, service_type):
        """Get a service instance by type."""
        if service_type in self._singletons:
            return self._singletons[service_type]
        raise ValueError(f"Service {service_type} not registered")

    def get_file_service(self) -> FileService:
        return FileService(
            file_repository=self.get_service(FileRepositoryInterface),
            storage_mode=self.settings.storage_mode,
            payload_storage=self._singletons.get(StorageServiceInterface),
            max_upload_size_bytes=self.settings.max_upload_size_bytes
        )

    async def close(self) -> None:
        """Close all services that require cleanup."""
        for service in self._singletons.values():
            if hasattr(service, "close") and callable(service.close):
                await service.close()


def get_container(request: Request) -> DIContainer:
    """Dependency injection function for the application container."""
    return request.app.state.container

def get_file_repository(request: Request) -> FileRepositoryInterface:
    """Dependency injection function for the file repository."""
    return get_container(request).get_service(FileRepositoryInterface)

def get_file_service(request: Request) -> FileService:
    """Dependency injection function for the file service."""
    return get_container(request).get_file_service()
