"""
Storage service interfaces for dependency injection.
"""
from abc import ABC, abstractmethod

from shared.models.stored_file import StoredFile


class FileRepositoryInterface(ABC):
    """Abstract base class for the document store holding StoredFile records."""

    @abstractmethod
    async def insert_file(self, stored_file: StoredFile) -> str:
        """Insert a new record and return its generated identifier."""
        pass

    @abstractmethod
    async def get_file(self, file_id: str) -> StoredFile | None:
        """Retrieve a record, payload included, by identifier."""
        pass

    @abstractmethod
    async def list_files(self) -> list[StoredFile]:
        """List all records without their payload, most recent upload first."""
        pass

    @abstractmethod
    async def ping(self) -> bool:
        """Check that the store is reachable."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close any resources held by the service."""
        pass


class StorageServiceInterface(ABC):
    """Abstract base class for payload storage used in disk mode."""

    @abstractmethod
    async def upload_file_as_bytes(self, blob_bytes: bytes, blob_name: str) -> str:
        """Write file bytes and return the stored path."""
        pass

    @abstractmethod
    async def download_file(self, blob_name: str) -> bytes | None:
        """Read file bytes back, None when the file is gone."""
        pass

    @abstractmethod
    async def delete_file(self, blob_name: str) -> None:
        """Delete a stored file."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close any resources held by the service."""
        pass
