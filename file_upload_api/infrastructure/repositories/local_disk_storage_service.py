import asyncio
import os

from shared.config.settings import settings
from shared.utils.exceptions import StorageException
from shared.utils.logging_config import get_logger
from file_upload_api.application.interfaces.service_interfaces import StorageServiceInterface

logger = get_logger(__name__)

class LocalDiskStorageService(StorageServiceInterface):
    """Stores uploaded payloads as files under a local uploads directory."""

    def __init__(self, upload_dir: str = None):
        self.upload_dir = os.path.abspath(upload_dir or settings.upload_dir)
        os.makedirs(self.upload_dir, exist_ok=True)
        logger.info(f"Local disk storage ready at: {self.upload_dir}")

    def _resolve(self, blob_name: str) -> str:
        # Names are flattened to the uploads directory, never a subpath of it
        return os.path.join(self.upload_dir, os.path.basename(blob_name))

    async def upload_file_as_bytes(self, blob_bytes: bytes, blob_name: str) -> str:
        """Write file bytes to the uploads directory and return the file path."""
        path = self._resolve(blob_name)
        logger.info(f" - Writing file: {path}, {len(blob_bytes)} bytes")
        try:
            await asyncio.to_thread(self._write, path, blob_bytes)
        except OSError as e:
            logger.error(f"Error writing file {path}: {e}")
            raise StorageException(f"Could not write file {blob_name}") from e
        return path

    async def download_file(self, blob_name: str) -> bytes | None:
        """Read a stored file back, None when it no longer exists."""
        path = self._resolve(blob_name)
        if not os.path.isfile(path):
            logger.warning(f"File not found on disk: {path}")
            return None
        try:
            return await asyncio.to_thread(self._read, path)
        except OSError as e:
            logger.error(f"Error reading file {path}: {e}")
            raise StorageException(f"Could not read file {blob_name}") from e

    async def delete_file(self, blob_name: str) -> None:
        path = self._resolve(blob_name)
        try:
            await asyncio.to_thread(os.remove, path)
            logger.info(f"File deleted: {path}")
        except FileNotFoundError:
            pass

    async def close(self) -> None:
        pass

    @staticmethod
    def _write(path: str, blob_bytes: bytes) -> None:
        with open(path, "wb") as f:
            f.write(blob_bytes)

    @staticmethod
    def _read(path: str) -> bytes:
        with open(path, "rb") as f:
            return f.read()
