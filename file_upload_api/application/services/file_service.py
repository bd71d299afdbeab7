"""File Service: upload, list and retrieve stored PDF files."""
import os
import time

from file_upload_api.application.interfaces.service_interfaces import FileRepositoryInterface, StorageServiceInterface
from file_upload_api.domain.uploaded_file_dto import UploadedFileDTO
from shared.models.stored_file import StoredFile
from shared.utils.exceptions import PayloadTooLargeException, StorageException
from shared.utils.logging_config import get_logger

logger = get_logger(__name__)

STORAGE_MODE_BLOB = "blob"
STORAGE_MODE_DISK = "disk"

class FileService:
    """
    Coordinates the file repository and, in disk mode, the payload storage.

    Blob mode keeps the bytes inside the repository record and enforces
    `max_upload_size_bytes`. Disk mode writes the bytes through the storage
    service and only records the resulting path.
    """

    def __init__(self,
                 file_repository: FileRepositoryInterface,
                 storage_mode: str = STORAGE_MODE_BLOB,
                 payload_storage: StorageServiceInterface | None = None,
                 max_upload_size_bytes: int | None = None):
        self.file_repository = file_repository
        self.storage_mode = storage_mode.lower()
        self.payload_storage = payload_storage
        self.max_upload_size_bytes = max_upload_size_bytes

        if self.storage_mode not in (STORAGE_MODE_BLOB, STORAGE_MODE_DISK):
            raise ValueError(f"Unknown storage mode: {storage_mode}")
        if self.storage_mode == STORAGE_MODE_DISK and payload_storage is None:
            raise ValueError("Disk storage mode requires a payload storage service")

    @property
    def is_disk_mode(self) -> bool:
        return self.storage_mode == STORAGE_MODE_DISK

    async def handle_upload(self, uploaded_file: UploadedFileDTO) -> StoredFile:
        """Persist an uploaded file and return the stored record with its new id."""
        logger.info(f"Storing upload '{uploaded_file.file_name}', {uploaded_file.size} bytes, mode: {self.storage_mode}")

        if self.is_disk_mode:
            return await self._store_on_disk(uploaded_file)
        return await self._store_inline(uploaded_file)

    async def _store_inline(self, uploaded_file: UploadedFileDTO) -> StoredFile:
        if self.max_upload_size_bytes is not None and uploaded_file.size > self.max_upload_size_bytes:
            logger.error(f"Upload '{uploaded_file.file_name}' rejected: {uploaded_file.size} > {self.max_upload_size_bytes} bytes")
            raise PayloadTooLargeException(uploaded_file.size, self.max_upload_size_bytes)

        stored_file = StoredFile(
            original_name=uploaded_file.file_name,
            content_type=uploaded_file.content_type,
            size=uploaded_file.size,
            data=uploaded_file.file_content
        )
        await self.file_repository.insert_file(stored_file)
        logger.info(f"File ID: {stored_file.file_id} stored inline")
        return stored_file

    async def _store_on_disk(self, uploaded_file: UploadedFileDTO) -> StoredFile:
        filename = f"{int(time.time() * 1000)}-{os.path.basename(uploaded_file.file_name)}"

        #step 1 - write the payload
        path = await self.payload_storage.upload_file_as_bytes(uploaded_file.file_content, filename)

        stored_file = StoredFile(
            original_name=uploaded_file.file_name,
            content_type=uploaded_file.content_type,
            size=uploaded_file.size,
            filename=filename,
            path=path
        )

        #step 2 - save metadata, removing the payload again if that fails
        try:
            await self.file_repository.insert_file(stored_file)
        except Exception:
            logger.error(f"Metadata insert failed, removing orphaned file: {path}")
            await self.payload_storage.delete_file(filename)
            raise

        logger.info(f"File ID: {stored_file.file_id} written to disk: {path}")
        return stored_file

    async def list_files(self) -> list[StoredFile]:
        """List stored files, most recent first, without payloads."""
        return await self.file_repository.list_files()

    async def get_file(self, file_id: str) -> StoredFile | None:
        """Fetch a stored file with its payload loaded into `data`, or None if unknown."""
        stored_file = await self.file_repository.get_file(file_id)
        if stored_file is None:
            logger.info(f"File ID: {file_id} not found")
            return None

        if stored_file.is_on_disk:
            if self.payload_storage is None:
                raise StorageException(f"File {file_id} is stored on disk but no disk storage is configured")
            content = await self.payload_storage.download_file(stored_file.filename or stored_file.path)
            if content is None:
                logger.warning(f"File ID: {file_id} has metadata but its payload is missing on disk")
                return None
            return StoredFile(
                file_id=stored_file.file_id,
                original_name=stored_file.original_name,
                content_type=stored_file.content_type,
                size=len(content),
                data=content,
                filename=stored_file.filename,
                upload_date=stored_file.upload_date
            )

        if stored_file.data is None:
            logger.warning(f"File ID: {file_id} carries no payload")
            return None
        return stored_file
