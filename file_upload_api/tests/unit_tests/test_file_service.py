import pytest
import pytest_asyncio
from unittest.mock import AsyncMock

from datetime import datetime, timedelta, timezone

from file_upload_api.application.interfaces.service_interfaces import FileRepositoryInterface, StorageServiceInterface
from file_upload_api.application.services.file_service import FileService
from file_upload_api.domain.uploaded_file_dto import UploadedFileDTO
from file_upload_api.infrastructure.repositories.in_memory_file_repository import InMemoryFileRepository
from shared.config.settings import settings
from shared.models.stored_file import StoredFile
from shared.utils.exceptions import PayloadTooLargeException, StorageException
from shared.utils.logging_config import get_logger, setup_logging

setup_logging(
        log_level=settings.log_level,
        log_file=None,
        log_to_console=settings.log_to_console
    )
logger = get_logger(__name__)

PDF_BYTES = b"%PDF-1.4\n1 0 obj\n<< /Type /Catalog >>\nendobj\n%%EOF\n"


class TestFileServiceBlobMode:

    @pytest_asyncio.fixture
    async def file_repository(self):
        repository = InMemoryFileRepository()
        yield repository
        await repository.close()

    @pytest_asyncio.fixture
    async def file_service(self, file_repository):
        return FileService(file_repository=file_repository, storage_mode="blob", max_upload_size_bytes=1024)

    @pytest.mark.asyncio
    async def test_handle_upload_stores_inline(self, file_service: FileService, file_repository):
        uploaded_file = UploadedFileDTO("report.pdf", "application/pdf", PDF_BYTES)

        stored_file = await file_service.handle_upload(uploaded_file)

        assert stored_file.file_id is not None
        fetched = await file_service.get_file(stored_file.file_id)
        assert fetched.original_name == "report.pdf"
        assert fetched.content_type == "application/pdf"
        assert fetched.data == PDF_BYTES
        assert len(await file_repository.list_files()) == 1
        logger.info("✓ test_handle_upload_stores_inline passed")

    @pytest.mark.asyncio
    async def test_handle_upload_over_limit_creates_no_record(self, file_service: FileService, file_repository):
        uploaded_file = UploadedFileDTO("big.pdf", "application/pdf", b"x" * 1025)

        with pytest.raises(PayloadTooLargeException) as exc_info:
            await file_service.handle_upload(uploaded_file)

        assert exc_info.value.limit == 1024
        assert isinstance(exc_info.value, StorageException)
        assert await file_repository.list_files() == []

    @pytest.mark.asyncio
    async def test_handle_upload_at_limit_is_accepted(self, file_service: FileService):
        stored_file = await file_service.handle_upload(UploadedFileDTO("edge.pdf", "application/pdf", b"x" * 1024))
        assert stored_file.size == 1024

    @pytest.mark.asyncio
    async def test_get_unknown_file_returns_none(self, file_service: FileService):
        assert await file_service.get_file("does-not-exist") is None

    @pytest.mark.asyncio
    async def test_list_files_newest_first_without_payload(self, file_service: FileService, file_repository):
        now = datetime.now(timezone.utc)
        for name, age in (("old.pdf", 2), ("new.pdf", 0), ("mid.pdf", 1)):
            await file_repository.insert_file(StoredFile(
                original_name=name, content_type="application/pdf", size=1, data=b"x",
                upload_date=now - timedelta(minutes=age)
            ))

        files = await file_service.list_files()

        assert [f.original_name for f in files] == ["new.pdf", "mid.pdf", "old.pdf"]
        assert all(f.data is None for f in files)

    @pytest.mark.asyncio
    async def test_repository_failure_propagates(self):
        repository = AsyncMock(spec=FileRepositoryInterface)
        repository.insert_file.side_effect = StorageException("database unavailable")
        service = FileService(file_repository=repository, storage_mode="blob", max_upload_size_bytes=1024)

        with pytest.raises(StorageException):
            await service.handle_upload(UploadedFileDTO("report.pdf", "application/pdf", PDF_BYTES))

    def test_unknown_storage_mode_is_rejected(self):
        with pytest.raises(ValueError):
            FileService(file_repository=InMemoryFileRepository(), storage_mode="s3")


class TestFileServiceDiskMode:

    @pytest_asyncio.fixture
    async def mock_payload_storage(self):
        """Create a mock payload storage."""
        mock_storage = AsyncMock(spec=StorageServiceInterface)
        mock_storage.upload_file_as_bytes.side_effect = lambda blob_bytes, blob_name: f"/uploads/{blob_name}"
        return mock_storage

    @pytest_asyncio.fixture
    async def file_service(self, mock_payload_storage):
        return FileService(
            file_repository=InMemoryFileRepository(),
            storage_mode="disk",
            payload_storage=mock_payload_storage,
            max_upload_size_bytes=16
        )

    @pytest.mark.asyncio
    async def test_handle_upload_writes_to_disk(self, file_service: FileService, mock_payload_storage):
        uploaded_file = UploadedFileDTO("report.pdf", "application/pdf", PDF_BYTES)

        stored_file = await file_service.handle_upload(uploaded_file)

        mock_payload_storage.upload_file_as_bytes.assert_called_once()
        blob_bytes, blob_name = mock_payload_storage.upload_file_as_bytes.call_args[0]
        prefix, _, original = blob_name.partition("-")
        assert blob_bytes == PDF_BYTES
        assert prefix.isdigit()
        assert original == "report.pdf"
        assert stored_file.filename == blob_name
        assert stored_file.path == f"/uploads/{blob_name}"
        assert stored_file.data is None

    @pytest.mark.asyncio
    async def test_disk_mode_has_no_size_limit(self, file_service: FileService):
        stored_file = await file_service.handle_upload(UploadedFileDTO("big.pdf", "application/pdf", b"x" * 1024))
        assert stored_file.size == 1024

    @pytest.mark.asyncio
    async def test_get_file_reads_payload_back(self, file_service: FileService, mock_payload_storage):
        stored_file = await file_service.handle_upload(UploadedFileDTO("report.pdf", "application/pdf", PDF_BYTES))
        mock_payload_storage.download_file.return_value = PDF_BYTES

        fetched = await file_service.get_file(stored_file.file_id)

        mock_payload_storage.download_file.assert_called_once_with(stored_file.filename)
        assert fetched.data == PDF_BYTES
        assert fetched.content_type == "application/pdf"

    @pytest.mark.asyncio
    async def test_get_file_missing_on_disk_returns_none(self, file_service: FileService, mock_payload_storage):
        stored_file = await file_service.handle_upload(UploadedFileDTO("report.pdf", "application/pdf", PDF_BYTES))
        mock_payload_storage.download_file.return_value = None

        assert await file_service.get_file(stored_file.file_id) is None

    @pytest.mark.asyncio
    async def test_failed_metadata_insert_removes_written_file(self, mock_payload_storage):
        repository = AsyncMock(spec=FileRepositoryInterface)
        repository.insert_file.side_effect = StorageException("database unavailable")
        service = FileService(file_repository=repository, storage_mode="disk", payload_storage=mock_payload_storage)

        with pytest.raises(StorageException):
            await service.handle_upload(UploadedFileDTO("report.pdf", "application/pdf", PDF_BYTES))

        blob_name = mock_payload_storage.upload_file_as_bytes.call_args[0][1]
        mock_payload_storage.delete_file.assert_called_once_with(blob_name)

    def test_disk_mode_requires_payload_storage(self):
        with pytest.raises(ValueError):
            FileService(file_repository=InMemoryFileRepository(), storage_mode="disk")
