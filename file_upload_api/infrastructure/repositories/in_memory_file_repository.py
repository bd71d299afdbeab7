import dataclasses
import uuid

from shared.models.stored_file import StoredFile
from file_upload_api.application.interfaces.service_interfaces import FileRepositoryInterface


class InMemoryFileRepository(FileRepositoryInterface):
    """In-memory implementation of the file repository."""
    def __init__(self):
        self._files: dict[str, StoredFile] = {}

    async def insert_file(self, stored_file: StoredFile) -> str:
        file_id = uuid.uuid4().hex[:24]
        stored_file.file_id = file_id
        self._files[file_id] = dataclasses.replace(stored_file)
        return file_id

    async def get_file(self, file_id: str) -> StoredFile | None:
        stored_file = self._files.get(file_id)
        return dataclasses.replace(stored_file) if stored_file else None

    async def list_files(self) -> list[StoredFile]:
        # reversed() first so that, on equal timestamps, later inserts still come first
        newest_first = sorted(reversed(list(self._files.values())), key=lambda f: f.upload_date, reverse=True)
        return [dataclasses.replace(f, data=None) for f in newest_first]

    async def ping(self) -> bool:
        return True

    async def close(self) -> None:
        self._files.clear()
