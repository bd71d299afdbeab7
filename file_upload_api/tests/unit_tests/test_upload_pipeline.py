import io

import pytest
from starlette.datastructures import Headers, UploadFile

from file_upload_api.api.upload_pipeline import ensure_upload, normalize_content_type, read_upload, require_pdf
from file_upload_api.application.interfaces.di_container import DIContainer
from shared.config.settings import Settings
from shared.utils.exceptions import InvalidFileTypeException, MissingFileException


def make_upload(filename: str, content: bytes, content_type: str) -> UploadFile:
    return UploadFile(
        file=io.BytesIO(content),
        filename=filename,
        headers=Headers({"content-type": content_type})
    )


class TestUploadPipeline:

    @pytest.fixture
    def container(self):
        return DIContainer(Settings(repository_type="in_memory", storage_mode="blob"))

    @pytest.mark.parametrize("value, expected", [
        ("application/pdf", "application/pdf"),
        ("Application/PDF; name=x.pdf", "application/pdf"),
        (None, ""),
        ("", ""),
    ])
    def test_normalize_content_type(self, value, expected):
        assert normalize_content_type(value) == expected

    def test_ensure_upload_without_upload(self):
        with pytest.raises(MissingFileException):
            ensure_upload(None)

    def test_ensure_upload_with_text_value(self):
        with pytest.raises(MissingFileException):
            ensure_upload("not a file")

    @pytest.mark.parametrize("filename", ["", "   "])
    def test_ensure_upload_with_blank_filename(self, filename):
        with pytest.raises(MissingFileException):
            ensure_upload(make_upload(filename, b"%PDF-1.4", "application/pdf"))

    @pytest.mark.asyncio
    async def test_require_pdf_rejects_other_types(self, container):
        upload = make_upload("photo.png", b"\x89PNG", "image/png")
        with pytest.raises(InvalidFileTypeException):
            await require_pdf(upload, container)

    @pytest.mark.asyncio
    async def test_full_pipeline_buffers_pdf(self, container):
        upload = ensure_upload(make_upload("report.pdf", b"%PDF-1.7", "application/pdf; charset=binary"))
        upload = await require_pdf(upload, container)

        uploaded_file = await read_upload(upload)

        assert uploaded_file.file_name == "report.pdf"
        assert uploaded_file.content_type == "application/pdf; charset=binary"
        assert uploaded_file.file_content == b"%PDF-1.7"
        assert uploaded_file.size == 8
