"""
Upload pipeline.

Ordered FastAPI dependencies that turn the multipart request into an
UploadedFileDTO. Each stage either passes its result on or short-circuits by
raising a FileUploadException, which the registered handlers turn into a
plain-text error response.
"""
from fastapi import Depends, Request
from starlette.datastructures import UploadFile

from file_upload_api.application.interfaces.di_container import DIContainer, get_container
from file_upload_api.domain.uploaded_file_dto import UploadedFileDTO
from shared.utils.exceptions import InvalidFileTypeException, MissingFileException
from shared.utils.logging_config import get_logger

logger = get_logger(__name__)

MISSING_FILE_MESSAGE = "Please choose a PDF file to upload."


async def require_file(request: Request, container: DIContainer = Depends(get_container)) -> UploadFile:
    """Stage 1: the form must carry a named file."""
    form = await request.form()
    return ensure_upload(form.get(container.settings.upload_field_name))


def ensure_upload(value) -> UploadFile:
    """Plain text values and blank filenames count as no file at all."""
    if not isinstance(value, UploadFile) or not value.filename or not value.filename.strip():
        logger.warning("Upload request without a file")
        raise MissingFileException(MISSING_FILE_MESSAGE)
    return value


async def require_pdf(upload: UploadFile = Depends(require_file),
                      container: DIContainer = Depends(get_container)) -> UploadFile:
    """Stage 2: only accepted content types go through."""
    content_type = normalize_content_type(upload.content_type)
    if content_type not in container.settings.allowed_content_types:
        logger.warning(f"Rejected upload '{upload.filename}' with content type '{upload.content_type}'")
        raise InvalidFileTypeException(f"Only PDF files are accepted, got '{upload.content_type or 'unknown'}'.")
    return upload


async def read_upload(upload: UploadFile = Depends(require_pdf)) -> UploadedFileDTO:
    """Stage 3: buffer the file in memory, keeping the content type as sent."""
    try:
        file_content = await upload.read()
    finally:
        await upload.close()
    return UploadedFileDTO(upload.filename, upload.content_type, file_content)


def normalize_content_type(content_type: str | None) -> str:
    """Strip parameters and case from a MIME type: 'Application/PDF; x=y' -> 'application/pdf'."""
    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip().lower()
