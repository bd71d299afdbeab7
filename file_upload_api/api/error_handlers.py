"""
Exception handlers mapping upload errors to plain-text responses.
"""
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from shared.utils.exceptions import (
    FileNotFoundException,
    FileUploadException,
    InvalidFileTypeException,
    MissingFileException,
)
from shared.utils.logging_config import get_logger

logger = get_logger(__name__)

SERVER_ERROR_MESSAGE = "Internal server error"

STATUS_CODES = {
    MissingFileException: 400,
    InvalidFileTypeException: 400,
    FileNotFoundException: 404,
}


async def file_upload_exception_handler(request: Request, exc: FileUploadException) -> PlainTextResponse:
    status_code = next((code for exc_type, code in STATUS_CODES.items() if isinstance(exc, exc_type)), 500)
    logger.warning(f"{request.method} {request.url.path} failed with {status_code}: {exc}")

    # Client errors carry a readable message, server errors stay generic
    message = str(exc) if status_code < 500 else SERVER_ERROR_MESSAGE
    return PlainTextResponse(message, status_code=status_code)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(FileUploadException, file_upload_exception_handler)
