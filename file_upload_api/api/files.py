"""
File endpoints: upload form and listing, upload, and retrieval by id.
"""
import os
import traceback
from urllib.parse import quote

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates

from file_upload_api.api.upload_pipeline import read_upload
from file_upload_api.application.interfaces.di_container import DIContainer, get_container, get_file_service
from file_upload_api.application.services.file_service import FileService
from file_upload_api.domain.uploaded_file_dto import UploadedFileDTO
from shared.utils.exceptions import StorageException
from shared.utils.logging_config import get_logger

logger = get_logger(__name__)

SERVER_ERROR_MESSAGE = "Internal server error"
NOT_FOUND_MESSAGE = "File not found"

TEMPLATES_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "templates")
templates = Jinja2Templates(directory=TEMPLATES_DIR)


def filesize(num_bytes: int) -> str:
    """Human readable size: 1536 -> '1.5 KB'."""
    size = float(num_bytes or 0)
    for unit in ("B", "KB", "MB"):
        if size < 1024 or unit == "MB":
            return f"{int(size)} {unit}" if unit == "B" else f"{size:.1f} {unit}"
        size /= 1024

templates.env.filters["filesize"] = filesize

router = APIRouter(
    responses={
        404: {"description": "File not found"},
        500: {"description": "Internal server error"}
    }
)


@router.get("/", response_class=HTMLResponse, name="index")
async def index(request: Request,
                container: DIContainer = Depends(get_container),
                file_service: FileService = Depends(get_file_service)):
    """Upload form plus the list of stored files, newest first."""
    list_error = False
    try:
        files = await file_service.list_files()
    except Exception as e:
        logger.error(f"Error listing files: {e}")
        files = []
        list_error = True

    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "title": container.settings.api_title,
            "field_name": container.settings.upload_field_name,
            "files": files,
            "list_error": list_error,
        }
    )


@router.post("/upload")
async def upload(request: Request,
                 uploaded_file: UploadedFileDTO = Depends(read_upload),
                 container: DIContainer = Depends(get_container),
                 file_service: FileService = Depends(get_file_service)):
    """Store an uploaded PDF. Blob mode redirects to the list, disk mode confirms in HTML."""
    try:
        logger.info(f"upload endpoint called for file '{uploaded_file.file_name}'")
        stored_file = await file_service.handle_upload(uploaded_file)
    except StorageException as e:
        logger.error(f"Error storing upload '{uploaded_file.file_name}': {e}")
        return PlainTextResponse(SERVER_ERROR_MESSAGE, status_code=500)
    except Exception as e:
        logger.error(f"Unexpected error storing upload '{uploaded_file.file_name}': {e}")
        traceback.print_exc()
        return PlainTextResponse(SERVER_ERROR_MESSAGE, status_code=500)

    if file_service.is_disk_mode:
        return templates.TemplateResponse(
            request,
            "upload_success.html",
            {"title": container.settings.api_title, "file": stored_file}
        )
    return RedirectResponse(url="/", status_code=303)


@router.get("/file/{file_id}")
async def get_file(file_id: str, file_service: FileService = Depends(get_file_service)):
    """Return the raw bytes of a stored file with its recorded content type."""
    try:
        stored_file = await file_service.get_file(file_id)
    except Exception as e:
        logger.error(f"Error retrieving file {file_id}: {e}")
        return PlainTextResponse(SERVER_ERROR_MESSAGE, status_code=500)

    if stored_file is None:
        return PlainTextResponse(NOT_FOUND_MESSAGE, status_code=404)

    return Response(
        content=stored_file.data,
        media_type=stored_file.content_type,
        headers={
            "Content-Disposition": f"inline; filename*=UTF-8''{quote(stored_file.original_name)}",
        }
    )
