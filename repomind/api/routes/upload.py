"""
Upload Routes - create a codebase from a ZIP archive or GitHub.

Endpoints:
- POST /api/upload/zip: multipart ZIP upload
- POST /api/upload/github: shallow clone of one repository
- POST /api/upload/github-split: frontend + backend repositories as one codebase
"""
import asyncio
import uuid
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile

from repomind.api.dependencies import get_ingestion_service
from repomind.core.config import get_settings
from repomind.core.exceptions import FileTooLargeError, ValidationError
from repomind.core.logging_config import get_logger
from repomind.core.validators import validate_github_url
from repomind.ingestion import is_zip_upload, safe_rmtree
from repomind.models import (
    ErrorResponse,
    GithubSplitUploadRequest,
    GithubUploadRequest,
    UploadResponse,
)
from repomind.services import IngestionResult, IngestionService

logger = get_logger(__name__)

router = APIRouter(
    prefix="/api/upload",
    tags=["Upload"],
    responses={
        400: {"model": ErrorResponse, "description": "Invalid upload"},
        500: {"model": ErrorResponse, "description": "Internal server error"}
    }
)

CHUNK_SIZE = 1024 * 1024


def _to_response(result: IngestionResult, message: str) -> UploadResponse:
    return UploadResponse(
        codebase_id=result.codebase_id,
        name=result.name,
        file_count=result.file_count,
        total_size=result.total_size,
        frontend_file_count=result.frontend_file_count,
        backend_file_count=result.backend_file_count,
        message=message,
    )


async def _save_upload(file: UploadFile, upload_dir: Path, max_bytes: int) -> Path:
    """
    Stream an upload to disk, enforcing the size limit.

    Raises:
        FileTooLargeError: If the upload exceeds max_bytes
    """
    upload_dir.mkdir(parents=True, exist_ok=True)
    archive_path = upload_dir / f"{uuid.uuid4()}-{Path(file.filename or 'upload.zip').name}"

    written = 0
    try:
        with open(archive_path, "wb") as buffer:
            while True:
                chunk = await file.read(CHUNK_SIZE)
                if not chunk:
                    break
                written += len(chunk)
                if written > max_bytes:
                    raise FileTooLargeError(max_bytes)
                buffer.write(chunk)
    except FileTooLargeError:
        safe_rmtree(archive_path)
        raise

    logger.debug(f"Saved upload to {archive_path} ({written} bytes)")
    return archive_path


@router.post(
    "/zip",
    response_model=UploadResponse,
    response_model_exclude_none=True,
    summary="Upload a ZIP archive",
    description="""
    Upload a ZIP archive of a codebase as multipart field `file`.

    Supported source files are extracted and stored; dependency and
    build directories (node_modules, dist, .git, ...) are skipped.
    """
)
async def upload_zip(
    file: Optional[UploadFile] = File(default=None, description="ZIP archive"),
    service: IngestionService = Depends(get_ingestion_service),
) -> UploadResponse:
    """Store a codebase from an uploaded ZIP archive."""
    if file is None or not file.filename:
        raise ValidationError("No file uploaded", field="file")

    if not is_zip_upload(file.filename, file.content_type):
        raise ValidationError("Only ZIP files are allowed", field="file")

    settings = get_settings()
    logger.info(f"ZIP upload received: {file.filename}")

    try:
        archive_path = await _save_upload(file, service.upload_dir, settings.max_upload_size)
    finally:
        await file.close()

    # ingest_zip removes the archive and the extracted tree
    result = await asyncio.to_thread(service.ingest_zip, archive_path, file.filename)

    return _to_response(result, "Codebase uploaded successfully")


@router.post(
    "/github",
    response_model=UploadResponse,
    response_model_exclude_none=True,
    summary="Clone a GitHub repository",
    description="Shallow-clone a public GitHub repository and store its source files."
)
async def upload_github(
    request: GithubUploadRequest,
    service: IngestionService = Depends(get_ingestion_service),
) -> UploadResponse:
    """Store a codebase from a public GitHub repository."""
    is_valid, error = validate_github_url(request.repo_url)
    if not is_valid:
        raise ValidationError(error, field="repoUrl")

    logger.info(f"GitHub import requested: {request.repo_url}")

    result = await asyncio.to_thread(service.ingest_github, request.repo_url)

    return _to_response(result, "GitHub repository cloned successfully")


@router.post(
    "/github-split",
    response_model=UploadResponse,
    response_model_exclude_none=True,
    summary="Clone a frontend and a backend repository as one codebase",
    description="""
    Clone two repositories concurrently and merge them into a single
    codebase. Paths are prefixed with `frontend/` and `backend/`.
    """
)
async def upload_github_split(
    request: GithubSplitUploadRequest,
    service: IngestionService = Depends(get_ingestion_service),
) -> UploadResponse:
    """Store a split frontend/backend codebase."""
    if not request.frontend_url or not request.backend_url:
        raise ValidationError("Both frontendUrl and backendUrl are required")

    if not validate_github_url(request.frontend_url)[0]:
        raise ValidationError("Invalid frontend GitHub URL", field="frontendUrl")
    if not validate_github_url(request.backend_url)[0]:
        raise ValidationError("Invalid backend GitHub URL", field="backendUrl")

    logger.info(f"Split import requested: {request.frontend_url} + {request.backend_url}")

    result = await asyncio.to_thread(
        service.ingest_github_split, request.frontend_url, request.backend_url
    )

    return _to_response(result, "Both repositories scanned and merged successfully")
