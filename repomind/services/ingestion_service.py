"""
Ingestion Service - store a codebase from a ZIP upload or GitHub.

This service handles the complete flow:
1. Obtain a working tree (extract archive / shallow clone)
2. Scan it for source files
3. Store the codebase record and its files
4. Record file count and total size
5. Remove the scratch directory
"""
import uuid
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from repomind.core.config import get_settings
from repomind.core.exceptions import UploadError
from repomind.core.logging_config import LoggerMixin
from repomind.database import CodebaseRepository
from repomind.ingestion import (
    ProcessResult,
    clone_repository,
    extract_zip,
    process_code_files,
    repo_name_from_url,
    safe_rmtree,
)


@dataclass
class IngestionResult:
    """Summary of a stored codebase."""
    codebase_id: str
    name: str
    source: str
    file_count: int
    total_size: int
    frontend_file_count: Optional[int] = None
    backend_file_count: Optional[int] = None


class IngestionService(LoggerMixin):
    """
    Creates codebases from uploads and repositories.

    Example:
        >>> service = IngestionService()
        >>> result = service.ingest_github("https://github.com/acme/widget")
        >>> result.file_count
        42
    """

    def __init__(self, repository: Optional[CodebaseRepository] = None, upload_dir: Optional[Path] = None):
        self.repository = repository or CodebaseRepository()
        self.upload_dir = Path(upload_dir or get_settings().upload_dir)
        self.upload_dir.mkdir(parents=True, exist_ok=True)

    def new_workspace(self) -> tuple[str, Path]:
        """Fresh codebase id and its scratch directory path."""
        codebase_id = str(uuid.uuid4())
        return codebase_id, self.upload_dir / codebase_id

    def ingest_zip(self, archive_path: Path, original_name: str) -> IngestionResult:
        """
        Extract an uploaded archive and store its source files.

        The archive and the extracted tree are removed afterwards.

        Raises:
            UploadError: If the archive cannot be extracted
        """
        codebase_id, workspace = self.new_workspace()

        try:
            extract_zip(Path(archive_path), workspace)
            result = process_code_files(workspace)
            return self._store(codebase_id, original_name, "upload", result)
        finally:
            safe_rmtree(workspace)
            safe_rmtree(Path(archive_path))

    def ingest_github(self, repo_url: str) -> IngestionResult:
        """
        Shallow-clone a repository and store its source files.

        Raises:
            UploadError: If the URL is invalid or cloning fails
        """
        codebase_id, workspace = self.new_workspace()

        try:
            clone_repository(repo_url, workspace)
            result = process_code_files(workspace)
            return self._store(codebase_id, repo_name_from_url(repo_url), "github", result)
        finally:
            safe_rmtree(workspace)

    def ingest_github_split(self, frontend_url: str, backend_url: str) -> IngestionResult:
        """
        Clone a frontend and a backend repository into one codebase.

        Paths are prefixed with 'frontend/' and 'backend/'.

        Raises:
            UploadError: If either clone fails or neither repo has code files
        """
        codebase_id, workspace = self.new_workspace()
        frontend_path = workspace / "frontend"
        backend_path = workspace / "backend"
        workspace.mkdir(parents=True, exist_ok=True)

        try:
            # Separate git processes, cloned concurrently
            with ThreadPoolExecutor(max_workers=2, thread_name_prefix="clone") as pool:
                frontend_job = pool.submit(clone_repository, frontend_url, frontend_path)
                backend_job = pool.submit(clone_repository, backend_url, backend_path)
                self._wait_clone(frontend_job, "Frontend")
                self._wait_clone(backend_job, "Backend")

            frontend = process_code_files(frontend_path).with_prefix("frontend")
            backend = process_code_files(backend_path).with_prefix("backend")

            if not frontend.files and not backend.files:
                raise UploadError(
                    "No processable code files found in either repository. "
                    "Make sure the repos are not empty and contain supported code files."
                )

            combined = ProcessResult(
                files=frontend.files + backend.files,
                total_size=frontend.total_size + backend.total_size,
            )
            name = f"{repo_name_from_url(frontend_url)} + {repo_name_from_url(backend_url)} (split)"

            result = self._store(codebase_id, name, "github-split", combined)
            result.frontend_file_count = len(frontend.files)
            result.backend_file_count = len(backend.files)
            return result
        finally:
            safe_rmtree(workspace)

    @staticmethod
    def _wait_clone(job, label: str) -> None:
        try:
            job.result()
        except UploadError as e:
            raise UploadError(f"{label} clone failed: {e.message}", details=e.details) from e

    def _store(self, codebase_id: str, name: str, source: str, result: ProcessResult) -> IngestionResult:
        """Persist the codebase record, its files and stats in one transaction."""
        record = self.repository.store_codebase(
            codebase_id, name, source, result.files, result.total_size
        )
        stored = record["file_count"]

        self.logger.info(
            f"Stored codebase {codebase_id}: name={name}, source={source}, "
            f"files={stored}, total_size={result.total_size}"
        )

        return IngestionResult(
            codebase_id=codebase_id,
            name=name,
            source=source,
            file_count=stored,
            total_size=result.total_size,
        )
