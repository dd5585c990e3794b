"""
Codebase Sources - obtain a working tree from a ZIP archive or GitHub.

Every function here works on a scratch directory under UPLOAD_DIR;
the caller removes it with safe_rmtree() once files are stored.
"""
import shutil
import zipfile
from pathlib import Path

from git import GitCommandError, Repo

from repomind.core.exceptions import UploadError
from repomind.core.logging_config import get_logger
from repomind.core.validators import validate_github_url

logger = get_logger(__name__)

ZIP_MIME_TYPES = ("application/zip", "application/x-zip-compressed")


def is_zip_upload(filename: str | None, content_type: str | None) -> bool:
    """Accept by mime type or by a .zip filename."""
    if content_type in ZIP_MIME_TYPES:
        return True
    return bool(filename) and filename.lower().endswith(".zip")


def extract_zip(archive_path: Path, destination: Path) -> Path:
    """
    Extract a ZIP archive.

    zipfile.extractall drops absolute paths and '..' components,
    so members cannot escape the destination.

    Raises:
        UploadError: If the archive is corrupt or not a ZIP file
    """
    try:
        with zipfile.ZipFile(archive_path) as archive:
            archive.extractall(destination)
    except (zipfile.BadZipFile, zipfile.LargeZipFile, OSError, ValueError) as e:
        logger.warning(f"Failed to extract {archive_path.name}: {e}")
        raise UploadError("Failed to extract ZIP file. File may be corrupted.") from e

    logger.info(f"Extracted {archive_path.name} to {destination}")
    return destination


def repo_name_from_url(repo_url: str) -> str:
    """'https://github.com/acme/widget.git/' -> 'widget'"""
    name = repo_url.rstrip("/").split("/")[-1]
    if name.endswith(".git"):
        name = name[:-4]
    return name


def clone_repository(repo_url: str, destination: Path) -> Path:
    """
    Shallow-clone a public GitHub repository.

    Raises:
        UploadError: If the URL is invalid or the clone fails
    """
    is_valid, error = validate_github_url(repo_url)
    if not is_valid:
        raise UploadError(error)

    try:
        Repo.clone_from(repo_url, destination, depth=1, single_branch=True)
    except GitCommandError as e:
        logger.warning(f"Clone failed for {repo_url}: {e.stderr.strip() if e.stderr else e}")
        raise UploadError(
            "Failed to clone repository. It may be private or not exist.",
            details=repo_url
        ) from e

    logger.info(f"Cloned {repo_url} into {destination}")
    return destination


def safe_rmtree(path: Path) -> None:
    """Remove a directory or file, logging instead of raising."""
    path = Path(path)
    try:
        if path.is_dir():
            shutil.rmtree(path)
        elif path.exists():
            path.unlink()
    except OSError as e:
        logger.warning(f"Could not fully remove {path}: {e}")
