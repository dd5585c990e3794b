"""
Ingestion module - turn an upload or a GitHub URL into source files.

- file_processor.py : directory scan, language detection, filtering
- sources.py        : ZIP extraction, git cloning, scratch cleanup
"""
from repomind.ingestion.file_processor import (
    CODE_EXTENSIONS,
    IGNORE_DIRS,
    ProcessResult,
    SourceFile,
    get_language_from_filename,
    process_code_files,
    should_process_file,
)
from repomind.ingestion.sources import (
    clone_repository,
    extract_zip,
    is_zip_upload,
    repo_name_from_url,
    safe_rmtree,
)

__all__ = [
    "CODE_EXTENSIONS",
    "IGNORE_DIRS",
    "ProcessResult",
    "SourceFile",
    "get_language_from_filename",
    "process_code_files",
    "should_process_file",
    "clone_repository",
    "extract_zip",
    "is_zip_upload",
    "repo_name_from_url",
    "safe_rmtree",
]
