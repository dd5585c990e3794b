"""
File Processor - Scan a directory tree for source files.

Walks an extracted archive or cloned repository and reads every file
with a supported extension, skipping dependency/build directories,
hidden paths, oversized files and files that are empty.
"""
import os
from dataclasses import dataclass, field
from pathlib import Path, PurePath
from typing import List, Optional

from repomind.core.config import get_settings
from repomind.core.logging_config import get_logger

logger = get_logger(__name__)

# Supported code file extensions
CODE_EXTENSIONS = {
    ".js": "javascript",
    ".jsx": "javascript",
    ".ts": "typescript",
    ".tsx": "typescript",
    ".py": "python",
    ".java": "java",
    ".cpp": "cpp",
    ".c": "c",
    ".cs": "csharp",
    ".go": "go",
    ".rs": "rust",
    ".php": "php",
    ".rb": "ruby",
    ".swift": "swift",
    ".kt": "kotlin",
    ".scala": "scala",
    ".html": "html",
    ".css": "css",
    ".scss": "scss",
    ".json": "json",
    ".xml": "xml",
    ".yaml": "yaml",
    ".yml": "yaml",
    ".md": "markdown",
    ".sql": "sql",
    ".sh": "bash",
    ".vue": "vue",
    ".dart": "dart",
}

# Directories to ignore
IGNORE_DIRS = frozenset({
    "node_modules",
    ".git",
    ".svn",
    ".hg",
    "dist",
    "build",
    "out",
    "target",
    "bin",
    "obj",
    ".next",
    ".nuxt",
    "coverage",
    "__pycache__",
    ".pytest_cache",
    "venv",
    "env",
    ".venv",
    ".idea",
    ".vscode",
    "vendor",
})


@dataclass
class SourceFile:
    """A source file read from disk."""
    relative_path: str  # POSIX-style, relative to the scanned root
    content: str
    language: str
    size: int  # bytes on disk


@dataclass
class ProcessResult:
    """Files found under a root plus their combined size."""
    files: List[SourceFile] = field(default_factory=list)
    total_size: int = 0

    def with_prefix(self, prefix: str) -> "ProcessResult":
        """Copy of this result with every path placed under `prefix/`."""
        return ProcessResult(
            files=[
                SourceFile(
                    relative_path=f"{prefix}/{f.relative_path}",
                    content=f.content,
                    language=f.language,
                    size=f.size,
                )
                for f in self.files
            ],
            total_size=self.total_size,
        )


def get_language_from_filename(filename: str) -> str:
    """Language for a filename, or 'text' for unknown extensions."""
    return CODE_EXTENSIONS.get(PurePath(filename).suffix.lower(), "text")


def _is_hidden_or_ignored(part: str) -> bool:
    return part in IGNORE_DIRS or part.startswith(".")


def should_process_file(file_path: str) -> bool:
    """
    Check if a file should be processed.

    The extension must be supported and no directory on the path
    may be an ignored or hidden directory.
    """
    path = PurePath(file_path.replace("\\", "/"))

    if path.suffix.lower() not in CODE_EXTENSIONS:
        return False

    return not any(_is_hidden_or_ignored(part) for part in path.parts[:-1])


def process_code_files(root: Path, max_file_size: Optional[int] = None) -> ProcessResult:
    """
    Process all code files in a directory.

    Unreadable files are logged and skipped; processing continues.

    Args:
        root: Directory to scan
        max_file_size: Skip files larger than this many bytes
            (defaults to MAX_SOURCE_FILE_SIZE)

    Returns:
        ProcessResult with files sorted by relative path
    """
    root = Path(root)
    if max_file_size is None:
        max_file_size = get_settings().max_source_file_size

    result = ProcessResult()
    skipped_large = 0

    for dirpath, dirnames, filenames in os.walk(root):
        # Prune in place so os.walk never descends into ignored directories
        dirnames[:] = sorted(d for d in dirnames if not _is_hidden_or_ignored(d))

        for filename in sorted(filenames):
            if filename.startswith("."):
                continue

            full_path = Path(dirpath) / filename
            relative_path = full_path.relative_to(root).as_posix()

            if not should_process_file(relative_path):
                continue

            try:
                size = full_path.stat().st_size

                if size > max_file_size:
                    skipped_large += 1
                    continue

                content = full_path.read_text(encoding="utf-8", errors="replace")

                if not content.strip():
                    continue

                result.files.append(SourceFile(
                    relative_path=relative_path,
                    content=content,
                    language=get_language_from_filename(filename),
                    size=size,
                ))
                result.total_size += size

            except OSError as e:
                logger.error(f"Error processing file {relative_path}: {e}")

    result.files.sort(key=lambda f: f.relative_path)

    logger.info(
        f"Processed {root}: files={len(result.files)}, "
        f"total_size={result.total_size}, skipped_large={skipped_large}"
    )
    return result
