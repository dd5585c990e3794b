"""
Custom Exceptions - Application-specific error classes.

This module defines a hierarchy of exceptions for clean error handling:
- Each exception has a status code and error code
- Used by the API layer for consistent error responses
- No stack traces leaked in production
"""
from typing import Optional


class RepoMindException(Exception):
    """
    Base exception for all RepoMind errors.

    Subclass this for specific error types.
    """
    status_code: int = 500
    error_code: str = "internal_error"

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        """Convert to error response dict."""
        return {
            "success": False,
            "error": self.message,
            "code": self.error_code,
            "details": self.details
        }


class ValidationError(RepoMindException):
    """Raised when input validation fails."""
    status_code = 400
    error_code = "validation_error"

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, details=f"field={field}" if field else None)
        self.field = field


class UploadError(RepoMindException):
    """Raised when an archive or repository cannot be ingested."""
    status_code = 400
    error_code = "upload_error"


class FileTooLargeError(RepoMindException):
    """Raised when an uploaded archive exceeds the configured limit."""
    status_code = 413
    error_code = "file_too_large"

    def __init__(self, max_bytes: int):
        super().__init__(
            message=f"File too large. Maximum upload size is {max_bytes // (1024 * 1024)} MB",
            details=f"max_bytes={max_bytes}"
        )
        self.max_bytes = max_bytes


class CodebaseNotFoundError(RepoMindException):
    """Raised when a codebase (or its files) cannot be found."""
    status_code = 404
    error_code = "codebase_not_found"

    def __init__(self, message: str = "Codebase not found", codebase_id: Optional[str] = None):
        super().__init__(
            message,
            details=f"codebase_id={codebase_id}" if codebase_id else None
        )
        self.codebase_id = codebase_id


class DatabaseError(RepoMindException):
    """Raised when database operations fail."""
    status_code = 503
    error_code = "database_error"

    def __init__(self, message: str = "Database operation failed"):
        super().__init__(message)


class LLMError(RepoMindException):
    """
    Raised when LLM API calls fail.

    Wraps provider errors, missing API keys and unparseable
    responses into a single type for the service layer.
    """
    status_code = 503
    error_code = "llm_error"

    def __init__(self, message: str = "LLM service unavailable"):
        super().__init__(message)
