"""
Models module - Pydantic schemas for data validation.

This module defines:
- Request models: Input validation for API endpoints
- Response models: Output formatting for API responses
"""
from repomind.models.codebase import (
    AskRequest,
    AskResponse,
    CodebaseListResponse,
    CodebaseRecord,
    ErrorResponse,
    GithubSplitUploadRequest,
    GithubUploadRequest,
    HealthResponse,
    HistoryResponse,
    MessageResponse,
    QuestionRecord,
    RefactorRequest,
    RefactorResponse,
    UploadResponse,
)

__all__ = [
    "AskRequest",
    "AskResponse",
    "CodebaseListResponse",
    "CodebaseRecord",
    "ErrorResponse",
    "GithubSplitUploadRequest",
    "GithubUploadRequest",
    "HealthResponse",
    "HistoryResponse",
    "MessageResponse",
    "QuestionRecord",
    "RefactorRequest",
    "RefactorResponse",
    "UploadResponse",
]
