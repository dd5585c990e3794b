"""
Request and Response models for the RepoMind API.

These Pydantic models define the contract between client and server.
Request and response bodies use camelCase on the wire (codebaseId,
fileCount, ...); snake_case names are accepted on input as well.
Stored history records keep their snake_case column names.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base model serializing field names as camelCase."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================
# Requests
# ============================================================

class GithubUploadRequest(ApiModel):
    """Body of POST /api/upload/github."""
    repo_url: Optional[str] = Field(
        default=None,
        description="Public GitHub repository URL",
        examples=["https://github.com/tiangolo/fastapi"]
    )


class GithubSplitUploadRequest(ApiModel):
    """Body of POST /api/upload/github-split."""
    frontend_url: Optional[str] = Field(default=None, description="Frontend repository URL")
    backend_url: Optional[str] = Field(default=None, description="Backend repository URL")


class AskRequest(ApiModel):
    """
    Body of POST /api/question/ask.

    Attributes:
        codebase_id: Id returned by an upload endpoint
        question: Natural-language question (at least 5 characters)
        tags: Optional labels attached to the stored question
    """
    codebase_id: Optional[str] = Field(default=None, description="Codebase identifier")
    question: Optional[str] = Field(
        default=None,
        description="Question about the codebase",
        examples=["Where is the database connection configured?"]
    )
    tags: Optional[Any] = Field(default=None, description="List of tag strings")


class RefactorRequest(ApiModel):
    """Body of POST /api/refactor."""
    code: Optional[str] = Field(default=None, description="Code snippet to review")
    language: Optional[str] = Field(default=None, description="Programming language", examples=["python"])


# ============================================================
# Responses
# ============================================================

class UploadResponse(ApiModel):
    """Result of any upload endpoint."""
    success: bool = True
    codebase_id: str
    name: str
    file_count: int
    total_size: int
    frontend_file_count: Optional[int] = None
    backend_file_count: Optional[int] = None
    message: str


class AskResponse(ApiModel):
    """Answer to a codebase question."""
    success: bool = True
    question_id: int
    answer: str
    mermaid_code: Optional[str] = None
    file_references: List[Dict[str, Any]] = Field(default_factory=list)
    message: str = "Question answered successfully"


class QuestionRecord(BaseModel):
    """Stored question as returned by the history endpoints."""
    id: int
    codebase_id: str
    question: str
    answer: str
    file_references: List[Any] = Field(default_factory=list)
    mermaid_code: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    created_at: Optional[datetime] = None


class CodebaseRecord(BaseModel):
    """Stored codebase as returned by GET /api/history."""
    id: str
    name: str
    source: str
    file_count: int = 0
    total_size: int = 0
    created_at: Optional[datetime] = None


class HistoryResponse(ApiModel):
    """Questions for one codebase."""
    success: bool = True
    questions: List[QuestionRecord]
    count: int


class CodebaseListResponse(ApiModel):
    success: bool = True
    codebases: List[CodebaseRecord]


class MessageResponse(ApiModel):
    success: bool = True
    message: str


class RefactorResponse(ApiModel):
    """Refactoring suggestions ({title, description, priority, category})."""
    success: bool = True
    suggestions: List[Dict[str, Any]]


class HealthResponse(BaseModel):
    """Response model for the /api/health endpoint."""
    status: str = Field(default="ok", description="'ok' or 'degraded'")
    timestamp: datetime = Field(default_factory=datetime.utcnow)
    version: str
    database: Dict[str, Any] = Field(default_factory=dict)
    ai: Dict[str, Any] = Field(default_factory=dict)
    system: Dict[str, Any] = Field(default_factory=dict)
    stats: Dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Standard error response model."""
    success: bool = False
    error: str
    code: str
    details: Optional[str] = None
