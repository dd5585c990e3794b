"""
History Routes - question history and codebase sessions.

Endpoints:
- GET /api/history: all codebases, newest first
- GET /api/history/{codebase_id}: recent or searched questions
- DELETE /api/history/{codebase_id}: delete a codebase with its files and questions
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from repomind.api.dependencies import get_repository
from repomind.core.exceptions import CodebaseNotFoundError
from repomind.core.logging_config import get_logger
from repomind.database import CodebaseRepository
from repomind.models import CodebaseListResponse, HistoryResponse, MessageResponse

logger = get_logger(__name__)

router = APIRouter(prefix="/api/history", tags=["History"])

DEFAULT_HISTORY_LIMIT = 10


@router.get(
    "",
    response_model=CodebaseListResponse,
    summary="List codebases",
    description="All stored codebases, newest first."
)
async def list_codebases(
    repository: CodebaseRepository = Depends(get_repository),
) -> CodebaseListResponse:
    codebases = repository.get_all_codebases()
    return CodebaseListResponse(codebases=codebases)


@router.get(
    "/{codebase_id}",
    response_model=HistoryResponse,
    summary="Question history for a codebase",
    description="""
    Returns the most recent questions for a codebase.

    - `search`: case-insensitive match against question and answer text
    - `limit`: number of questions when not searching (default 10)
    """
)
async def get_history(
    codebase_id: str,
    search: Optional[str] = Query(default=None, description="Search term"),
    limit: Optional[str] = Query(default=None, description="Maximum questions to return"),
    repository: CodebaseRepository = Depends(get_repository),
) -> HistoryResponse:
    """Get Q&A history for a codebase."""
    if search:
        questions = repository.search_questions(codebase_id, search)
    else:
        questions = repository.get_recent_questions(codebase_id, _parse_limit(limit))

    logger.debug(f"History for {codebase_id[:8]}...: {len(questions)} questions")

    return HistoryResponse(questions=questions, count=len(questions))


@router.delete(
    "/{codebase_id}",
    response_model=MessageResponse,
    summary="Delete a codebase session",
    description="Deletes the codebase together with its stored files and questions."
)
async def delete_history(
    codebase_id: str,
    repository: CodebaseRepository = Depends(get_repository),
) -> MessageResponse:
    if not repository.delete_codebase(codebase_id):
        raise CodebaseNotFoundError("Session not found", codebase_id=codebase_id)

    return MessageResponse(message="Session deleted successfully")


def _parse_limit(raw: Optional[str]) -> int:
    """Positive integer limit; anything else falls back to the default."""
    try:
        value = int(raw) if raw is not None else 0
    except ValueError:
        return DEFAULT_HISTORY_LIMIT
    return value if value > 0 else DEFAULT_HISTORY_LIMIT
