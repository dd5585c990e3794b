"""
Question Routes - ask natural-language questions about a codebase.
"""
import asyncio

from fastapi import APIRouter, Depends

from repomind.api.dependencies import get_question_service
from repomind.core.exceptions import ValidationError
from repomind.core.logging_config import get_logger
from repomind.core.validators import validate_question
from repomind.models import AskRequest, AskResponse, ErrorResponse
from repomind.services import QuestionService

logger = get_logger(__name__)

router = APIRouter(
    prefix="/api/question",
    tags=["Question"],
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request"},
        404: {"model": ErrorResponse, "description": "Codebase has no files"},
        503: {"model": ErrorResponse, "description": "LLM unavailable"}
    }
)


@router.post(
    "/ask",
    response_model=AskResponse,
    summary="Ask a question about a codebase",
    description="""
    Retrieve the most relevant files of the codebase, send them to the
    language model and return its answer, a Mermaid diagram and file
    references. Only the 10 most recent questions per codebase are kept.

    **Examples:**
    - "Where is authentication handled?"
    - "How does the upload pipeline store files?"
    """
)
async def ask_question(
    request: AskRequest,
    service: QuestionService = Depends(get_question_service),
) -> AskResponse:
    """Answer and store a question."""
    if not request.codebase_id or not request.question:
        raise ValidationError("Codebase ID and question are required")

    is_valid, question, error = validate_question(request.question)
    if not is_valid:
        raise ValidationError(error, field="question")

    logger.info(
        f"Question received: codebase={request.codebase_id[:8]}..., "
        f"question={question[:50]}..."
    )

    result = await asyncio.to_thread(service.ask, request.codebase_id, question, request.tags)

    return AskResponse(
        question_id=result.question_id,
        answer=result.answer.answer,
        mermaid_code=result.answer.mermaid_code,
        file_references=result.answer.file_references,
    )
