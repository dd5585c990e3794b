"""
Refactor Routes - refactoring suggestions for a code snippet.
"""
import asyncio

from fastapi import APIRouter, Depends

from repomind.api.dependencies import get_refactor_service
from repomind.core.exceptions import ValidationError
from repomind.models import ErrorResponse, RefactorRequest, RefactorResponse
from repomind.services import RefactorService

router = APIRouter(
    prefix="/api/refactor",
    tags=["Refactor"],
    responses={503: {"model": ErrorResponse, "description": "LLM unavailable"}}
)


@router.post(
    "",
    response_model=RefactorResponse,
    summary="Generate refactor suggestions",
    description="Each suggestion has a title, description, priority (high|medium|low) and category."
)
async def refactor(
    request: RefactorRequest,
    service: RefactorService = Depends(get_refactor_service),
) -> RefactorResponse:
    if not request.code or not request.language:
        raise ValidationError("Code and language are required")

    suggestions = await asyncio.to_thread(service.suggest, request.code, request.language)

    return RefactorResponse(suggestions=suggestions)
