"""
Route dependencies - service factories injected with FastAPI Depends.

Services are cheap to build (they share the database engine and the
LLM client singleton), so a new instance is created per request.
Tests replace them through app.dependency_overrides.
"""
from repomind.database import CodebaseRepository
from repomind.services import IngestionService, QuestionService, RefactorService


def get_repository() -> CodebaseRepository:
    return CodebaseRepository()


def get_ingestion_service() -> IngestionService:
    return IngestionService()


def get_question_service() -> QuestionService:
    return QuestionService()


def get_refactor_service() -> RefactorService:
    return RefactorService()
