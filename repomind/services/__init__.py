"""
Services module - Business logic and orchestration.

Services contain the core application logic:
- No HTTP concerns (those belong in api/)
- No SQL (that belongs in database/)
- Orchestrate between ingestion, LLM and database layers
"""
from repomind.services.ingestion_service import IngestionService, IngestionResult
from repomind.services.question_service import QuestionService, Answer, AskResult
from repomind.services.refactor_service import RefactorService

__all__ = [
    "IngestionService",
    "IngestionResult",
    "QuestionService",
    "Answer",
    "AskResult",
    "RefactorService",
]
