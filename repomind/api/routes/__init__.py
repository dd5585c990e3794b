"""
API Routes module - Endpoint definitions.

Each file in this module defines routes for a specific domain:
- upload.py   : ZIP / GitHub ingestion
- question.py : Codebase Q&A
- history.py  : Question history and codebase sessions
- refactor.py : Refactor suggestions
- health.py   : Health check
"""
from repomind.api.routes.upload import router as upload_router
from repomind.api.routes.question import router as question_router
from repomind.api.routes.history import router as history_router
from repomind.api.routes.refactor import router as refactor_router
from repomind.api.routes.health import router as health_router

__all__ = [
    "upload_router",
    "question_router",
    "history_router",
    "refactor_router",
    "health_router",
]
