"""
RepoMind - ask questions about an uploaded codebase.

This package contains all application source code organized by responsibility:
- api/       : FastAPI routes and HTTP handling
- core/      : Configuration, logging, errors and cross-cutting utilities
- services/  : Business logic and orchestration
- llm/       : File retrieval, prompts and the LLM client
- ingestion/ : ZIP extraction, git cloning and source file scanning
- database/  : SQLAlchemy models and persistence
- models/    : Pydantic models for request/response schemas
"""

__version__ = "1.0.0"
