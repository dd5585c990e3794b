"""
Database module - persistence layer.

This module handles:
- Database connection management
- ORM models for codebases, code files and questions
- Table initialization
- CRUD operations (CodebaseRepository)
"""
from repomind.database.connection import (
    DatabaseConnection,
    get_database,
    reset_database,
)
from repomind.database.models import Base, Codebase, CodeFile, Question
from repomind.database.init_db import init_tables, drop_tables
from repomind.database.repository import CodebaseRepository

__all__ = [
    # Connection
    "DatabaseConnection",
    "get_database",
    "reset_database",
    # Models
    "Base",
    "Codebase",
    "CodeFile",
    "Question",
    # Init
    "init_tables",
    "drop_tables",
    # Repository
    "CodebaseRepository",
]
