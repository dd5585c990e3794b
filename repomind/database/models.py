"""
Database Models - SQLAlchemy ORM models for persistent storage.

This module defines the database schema for:
- Codebases (one per upload or clone)
- Code files belonging to a codebase
- Questions asked about a codebase
"""
from datetime import datetime
from typing import Dict, Any

from sqlalchemy import Column, String, Integer, Text, DateTime, ForeignKey, JSON
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class Codebase(Base):
    """
    Model for an ingested codebase.

    The primary key is a UUID generated at ingestion time.
    """
    __tablename__ = "codebases"

    id = Column(String(36), primary_key=True)  # UUID
    name = Column(String(512), nullable=False)
    source = Column(String(32), nullable=False)  # 'upload', 'github', 'github-split'
    file_count = Column(Integer, default=0, nullable=False)
    total_size = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "source": self.source,
            "file_count": self.file_count,
            "total_size": self.total_size,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


class CodeFile(Base):
    """
    Model for a single source file of a codebase.

    Empty files are never stored.
    """
    __tablename__ = "code_files"

    id = Column(Integer, primary_key=True, autoincrement=True)
    codebase_id = Column(
        String(36),
        ForeignKey("codebases.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    file_path = Column(String(1024), nullable=False)
    content = Column(Text, nullable=False)
    language = Column(String(32), nullable=True)
    size = Column(Integer, nullable=True)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "codebase_id": self.codebase_id,
            "file_path": self.file_path,
            "content": self.content or "",
            "language": self.language,
            "size": self.size,
        }


class Question(Base):
    """
    Model for a question and the generated answer.

    file_references holds the citations returned by the LLM;
    tags is a list of unique strings.
    """
    __tablename__ = "questions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    codebase_id = Column(
        String(36),
        ForeignKey("codebases.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    question = Column(Text, nullable=False)
    answer = Column(Text, nullable=False)
    file_references = Column(JSON, nullable=False, default=list)
    mermaid_code = Column(Text, nullable=True)
    tags = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "codebase_id": self.codebase_id,
            "question": self.question,
            "answer": self.answer,
            "file_references": self.file_references or [],
            "mermaid_code": self.mermaid_code,
            "tags": self.tags or [],
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
