"""
Codebase Repository - CRUD operations over codebases, files and questions.

All methods open their own session via DatabaseConnection.get_session()
and return plain dictionaries, so callers never hold detached ORM objects.
SQLAlchemy errors are re-raised as DatabaseError.
"""
from functools import wraps
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import func, or_
from sqlalchemy.exc import SQLAlchemyError

from repomind.core.exceptions import DatabaseError
from repomind.core.logging_config import get_logger
from repomind.database.connection import DatabaseConnection, get_database
from repomind.database.models import Codebase, CodeFile, Question

logger = get_logger(__name__)


def _wrap_db_errors(method):
    """Translate SQLAlchemy failures into DatabaseError."""
    @wraps(method)
    def wrapper(*args, **kwargs):
        try:
            return method(*args, **kwargs)
        except SQLAlchemyError as e:
            logger.error(f"{method.__name__} failed: {e}")
            raise DatabaseError(f"Database operation failed: {method.__name__}") from e
    return wrapper


def _escape_like(term: str) -> str:
    """Escape LIKE wildcards so the term is matched literally."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class CodebaseRepository:
    """
    Persistence operations for the three record collections.

    Example:
        >>> repo = CodebaseRepository()
        >>> repo.insert_codebase(codebase_id, "my-repo", "github")
        >>> repo.insert_code_file(codebase_id, "src/app.py", "print(1)", "python", 8)
        >>> repo.get_codebase_files(codebase_id)
    """

    def __init__(self, db: Optional[DatabaseConnection] = None):
        self.db = db or get_database()

    # ============================================================
    # Codebases
    # ============================================================

    @_wrap_db_errors
    def insert_codebase(self, codebase_id: str, name: str, source: str) -> Dict[str, Any]:
        """Create a codebase record with zeroed stats."""
        with self.db.get_session() as session:
            codebase = Codebase(
                id=codebase_id,
                name=name,
                source=source,
                file_count=0,
                total_size=0,
            )
            session.add(codebase)
            session.flush()
            logger.info(f"Inserted codebase {codebase_id} ({source}): {name}")
            return codebase.to_dict()

    @_wrap_db_errors
    def update_codebase_stats(self, codebase_id: str, file_count: int, total_size: int) -> bool:
        """Store file count and total size; returns False if the codebase is missing."""
        with self.db.get_session() as session:
            codebase = session.get(Codebase, codebase_id)
            if codebase is None:
                return False
            codebase.file_count = file_count
            codebase.total_size = total_size
            return True

    @_wrap_db_errors
    def get_codebase(self, codebase_id: str) -> Optional[Dict[str, Any]]:
        with self.db.get_session() as session:
            codebase = session.get(Codebase, codebase_id)
            return codebase.to_dict() if codebase else None

    @_wrap_db_errors
    def get_all_codebases(self) -> List[Dict[str, Any]]:
        """All codebases, newest first."""
        with self.db.get_session() as session:
            rows = (
                session.query(Codebase)
                .order_by(Codebase.created_at.desc())
                .all()
            )
            return [row.to_dict() for row in rows]

    @_wrap_db_errors
    def delete_codebase(self, codebase_id: str) -> bool:
        """
        Delete a codebase together with its files and questions.

        Returns:
            True if the codebase existed
        """
        with self.db.get_session() as session:
            files = (
                session.query(CodeFile)
                .filter(CodeFile.codebase_id == codebase_id)
                .delete(synchronize_session=False)
            )
            questions = (
                session.query(Question)
                .filter(Question.codebase_id == codebase_id)
                .delete(synchronize_session=False)
            )
            deleted = (
                session.query(Codebase)
                .filter(Codebase.id == codebase_id)
                .delete(synchronize_session=False)
            )

        logger.info(
            f"Deleted codebase {codebase_id}: "
            f"files={files}, questions={questions}, found={bool(deleted)}"
        )
        return bool(deleted)

    # ============================================================
    # Code files
    # ============================================================

    @_wrap_db_errors
    def insert_code_file(
        self,
        codebase_id: str,
        file_path: str,
        content: str,
        language: Optional[str],
        size: Optional[int]
    ) -> Optional[int]:
        """
        Store a single file.

        Returns:
            New file id, or None when the content is empty
        """
        if not content or not content.strip():
            logger.warning(f"Skipping empty file: {file_path}")
            return None

        with self.db.get_session() as session:
            code_file = CodeFile(
                codebase_id=codebase_id,
                file_path=file_path,
                content=content,
                language=language,
                size=size,
            )
            session.add(code_file)
            session.flush()
            return code_file.id

    @_wrap_db_errors
    def insert_code_files(self, codebase_id: str, files: Iterable[Any]) -> int:
        """
        Store many SourceFile objects in one transaction.

        Returns:
            Number of files stored (empty files are skipped)
        """
        with self.db.get_session() as session:
            stored = self._add_files(session, codebase_id, files)
        logger.debug(f"Stored {stored} files for codebase {codebase_id}")
        return stored

    @_wrap_db_errors
    def store_codebase(
        self,
        codebase_id: str,
        name: str,
        source: str,
        files: Iterable[Any],
        total_size: int
    ) -> Dict[str, Any]:
        """
        Create a codebase with its files and stats in a single transaction.

        Nothing is written if any file fails to insert.
        """
        with self.db.get_session() as session:
            codebase = Codebase(id=codebase_id, name=name, source=source, file_count=0, total_size=0)
            session.add(codebase)
            session.flush()

            codebase.file_count = self._add_files(session, codebase_id, files)
            codebase.total_size = total_size
            session.flush()

            logger.info(
                f"Inserted codebase {codebase_id} ({source}): {name}, "
                f"files={codebase.file_count}"
            )
            return codebase.to_dict()

    @staticmethod
    def _add_files(session, codebase_id: str, files: Iterable[Any]) -> int:
        stored = 0
        for source_file in files:
            if not source_file.content or not source_file.content.strip():
                logger.warning(f"Skipping empty file: {source_file.relative_path}")
                continue
            session.add(CodeFile(
                codebase_id=codebase_id,
                file_path=source_file.relative_path,
                content=source_file.content,
                language=source_file.language,
                size=source_file.size,
            ))
            stored += 1
        return stored

    @_wrap_db_errors
    def get_codebase_files(self, codebase_id: str) -> List[Dict[str, Any]]:
        with self.db.get_session() as session:
            rows = (
                session.query(CodeFile)
                .filter(CodeFile.codebase_id == codebase_id)
                .order_by(CodeFile.id)
                .all()
            )
            return [row.to_dict() for row in rows]

    # ============================================================
    # Questions
    # ============================================================

    @_wrap_db_errors
    def insert_question(
        self,
        codebase_id: str,
        question: str,
        answer: str,
        file_references: Optional[List[Any]] = None,
        mermaid_code: Optional[str] = None
    ) -> int:
        """Store a question/answer pair; returns the new question id."""
        with self.db.get_session() as session:
            record = Question(
                codebase_id=codebase_id,
                question=question,
                answer=answer,
                file_references=list(file_references or []),
                mermaid_code=mermaid_code,
                tags=[],
            )
            session.add(record)
            session.flush()
            return record.id

    @_wrap_db_errors
    def get_recent_questions(self, codebase_id: str, limit: int = 10) -> List[Dict[str, Any]]:
        """Newest questions first."""
        with self.db.get_session() as session:
            rows = (
                session.query(Question)
                .filter(Question.codebase_id == codebase_id)
                .order_by(Question.created_at.desc(), Question.id.desc())
                .limit(limit)
                .all()
            )
            return [row.to_dict() for row in rows]

    @_wrap_db_errors
    def add_tag_to_question(self, question_id: int, tag: str) -> Optional[Dict[str, Any]]:
        """
        Add a tag with set semantics.

        Returns:
            Updated question, or None if it does not exist
        """
        with self.db.get_session() as session:
            record = session.get(Question, question_id)
            if record is None:
                return None
            tags = list(record.tags or [])
            if tag not in tags:
                tags.append(tag)
                # Reassign so the JSON column is flagged dirty
                record.tags = tags
            session.flush()
            return record.to_dict()

    @_wrap_db_errors
    def delete_old_questions(self, codebase_id: str, keep_count: int = 10) -> int:
        """
        Keep only the newest `keep_count` questions of a codebase.

        Returns:
            Number of questions deleted
        """
        with self.db.get_session() as session:
            stale_ids = [
                row.id for row in (
                    session.query(Question.id)
                    .filter(Question.codebase_id == codebase_id)
                    .order_by(Question.created_at.desc(), Question.id.desc())
                    .offset(keep_count)
                    .all()
                )
            ]
            if not stale_ids:
                return 0

            deleted = (
                session.query(Question)
                .filter(Question.id.in_(stale_ids))
                .delete(synchronize_session=False)
            )

        logger.debug(f"Pruned {deleted} old questions for codebase {codebase_id}")
        return deleted

    @_wrap_db_errors
    def search_questions(self, codebase_id: str, term: str) -> List[Dict[str, Any]]:
        """Case-insensitive substring search over question and answer text."""
        pattern = f"%{_escape_like(term)}%"
        with self.db.get_session() as session:
            rows = (
                session.query(Question)
                .filter(Question.codebase_id == codebase_id)
                .filter(or_(
                    Question.question.ilike(pattern, escape="\\"),
                    Question.answer.ilike(pattern, escape="\\"),
                ))
                .order_by(Question.created_at.desc(), Question.id.desc())
                .all()
            )
            return [row.to_dict() for row in rows]

    # ============================================================
    # Stats
    # ============================================================

    @_wrap_db_errors
    def count_records(self) -> Dict[str, int]:
        """Row counts for the health endpoint."""
        with self.db.get_session() as session:
            return {
                "codebases": session.query(func.count(Codebase.id)).scalar() or 0,
                "codeFiles": session.query(func.count(CodeFile.id)).scalar() or 0,
                "questions": session.query(func.count(Question.id)).scalar() or 0,
            }
