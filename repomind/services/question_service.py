"""
Question Service - answer natural-language questions about a codebase.

This service handles the complete flow:
1. Load the codebase's stored files
2. Select relevant files by keyword score
3. Build the prompt context
4. Call the LLM in JSON mode
5. Persist the Q&A record, attach tags, prune old history
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from repomind.core.config import get_settings
from repomind.core.exceptions import CodebaseNotFoundError, LLMError
from repomind.core.logging_config import get_logger
from repomind.core.validators import normalize_tags
from repomind.database import CodebaseRepository
from repomind.llm.client import get_llm_client
from repomind.llm.prompts import get_question_system_prompt
from repomind.llm.retrieval import build_context, create_prompt, find_relevant_files

logger = get_logger(__name__)

ANSWER_TEMPERATURE = 0.3
ANSWER_MAX_TOKENS = 4000


@dataclass
class Answer:
    """Parsed model reply for one question."""
    answer: str
    mermaid_code: Optional[str] = None
    file_references: List[Dict[str, Any]] = field(default_factory=list)


@dataclass
class AskResult:
    """Answer plus the id of the stored question record."""
    question_id: int
    answer: Answer
    tags: List[str] = field(default_factory=list)


class QuestionService:
    """
    Service for codebase Q&A.

    Example:
        >>> service = QuestionService()
        >>> result = service.ask(codebase_id, "Where is authentication handled?")
        >>> result.answer.file_references[0]["file"]
        'src/auth/middleware.js'
    """

    def __init__(self, repository: Optional[CodebaseRepository] = None, llm_client=None):
        """
        Args:
            repository: Optional repository; defaults to one on the shared engine
            llm_client: Optional client; defaults to the lazily built singleton
        """
        self.repository = repository or CodebaseRepository()
        self._llm_client = llm_client

    @property
    def llm_client(self):
        return self._llm_client or get_llm_client()

    def answer_question(self, codebase_id: str, question: str) -> Answer:
        """
        Answer a question using the codebase's most relevant files.

        Raises:
            CodebaseNotFoundError: If the codebase has no stored files
            LLMError: If the model call fails or returns invalid JSON
        """
        files = self.repository.get_codebase_files(codebase_id)

        if not files:
            raise CodebaseNotFoundError("No files found in codebase", codebase_id=codebase_id)

        relevant_files = find_relevant_files(files, question)
        context = build_context(relevant_files)
        prompt = create_prompt(question, context)

        logger.info(
            f"Answering question: codebase={codebase_id[:8]}..., "
            f"files={len(files)}, context_files={len(relevant_files)}, "
            f"prompt_chars={len(prompt)}"
        )

        try:
            result = self.llm_client.generate_json(
                prompt,
                system_prompt=get_question_system_prompt(),
                temperature=ANSWER_TEMPERATURE,
                max_tokens=ANSWER_MAX_TOKENS
            )
        except LLMError as e:
            logger.error(f"Error answering question: {e.message}")
            raise LLMError(f"Failed to answer question: {e.message}") from e

        references = result.get("references") or []
        if not isinstance(references, list):
            references = []
        references = [r for r in references if isinstance(r, dict)]

        return Answer(
            answer=str(result.get("answer") or ""),
            mermaid_code=result.get("mermaidCode") or None,
            file_references=references,
        )

    def ask(self, codebase_id: str, question: str, tags: Optional[List[str]] = None) -> AskResult:
        """
        Answer, store and tag a question, then prune history.

        Only the newest HISTORY_KEEP questions of a codebase are kept.
        """
        answer = self.answer_question(codebase_id, question)

        question_id = self.repository.insert_question(
            codebase_id,
            question,
            answer.answer,
            answer.file_references,
            answer.mermaid_code
        )

        applied_tags = []
        for tag in normalize_tags(tags):
            if self.repository.add_tag_to_question(question_id, tag) is not None:
                applied_tags.append(tag)

        self.repository.delete_old_questions(codebase_id, get_settings().history_keep)

        logger.info(
            f"Question {question_id} answered: codebase={codebase_id[:8]}..., "
            f"references={len(answer.file_references)}, "
            f"diagram={'yes' if answer.mermaid_code else 'no'}"
        )

        return AskResult(question_id=question_id, answer=answer, tags=applied_tags)
