"""
Refactor Service - refactoring suggestions for a code snippet.
"""
from typing import Any, Dict, List

from repomind.core.exceptions import LLMError
from repomind.core.logging_config import get_logger
from repomind.llm.client import get_llm_client
from repomind.llm.prompts import get_refactor_system_prompt, get_refactor_user_prompt

logger = get_logger(__name__)

REFACTOR_TEMPERATURE = 0.4
REFACTOR_MAX_TOKENS = 1500


class RefactorService:
    """Asks the LLM for structured refactoring suggestions."""

    def __init__(self, llm_client=None):
        self._llm_client = llm_client

    @property
    def llm_client(self):
        return self._llm_client or get_llm_client()

    def suggest(self, code: str, language: str) -> List[Dict[str, Any]]:
        """
        Generate refactor suggestions for code.

        Returns:
            List of {title, description, priority, category} dicts

        Raises:
            LLMError: If the model call fails
        """
        logger.info(f"Generating refactor suggestions: language={language}, code_chars={len(code)}")

        try:
            result = self.llm_client.generate_json(
                get_refactor_user_prompt(code, language),
                system_prompt=get_refactor_system_prompt(),
                temperature=REFACTOR_TEMPERATURE,
                max_tokens=REFACTOR_MAX_TOKENS
            )
        except LLMError as e:
            logger.error(f"Error generating refactor suggestions: {e.message}")
            raise LLMError(f"Failed to generate suggestions: {e.message}") from e

        suggestions = result.get("suggestions") or []
        if not isinstance(suggestions, list):
            return []
        return [s for s in suggestions if isinstance(s, dict)]
