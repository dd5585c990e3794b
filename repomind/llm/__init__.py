"""
LLM module - Language model integration.

This module handles all LLM interactions:
- File retrieval and prompt context construction
- Prompt templates
- API calls to Groq / Gemini
- JSON response parsing
"""
from repomind.core.exceptions import LLMError
from repomind.llm.client import (
    LLMClient,
    get_llm_client,
    parse_json_response,
    reset_llm_client,
    set_llm_client,
)
from repomind.llm.retrieval import (
    build_context,
    create_prompt,
    extract_keywords,
    find_relevant_files,
)

__all__ = [
    "LLMClient",
    "LLMError",
    "get_llm_client",
    "parse_json_response",
    "reset_llm_client",
    "set_llm_client",
    "build_context",
    "create_prompt",
    "extract_keywords",
    "find_relevant_files",
]
