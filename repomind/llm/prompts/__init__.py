"""
Prompts module - LLM prompt templates.

- question_prompts.py : codebase Q&A (answer + Mermaid diagram + references)
- refactor_prompts.py : refactoring suggestions for a code snippet
"""
from repomind.llm.prompts.question_prompts import (
    get_question_system_prompt,
    get_question_user_prompt,
)
from repomind.llm.prompts.refactor_prompts import (
    get_refactor_system_prompt,
    get_refactor_user_prompt,
)

__all__ = [
    "get_question_system_prompt",
    "get_question_user_prompt",
    "get_refactor_system_prompt",
    "get_refactor_user_prompt",
]
