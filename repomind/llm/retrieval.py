"""
File Retrieval - pick which files of a codebase go into the prompt.

Scoring is keyword frequency:
- +10 for every keyword contained in the file path
- +1 for every occurrence of a keyword in the file content

When no file scores, the largest files are used instead so the
model always receives some context.
"""
import re
from typing import Any, Dict, List, Sequence

from repomind.core.logging_config import get_logger
from repomind.llm.prompts import get_question_user_prompt

logger = get_logger(__name__)

STOP_WORDS = frozenset({
    "what", "where", "how", "when", "why", "is", "are", "the", "a", "an",
    "in", "on", "at", "to", "for", "of", "with", "does", "do",
})

MIN_KEYWORD_LENGTH = 3
PATH_MATCH_SCORE = 10
MAX_RELEVANT_FILES = 10
FALLBACK_FILE_COUNT = 8
MAX_CONTEXT_CHARS = 3000

_NON_WORD = re.compile(r"[^\w\s]", re.ASCII)


def extract_keywords(question: str) -> List[str]:
    """
    Extract keywords from a question.

    Returns:
        Unique keywords in order of first appearance
    """
    words = _NON_WORD.sub(" ", question.lower()).split()

    keywords = []
    for word in words:
        if len(word) < MIN_KEYWORD_LENGTH or word in STOP_WORDS:
            continue
        if word not in keywords:
            keywords.append(word)
    return keywords


def score_file(file: Dict[str, Any], keywords: Sequence[str]) -> int:
    """Relevance score of one file for the given keywords."""
    content = (file.get("content") or "").lower()
    file_path = (file.get("file_path") or "").lower()

    score = 0
    for keyword in keywords:
        if keyword in file_path:
            score += PATH_MATCH_SCORE
        score += content.count(keyword)
    return score


def find_relevant_files(files: Sequence[Dict[str, Any]], question: str) -> List[Dict[str, Any]]:
    """
    Find relevant files based on question keywords.

    Args:
        files: File records with file_path, content, language and size
        question: The user's question

    Returns:
        Up to 10 scored files (highest first) or, when nothing matches,
        up to 8 files ordered by size
    """
    keywords = extract_keywords(question)

    scored = [{**file, "score": score_file(file, keywords)} for file in files]
    # sorted() is stable, so ties keep their stored order
    scored = sorted(scored, key=lambda f: f["score"], reverse=True)

    matched = [f for f in scored if f["score"] > 0][:MAX_RELEVANT_FILES]
    if matched:
        logger.debug(
            f"Keyword match: keywords={keywords}, "
            f"selected={[f['file_path'] for f in matched]}"
        )
        return matched

    fallback = sorted(files, key=lambda f: f.get("size") or 0, reverse=True)[:FALLBACK_FILE_COUNT]
    logger.debug(f"No keyword matches for {keywords}; falling back to {len(fallback)} largest files")
    return list(fallback)


def build_context(files: Sequence[Dict[str, Any]]) -> str:
    """
    Build the prompt context block from the selected files.

    File content longer than MAX_CONTEXT_CHARS characters (code points,
    so astral-plane characters are never split) is truncated.
    """
    if not files:
        return "No relevant files found."

    parts = ["Relevant code files:\n\n"]

    for index, file in enumerate(files, start=1):
        content = file.get("content") or ""
        if len(content) > MAX_CONTEXT_CHARS:
            content = content[:MAX_CONTEXT_CHARS] + "\n... (truncated)"

        language = file.get("language")
        parts.append(f"File {index}: {file.get('file_path')}\n")
        parts.append(f"Language: {language}\n")
        parts.append(f"```{language}\n")
        parts.append(content)
        parts.append("\n```\n\n")

    return "".join(parts)


def create_prompt(question: str, context: str) -> str:
    """Final user prompt sent with the question system prompt."""
    return get_question_user_prompt(question, context)
