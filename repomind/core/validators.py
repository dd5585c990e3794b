"""
Input Validators - Sanitization and validation utilities.

This module provides request-level validation:
- Question sanitization and length checks
- GitHub repository URL validation
- Tag normalization
"""
import re
from typing import Iterable, List, Optional, Tuple

from repomind.core.logging_config import get_logger

logger = get_logger(__name__)

MIN_QUESTION_LENGTH = 5
MAX_QUESTION_LENGTH = 4000

GITHUB_URL_PATTERN = re.compile(r"^https?://(www\.)?github\.com/[\w-]+/[\w.-]+/?$")


def sanitize_text(text: str) -> str:
    """
    Strip whitespace and null bytes from free-form input.

    Args:
        text: Raw user text

    Returns:
        Cleaned text (may be empty)
    """
    if not text:
        return ""
    return text.replace("\x00", "").strip()


def validate_question(question: Optional[str]) -> Tuple[bool, str, Optional[str]]:
    """
    Full validation and sanitization of a question.

    Args:
        question: Raw question text

    Returns:
        Tuple of (is_valid, sanitized_question, error_message)
    """
    sanitized = sanitize_text(question or "")

    if len(sanitized) < MIN_QUESTION_LENGTH:
        return False, "", f"Question must be at least {MIN_QUESTION_LENGTH} characters long"

    if len(sanitized) > MAX_QUESTION_LENGTH:
        return False, "", f"Question too long (max {MAX_QUESTION_LENGTH} characters)"

    return True, sanitized, None


def validate_github_url(url: Optional[str]) -> Tuple[bool, Optional[str]]:
    """
    Validate that a URL points at a public github.com repository.

    Accepts http(s), an optional www. prefix and an optional trailing slash.

    Args:
        url: Repository URL

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url:
        return False, "Repository URL is required"

    if not GITHUB_URL_PATTERN.match(url):
        logger.debug(f"Rejected repository URL: {url[:100]}")
        return False, "Invalid GitHub repository URL"

    return True, None


def normalize_tags(tags: Optional[Iterable[str]]) -> List[str]:
    """
    Trim tags and drop empty or non-string entries.

    Args:
        tags: Raw tag list from the request

    Returns:
        Cleaned tags in input order
    """
    if not tags or not isinstance(tags, (list, tuple)):
        return []
    return [tag.strip() for tag in tags if isinstance(tag, str) and tag.strip()]
