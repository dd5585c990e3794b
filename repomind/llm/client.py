"""
LLM Client for Groq with Google Gemini fallback.

This module provides a clean interface to the chat-completion APIs.
It handles:
- Lazy API client initialization
- Provider fallback (Groq -> Gemini)
- JSON-mode requests and response parsing
- Error wrapping into LLMError
"""
import json
import re
import time
from typing import Any, Dict, List, Optional

import google.generativeai as genai
from groq import Groq

from repomind.core.config import get_settings
from repomind.core.exceptions import LLMError
from repomind.core.logging_config import get_logger

logger = get_logger(__name__)

_CODE_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)


class LLMClient:
    """
    Client for Groq and Google Gemini.

    Features:
    - Groq is tried first, Gemini is the fallback when GOOGLE_API_KEY is set
    - JSON mode on both providers
    - Any provider may be used alone

    Example:
        >>> client = LLMClient()
        >>> data = client.generate_json("Analyze...", system_prompt="Reply in JSON")
    """

    def __init__(self):
        """
        Initialize clients for the configured providers.

        Raises:
            LLMError: If no provider API key is configured
        """
        self.settings = get_settings()
        self.providers: List[Dict[str, str]] = []

        self.groq_client: Optional[Groq] = None
        if self.settings.groq_api_key:
            self.groq_client = Groq(api_key=self.settings.groq_api_key)
            self.providers.append({"provider": "groq", "model": self.settings.llm_model})

        if self.settings.google_api_key:
            genai.configure(api_key=self.settings.google_api_key)
            self.providers.append({"provider": "google", "model": self.settings.llm_fallback_model})

        if not self.providers:
            raise LLMError(
                "GROQ_API_KEY is not set in environment variables. "
                "Please add it (or GOOGLE_API_KEY) to your .env file."
            )

        logger.info(
            "LLM client initialized: "
            + " -> ".join(f"{p['provider']}/{p['model']}" for p in self.providers)
        )

    def generate(
        self,
        user_message: str,
        system_prompt: str = "You are a helpful assistant.",
        temperature: float = 0.3,
        max_tokens: int = 2048,
        json_mode: bool = False
    ) -> str:
        """
        Generate a completion, falling back through the providers.

        Raises:
            LLMError: If every provider fails
        """
        last_error = None

        for i, attempt in enumerate(self.providers):
            provider = attempt["provider"]
            model = attempt["model"]

            try:
                if i > 0:
                    logger.info(f"Attempt {i+1}: Falling back to {provider.title()} ({model})...")
                    time.sleep(1 * i)

                if provider == "google":
                    return self._generate_google(
                        user_message, system_prompt, model, temperature, max_tokens, json_mode
                    )
                return self._generate_groq(
                    user_message, system_prompt, model, temperature, max_tokens, json_mode
                )

            except Exception as e:
                error_msg = str(e).lower()
                is_rate_limit = "429" in error_msg or "quota" in error_msg or "rate limit" in error_msg

                log_level = logger.warning if is_rate_limit else logger.error
                log_level(f"Provider failed ({provider}/{model}): {e}")

                last_error = e

        logger.critical("All LLM providers failed")
        raise LLMError(f"All LLM providers failed. Last error: {last_error}")

    def generate_json(
        self,
        user_message: str,
        system_prompt: str,
        temperature: float = 0.3,
        max_tokens: int = 2048
    ) -> Dict[str, Any]:
        """
        Generate a completion in JSON mode and parse it.

        Raises:
            LLMError: If generation fails or the reply is not a JSON object
        """
        raw = self.generate(
            user_message,
            system_prompt=system_prompt,
            temperature=temperature,
            max_tokens=max_tokens,
            json_mode=True
        )
        return parse_json_response(raw)

    def _generate_groq(self, user_message, system_prompt, model, temperature, max_tokens, json_mode):
        """Execute request using Groq."""
        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_message},
        ]
        kwargs = {}
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        response = self.groq_client.chat.completions.create(
            model=model,
            messages=messages,
            temperature=temperature,
            max_tokens=max_tokens,
            **kwargs
        )

        usage = getattr(response, "usage", None)
        if usage is not None:
            logger.debug(
                f"Groq usage: prompt={usage.prompt_tokens}, "
                f"completion={usage.completion_tokens}"
            )
        return response.choices[0].message.content

    def _generate_google(self, user_message, system_prompt, model, temperature, max_tokens, json_mode):
        """Execute request using Google Gemini."""
        model_instance = genai.GenerativeModel(
            model_name=model,
            system_instruction=system_prompt
        )

        generation_config = genai.types.GenerationConfig(
            temperature=temperature,
            max_output_tokens=max_tokens,
            response_mime_type="application/json" if json_mode else "text/plain",
        )

        try:
            response = model_instance.generate_content(
                user_message,
                generation_config=generation_config
            )
            return response.text
        except ValueError as e:
            # response.text raises ValueError when the candidate was blocked
            raise LLMError(f"Gemini returned no text: {e}") from e


def parse_json_response(raw: Optional[str]) -> Dict[str, Any]:
    """
    Parse a JSON-mode reply.

    Tolerates a surrounding ```json fence.

    Raises:
        LLMError: If the text is not a JSON object
    """
    if not raw:
        raise LLMError("Empty response from language model")

    cleaned = _CODE_FENCE.sub("", raw.strip())

    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.error(f"Unparseable LLM response: {cleaned[:200]}")
        raise LLMError(f"Invalid JSON from language model: {e}") from e

    if not isinstance(data, dict):
        raise LLMError("Language model response is not a JSON object")

    return data


# Lazily constructed client handle
_llm_client: LLMClient | None = None


def get_llm_client() -> LLMClient:
    """
    Get or create the LLM client singleton.

    Raises:
        LLMError: If no provider is configured
    """
    global _llm_client
    if _llm_client is None:
        _llm_client = LLMClient()
    return _llm_client


def set_llm_client(client) -> None:
    """Install a client instance (used by tests to inject a fake)."""
    global _llm_client
    _llm_client = client


def reset_llm_client() -> None:
    """Reset the LLM client singleton (useful for testing)."""
    global _llm_client
    _llm_client = None
