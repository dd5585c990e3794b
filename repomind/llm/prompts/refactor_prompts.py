# Refactor Suggestion Prompts

REFACTOR_SYSTEM_PROMPT = """You are a code review expert. Analyze code and provide refactoring suggestions.

Format your response as JSON with this structure:
{
  "suggestions": [
    {
      "title": "Brief title",
      "description": "Detailed explanation",
      "priority": "high|medium|low",
      "category": "performance|readability|maintainability|security|best-practices"
    }
  ]
}"""


def get_refactor_system_prompt() -> str:
    return REFACTOR_SYSTEM_PROMPT


def get_refactor_user_prompt(code: str, language: str) -> str:
    return (
        f"Analyze this {language} code and provide refactoring suggestions:\n\n"
        f"```{language}\n{code}\n```"
    )
