"""
Configuration management via environment variables.

This module loads configuration from .env file using python-dotenv.
All configuration values are accessed through the Settings class.

LLM keys are optional at startup: the LLM client is built lazily
and reports a missing key on first use.
"""
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional, Tuple

from dotenv import load_dotenv


# Project root (one level above the package)
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Load .env file from project root
# This must happen before accessing os.environ
load_dotenv(PROJECT_ROOT / ".env")


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    Attributes:
        app_name: Application identifier for logging
        app_env: Environment name (development, staging, production)
        log_level: Logging verbosity (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        port: Port used when the server is started directly
        database_url: SQLAlchemy connection string
        groq_api_key: API key for Groq (primary LLM provider)
        google_api_key: API key for Google Gemini (fallback provider)
        llm_model: Groq model identifier
        llm_fallback_model: Gemini model identifier
        upload_dir: Scratch directory for archives and clones
        max_upload_size: Maximum ZIP upload size in bytes
        max_source_file_size: Source files above this size are skipped
        history_keep: Number of questions retained per codebase
        cors_origins: Allowed CORS origins outside development
        enable_audit_logging: Log every request through AuditMiddleware
    """
    # Application settings
    app_name: str
    app_env: str
    log_level: str
    port: int

    # Database settings
    database_url: str

    # LLM settings
    groq_api_key: Optional[str]
    google_api_key: Optional[str]
    llm_model: str
    llm_fallback_model: str

    # Ingestion settings
    upload_dir: Path
    max_upload_size: int
    max_source_file_size: int

    # History settings
    history_keep: int

    # HTTP settings
    cors_origins: Tuple[str, ...]
    enable_audit_logging: bool

    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.app_env.lower() == "development"


def _get_env(key: str, default: Optional[str] = None) -> str:
    """
    Get environment variable with optional default.

    Args:
        key: Environment variable name
        default: Default value if not set

    Returns:
        Environment variable value

    Raises:
        ValueError: If required variable is not set and no default provided
    """
    value = os.environ.get(key, default)
    if value is None:
        raise ValueError(
            f"Required environment variable '{key}' is not set. "
            f"Please check your .env file."
        )
    return value


def _get_optional_env(key: str) -> Optional[str]:
    """Get an environment variable, treating empty strings as unset."""
    value = os.environ.get(key, "").strip()
    return value or None


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Settings are read once; tests call get_settings.cache_clear()
    after changing the environment.

    Returns:
        Settings instance with all configuration values
    """
    database_url = _get_env("DATABASE_URL", "sqlite:///./repomind.db")

    # SQLAlchemy no longer accepts the legacy postgres:// scheme
    if database_url.startswith("postgres://"):
        database_url = database_url.replace("postgres://", "postgresql://", 1)

    upload_dir = os.environ.get("UPLOAD_DIR")
    cors_origins = _get_env(
        "CORS_ORIGINS", "http://localhost:5173,http://localhost:3000"
    )

    return Settings(
        # Application
        app_name=_get_env("APP_NAME", "RepoMind"),
        app_env=_get_env("APP_ENV", "development"),
        log_level=_get_env("LOG_LEVEL", "INFO"),
        port=int(_get_env("PORT", "5000")),

        # Database
        database_url=database_url,

        # LLM
        groq_api_key=_get_optional_env("GROQ_API_KEY"),
        google_api_key=_get_optional_env("GOOGLE_API_KEY"),
        llm_model=_get_env("LLM_MODEL", "llama-3.3-70b-versatile"),
        llm_fallback_model=_get_env("LLM_FALLBACK_MODEL", "gemini-2.0-flash"),

        # Ingestion
        upload_dir=Path(upload_dir) if upload_dir else PROJECT_ROOT / "uploads",
        max_upload_size=int(_get_env("MAX_FILE_SIZE", "52428800")),
        max_source_file_size=int(_get_env("MAX_SOURCE_FILE_SIZE", "1048576")),

        # History
        history_keep=int(_get_env("HISTORY_KEEP", "10")),

        # HTTP
        cors_origins=tuple(o.strip() for o in cors_origins.split(",") if o.strip()),
        enable_audit_logging=_get_env("ENABLE_AUDIT_LOGGING", "true").lower() == "true",
    )
