"""
Health Check Routes - system health and monitoring endpoint.

Reports database connectivity, whether an LLM provider is configured,
basic process information and record counts. The endpoint always
answers 200; problems are reported as status 'degraded'.
"""
import platform
import time
from datetime import datetime

from fastapi import APIRouter

from repomind import __version__
from repomind.core.config import get_settings
from repomind.core.exceptions import DatabaseError
from repomind.core.logging_config import get_logger
from repomind.database import CodebaseRepository, get_database
from repomind.models import HealthResponse

logger = get_logger(__name__)

router = APIRouter(
    prefix="/api/health",
    tags=["Health"],
)

_STARTED_AT = time.monotonic()


def _ai_status() -> dict:
    settings = get_settings()
    if settings.groq_api_key:
        return {"status": "configured", "provider": "Groq", "model": settings.llm_model}
    if settings.google_api_key:
        return {"status": "configured", "provider": "Google", "model": settings.llm_fallback_model}
    return {"status": "not_configured", "error": "GROQ_API_KEY not set"}


@router.get(
    "",
    response_model=HealthResponse,
    summary="Health check endpoint",
    description="""
    Returns the current health status of the service.

    `status` is `ok` when the database answers and an LLM provider
    key is configured, `degraded` otherwise.
    """
)
async def health_check() -> HealthResponse:
    """Perform a health check including dependency status."""
    logger.debug("Health check requested")

    status = "ok"

    db = get_database()
    db_ok = db.check_connection()
    database = {
        "status": "connected" if db_ok else "disconnected",
        "dialect": db.engine.dialect.name,
    }
    if not db_ok:
        status = "degraded"

    ai = _ai_status()
    if ai["status"] != "configured":
        status = "degraded"

    system = {
        "pythonVersion": platform.python_version(),
        "platform": platform.system().lower(),
        "uptime": f"{int(time.monotonic() - _STARTED_AT)}s",
    }

    stats = {}
    if db_ok:
        try:
            stats = CodebaseRepository(db).count_records()
        except DatabaseError as e:
            logger.warning(f"Could not collect record counts: {e.message}")

    return HealthResponse(
        status=status,
        version=__version__,
        timestamp=datetime.utcnow(),
        database=database,
        ai=ai,
        system=system,
        stats=stats,
    )
