"""
FastAPI Application Entry Point.

This module creates and configures the FastAPI application instance.
It handles:
1. Application initialization
2. Router registration
3. Middleware configuration (audit, security headers, CORS)
4. Exception handlers
5. Startup/shutdown events

Run with: uvicorn repomind.api.main:app --reload
"""
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from repomind import __version__
from repomind.core.audit import AuditMiddleware, SecurityHeadersMiddleware
from repomind.core.config import get_settings
from repomind.core.exceptions import RepoMindException
from repomind.core.logging_config import setup_logging, get_logger
from repomind.api.routes import (
    health_router,
    history_router,
    question_router,
    refactor_router,
    upload_router,
)


# Initialize logging before anything else
settings = get_settings()
setup_logging(settings.log_level)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    - Startup: create the upload directory and database tables
    - Shutdown: dispose the database engine
    """
    from repomind.database import get_database, init_tables

    current = get_settings()
    logger.info(f"Starting {current.app_name} in {current.app_env} mode")
    logger.info(f"LLM Model: {current.llm_model} (fallback: {current.llm_fallback_model})")

    current.upload_dir.mkdir(parents=True, exist_ok=True)
    logger.info(f"Upload directory: {current.upload_dir}")

    # A missing database is fatal at startup
    init_tables()

    yield  # Application runs here

    logger.info(f"Shutting down {current.app_name}")
    try:
        get_database().close()
    except Exception as e:
        logger.error(f"Error closing database connections: {e}")


def _error_body(message: str, code: str, details=None) -> dict:
    return {"success": False, "error": message, "code": code, "details": details}


def create_app() -> FastAPI:
    """Build the FastAPI application with middleware, handlers and routers."""
    app = FastAPI(
        title="RepoMind API",
        description="""
        Ask natural-language questions about a codebase.

        ## Features

        - **Upload**: ZIP archives, public GitHub repositories, or a frontend + backend pair
        - **Q&A**: Answers with file references and a Mermaid diagram
        - **History**: The last 10 questions per codebase, searchable
        - **Refactor**: Structured refactoring suggestions for a snippet
        """,
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # ============================================================
    # Middleware Configuration (Order matters!)
    # ============================================================

    app.add_middleware(SecurityHeadersMiddleware)

    if settings.enable_audit_logging:
        app.add_middleware(AuditMiddleware)
        logger.info("Audit logging middleware enabled")

    if settings.is_development():
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
        logger.warning("CORS configured for development (all origins allowed)")
    else:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(settings.cors_origins),
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # ============================================================
    # Exception Handlers
    # ============================================================

    @app.exception_handler(RepoMindException)
    async def repomind_exception_handler(request: Request, exc: RepoMindException):
        """Handle all custom application exceptions."""
        if exc.status_code >= 500:
            logger.error(f"{exc.error_code}: {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_dict()
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        """Report malformed request bodies as 400 in the standard error shape."""
        errors = exc.errors()
        first = errors[0] if errors else {}
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = first.get("msg", "Invalid request")
        return JSONResponse(
            status_code=400,
            content=_error_body(
                f"{location}: {message}" if location else message,
                "validation_error"
            )
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Standard error shape for framework HTTP errors, including unknown routes."""
        if exc.status_code == 404 and exc.detail == "Not Found":
            message = f"Route {request.method} {request.url.path} not found"
        else:
            message = str(exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(message, "http_error"),
            headers=getattr(exc, "headers", None)
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """
        Handle uncaught exceptions globally.

        Detailed error information is only included in development mode.
        """
        logger.exception(f"Unhandled exception: {exc}")

        body = _error_body(
            str(exc) if settings.is_development() else "Internal server error",
            "internal_error"
        )
        body["timestamp"] = datetime.utcnow().isoformat()
        return JSONResponse(status_code=500, content=body)

    # ============================================================
    # Routers
    # ============================================================

    app.include_router(health_router)
    app.include_router(upload_router)
    app.include_router(question_router)
    app.include_router(history_router)
    app.include_router(refactor_router)

    @app.get("/", include_in_schema=False)
    async def root():
        """Service banner with the endpoint map."""
        return {
            "message": "RepoMind API is running!",
            "version": __version__,
            "documentation": "/docs",
            "endpoints": {
                "upload": "/api/upload/zip or /api/upload/github",
                "question": "/api/question/ask",
                "history": "/api/history/:codebaseId",
                "refactor": "/api/refactor",
                "health": "/api/health"
            }
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "repomind.api.main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=settings.is_development()
    )
