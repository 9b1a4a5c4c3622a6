"""
Task Evaluator Backend — FastAPI Application Factory
=====================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Served by uvicorn (`uvicorn taskeval.main:app`) or the `taskeval`
       console script, which calls run().

Application Architecture:
    ┌───────────────────────────────────────────────────────────┐
    │                       FastAPI App                         │
    │                                                           │
    │  Middleware Chain:                                        │
    │  ┌──────────┐ ┌──────────┐ ┌──────────┐ ┌──────────┐      │
    │  │  Req ID  │→│ Logging  │→│   GZip   │→│   CORS   │      │
    │  └──────────┘ └──────────┘ └──────────┘ └──────────┘      │
    │                                                           │
    │  Routes:                                                  │
    │  POST /api/analyze   POST /api/analyze-image              │
    │  POST /api/summarize GET  /health                         │
    │                                                           │
    │  Exception Handlers:                                      │
    │  TaskEvalError → status_code  RequestValidation → 422     │
    │  Exception → 500                                          │
    └───────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:   configure logging, validate configuration (logged, not fatal)
    Shutdown:  dispose the database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Sequence

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from taskeval import __version__
from taskeval.config import settings
from taskeval.database import dispose_engine
from taskeval.exceptions import TaskEvalError
from taskeval.middleware.logging import RequestLoggingMiddleware
from taskeval.middleware.request_id import RequestIDMiddleware, request_id_var
from taskeval.routes import analyze, analyze_image, health, summarize

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Something went wrong"


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: 2026-01-01T12:00:00 [INFO] taskeval.services.gemini_service: ...

    Called once from the lifespan, before anything else logs.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Chatty third-party loggers
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("PIL").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info("=" * 60)
    logger.info("Task Evaluator Backend starting up...")

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # Not fatal: /health and the OCR route work without Gemini
        logger.error("Configuration error: %s", str(e))

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.port)
    logger.info("API docs: http://%s:%d/docs", settings.backend_host, settings.port)
    logger.info("=" * 60)

    yield

    logger.info("Task Evaluator Backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _describe_validation_errors(errors: Sequence[Dict[str, Any]]) -> str:
    """Flatten pydantic errors into one line: "Invalid request: body.options.criteria: ..."."""
    parts = []
    for error in errors:
        location = ".".join(str(part) for part in error.get("loc", ()))
        message = error.get("msg", "invalid value")
        parts.append(f"{location}: {message}" if location else message)
    if not parts:
        return "Invalid request"
    return "Invalid request: " + "; ".join(parts)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers.

    Every application error renders as {"error": <message>, "request_id": <id>}
    with the status code carried by the exception class:

        ValidationError  → 400
        everything else  → 500

    Malformed bodies that FastAPI cannot validate (wrong types, unknown enum
    values, non-JSON payloads) keep their 422 status but use the same body.

    `exc.context` is logged server-side only and never returned.
    """

    @app.exception_handler(TaskEvalError)
    async def handle_app_error(request: Request, exc: TaskEvalError):
        rid = request_id_var.get("")
        if exc.status_code >= 500:
            logger.error(
                "[%s] %s: %s | Context: %s",
                rid,
                type(exc).__name__,
                exc.message,
                exc.context,
            )
        else:
            logger.warning("[%s] %s: %s", rid, type(exc).__name__, exc.message)
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.message, "request_id": rid},
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        rid = request_id_var.get("")
        message = _describe_validation_errors(exc.errors())
        logger.warning("[%s] Request validation failed: %s", rid, message)
        return JSONResponse(
            status_code=422,
            content={"error": message, "request_id": rid},
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"error": GENERIC_ERROR_MESSAGE, "request_id": rid},
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    app = FastAPI(
        title="Task Evaluator API",
        description=(
            "Scores writing and source code with Google Gemini, reads text from "
            "screenshots with Tesseract OCR, and stores AI-generated summaries."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Middleware executes in reverse order of addition:
    # RequestID → Logging → GZip → CORS
    origins = settings.cors_origins_list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        # Browsers reject credentialed requests against a wildcard origin
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(analyze.router)
    app.include_router(analyze_image.router)
    app.include_router(summarize.router)
    app.include_router(health.router)

    return app


app = create_app()


def run() -> None:
    """Entry point for the `taskeval` console script."""
    uvicorn.run(
        "taskeval.main:app",
        host=settings.backend_host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
