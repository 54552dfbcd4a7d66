# =============================================================================
# File: main.py
# Date: 2026-10-18
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

import os
import signal
import sys

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response

from app.app_init import APP_SETTINGS
from app.app_routing import setup_routing
from app.app_startup import lifespan
from app.exceptions import LinguaSparkError
from app.logger import get_logger
from app.utils.error_handler import ErrorHandler
from app.utils.log_sanitizer import sanitize_for_log

logger = get_logger("main")


def create_app() -> FastAPI:
    app = FastAPI(
        title=APP_SETTINGS.app.name,
        description=APP_SETTINGS.app.description,
        version=APP_SETTINGS.app.version,
        lifespan=lifespan,
    )

    # Global exception handlers
    @app.exception_handler(LinguaSparkError)
    async def linguaspark_exception_handler(request: Request, exc: LinguaSparkError):
        """Handle custom LinguaSpark exceptions."""
        status_code = ErrorHandler.get_http_status(exc)
        logger.warning(
            "LinguaSpark exception in %s: %s",
            sanitize_for_log(request.url.path),
            sanitize_for_log(exc.message),
        )
        return JSONResponse(
            status_code=status_code,
            content={
                "success": False,
                "message": exc.message,
                "error_code": exc.error_code,
                "detail": exc.message,
            },
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions."""
        ErrorHandler.handle_exception(
            exc, f"request to {request.url.path}", include_traceback=True
        )
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "message": "Internal server error",
                "error_code": "INTERNAL_ERROR",
                "detail": "An unexpected error occurred",
            },
        )

    setup_routing(app)

    @app.get("/")
    def root() -> dict:
        """Root endpoint."""
        return {
            "message": f"{APP_SETTINGS.app.name} API is running",
            "version": APP_SETTINGS.app.version,
            "docs": "/docs",
        }

    @app.get("/favicon.ico", include_in_schema=False)
    def favicon():
        return Response(status_code=204)

    return app


app = create_app()


def signal_handler(signum, frame):
    """Handle shutdown signals gracefully."""
    logger.info(f"Received signal {signum}, shutting down gracefully...")
    sys.exit(0)


def run_server():
    signal.signal(signal.SIGTERM, signal_handler)

    logger.info(
        f"Starting uvicorn server on {APP_SETTINGS.server.host}:{APP_SETTINGS.server.port}"
    )

    import uvicorn

    # One worker: the resident engine slot is per process.
    uvicorn.run(
        "app.main:app",
        host=APP_SETTINGS.server.host,
        port=APP_SETTINGS.server.port,
        workers=None,
        log_level="debug" if os.getenv("APP_DEBUG_MODE", "0") == "1" else "info",
        access_log=True,
        timeout_keep_alive=APP_SETTINGS.server.keepalive_timeout,
        timeout_graceful_shutdown=APP_SETTINGS.server.graceful_timeout,
    )

    logger.info("LinguaSpark server stopped")


if __name__ == "__main__":
    try:
        run_server()
    except KeyboardInterrupt:
        logger.info("Application stopped by user")
    except Exception as e:
        logger.error("Fatal error:", exc_info=e)
        sys.exit(1)

# Run Instruction
# Set Env: $env:LINGUASPARK_API_ENV="Development"
# Unit Test : python -m pytest
# Run for terminal: python -m app.main
