# =============================================================================
# File: error_handler.py
# Date: 2026-10-18
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

"""Centralized error handling utilities."""

import traceback
from typing import Any, Dict

from app.exceptions import (
    AuthenticationException,
    ConfigurationException,
    LinguaSparkError,
    ModelException,
    ModelNotAvailable,
    RouteNotFound,
    TimeoutException,
    ValidationException,
)
from app.logger import get_logger
from app.utils.log_sanitizer import sanitize_for_log

logger = get_logger("error_handler")


class ErrorHandler:
    """Centralized error handling and response formatting."""

    ERROR_MAPPINGS = {
        FileNotFoundError: ("Model files not accessible", "FILE_NOT_FOUND"),
        OSError: ("System resource error", "SYSTEM_ERROR"),
        ValueError: ("Invalid parameter value", "INVALID_VALUE"),
        TimeoutError: ("Operation timed out", "TIMEOUT"),
        MemoryError: ("Insufficient memory", "MEMORY_ERROR"),
        RuntimeError: ("Runtime error occurred", "RUNTIME_ERROR"),
    }

    @staticmethod
    def handle_exception(
        exc: Exception, context: str = "operation", include_traceback: bool = False
    ) -> Dict[str, Any]:
        """Log ``exc`` and return a standardized error payload."""

        if isinstance(exc, LinguaSparkError):
            error_code = exc.error_code
            message = exc.message
            log_level = "warning"
        else:
            message, error_code = ErrorHandler.ERROR_MAPPINGS.get(
                type(exc), ("Internal server error", "UNKNOWN_ERROR")
            )
            log_level = "error"

        log_message = f"{context} failed: {sanitize_for_log(str(exc) or message)}"
        if log_level == "error":
            logger.error(log_message)
            if include_traceback:
                logger.error("Traceback: %s", sanitize_for_log(traceback.format_exc(), 2000))
        else:
            logger.warning(log_message)

        return {
            "success": False,
            "message": message,
            "error_code": error_code,
            "context": context,
        }

    @staticmethod
    def get_http_status(exc: Exception) -> int:
        """Get appropriate HTTP status code for exception."""

        if isinstance(exc, ValidationException):
            return 400
        elif isinstance(exc, AuthenticationException):
            return 401
        elif isinstance(exc, (ModelNotAvailable, RouteNotFound)):
            return 404
        # EngineInitTimeout is also a ModelException; the timeout wins.
        elif isinstance(exc, TimeoutException):
            return 504
        elif isinstance(exc, ModelException):
            return 503
        elif isinstance(exc, ConfigurationException):
            return 500
        else:
            return 500
