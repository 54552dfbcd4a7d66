# =============================================================================
# File: exceptions.py
# Date: 2026-10-18
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

"""Custom exceptions for LinguaSpark application."""
from typing import Optional


class LinguaSparkError(Exception):
    """Base exception for all LinguaSpark errors."""

    def __init__(self, message: str, error_code: Optional[str] = None):
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        super().__init__(self.message)


class ValidationException(LinguaSparkError):
    """Input validation errors."""

    pass


class InvalidInputError(ValidationException):
    """Malformed caller input (missing text, missing target language)."""

    pass


class UnsafePathError(ValidationException):
    """A caller-supplied path escapes the permitted model directories."""

    pass


class ModelException(LinguaSparkError):
    """Exceptions related to language-pair models and engines."""

    pass


class ModelNotAvailable(ModelException):
    """No registry entry, or artifacts missing/unreadable, for a required key."""

    pass


class RouteNotFound(ModelException):
    """Neither a direct pair nor a pivot path exists for the request."""

    pass


class EngineInitFailure(ModelException):
    """The engine runtime failed to instantiate a model."""

    pass


class EngineRuntimeError(ModelException):
    """A translate call failed on an already-resident engine."""

    pass


class EngineEvicted(ModelException):
    """The acquired engine was evicted before it could be used."""

    pass


class TimeoutException(LinguaSparkError):
    """Operation timeout errors."""

    pass


class EngineInitTimeout(EngineInitFailure, TimeoutException):
    """Engine instantiation did not finish within the configured timeout."""

    pass


class ConfigurationException(LinguaSparkError):
    """Configuration-related errors."""

    pass


class InvalidConfigError(ConfigurationException):
    """Invalid configuration parameters."""

    pass


class MissingConfigError(ConfigurationException):
    """Required configuration missing."""

    pass


class AuthenticationException(LinguaSparkError):
    """Authentication-related errors."""

    pass


class UnauthorizedError(AuthenticationException):
    """Missing or invalid API key."""

    pass
