# =============================================================================
# File: health_service.py
# Date: 2026-10-18
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

from datetime import datetime, timezone
from typing import Any, Dict

from app.app_state import TranslationState
from app.logger import get_logger

logger = get_logger("health_service")


class HealthService:
    """Service for health check operations."""

    @classmethod
    def get_health_status(cls, state: TranslationState) -> Dict[str, Any]:
        """Summarize registry and slot state; never loads or evicts anything."""
        resident_key = state.slot.resident_key
        models = [descriptor.to_dict() for descriptor in state.registry.list()]

        components = {
            "registry": cls._check_registry(state),
            "authentication": cls._check_authentication(state),
        }

        return {
            "status": "ok",
            "service": state.settings.app.name,
            "version": state.settings.app.version,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "uptime_seconds": state.uptime_seconds,
            "engineLoaded": resident_key is not None,
            "residentModel": resident_key,
            "availableModels": models,
            "components": components,
        }

    @classmethod
    def _check_registry(cls, state: TranslationState) -> str:
        if state.registry.size() == 0:
            logger.warning(
                "No models registered under %s", state.registry.models_dir
            )
            return "degraded"
        return "healthy"

    @classmethod
    def _check_authentication(cls, state: TranslationState) -> str:
        return "enabled" if state.settings.security.api_key else "disabled"
