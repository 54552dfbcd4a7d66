# =============================================================================
# File: health.py
# Date: 2026-10-18
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

from fastapi import APIRouter

from app.app_state import TranslationState
from app.dependencies.state import STATE_DEP
from app.services.health_service import HealthService

router = APIRouter()


@router.get("/health")
async def health_check(state: TranslationState = STATE_DEP) -> dict:
    """Registry contents and resident engine; does not touch the engine."""
    return HealthService.get_health_status(state)
