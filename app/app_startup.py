# =============================================================================
# File: app_startup.py
# Date: 2026-10-18
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.app_init import APP_SETTINGS
from app.app_state import TranslationState
from app.logger import get_logger
from app.utils.performance_tracker import perf_tracker

logger = get_logger("app_startup")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan events.

    Responsibilities:
    - Create the translation state on the running event loop
    - Scan the models directory and optionally warm the artifact cache
    - Destroy the resident engine on shutdown
    """
    # Tests may install a state (with a fake runtime) before startup.
    state = getattr(app.state, "translation", None)
    if state is None:
        state = TranslationState(APP_SETTINGS)
        app.state.translation = state

    logger.info("Scanning models directory: %s", state.registry.models_dir)
    await state.startup()

    yield

    # Shutdown
    await state.shutdown()
    perf_tracker.log_stats()
