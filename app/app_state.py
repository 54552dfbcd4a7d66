# =============================================================================
# File: app_state.py
# Date: 2026-10-18
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

"""Owner of the process-wide translation state.

Registry, resident slot, pending loads and activity log live on one
`TranslationState`; request handlers reach them only through its
attributes, never through module globals.
"""

import asyncio
import time
from typing import Callable, Optional

from app.exceptions import EngineInitFailure
from app.logger import get_logger
from app.services.activity_log import ActivityLog
from app.services.engine_runtime import EngineRuntime, create_runtime
from app.services.engine_slot import ResidentEngineSlot
from app.services.language_detector import detect as detect_language
from app.services.load_coordinator import LoadCoordinator
from app.services.model_registry import ModelRegistry
from app.services.pivot_router import PivotRouter
from app.services.translation_service import TranslationService

logger = get_logger("app_state")


class TranslationState:
    def __init__(
        self,
        settings,
        runtime: Optional[EngineRuntime] = None,
        detector: Callable[[str], str] = detect_language,
    ):
        self.settings = settings
        self.started_at = time.time()
        self.registry = ModelRegistry(
            settings.models.models_dir,
            allowed_dirs=settings.models.allowed_model_dirs,
        )
        self.slot = ResidentEngineSlot(
            runtime=runtime,
            runtime_factory=lambda: create_runtime(settings.engine.runtime),
            init_timeout=settings.engine.init_timeout_seconds,
        )
        self.coordinator = LoadCoordinator(self.registry, self.slot)
        self.router = PivotRouter(self.registry, settings.models.hub_language)
        self.activity_log = ActivityLog(
            retention_seconds=settings.activity_log.retention_seconds,
            max_entries=settings.activity_log.max_entries,
            excerpt_chars=settings.activity_log.excerpt_chars,
        )
        self.detector = detector
        self.translator = TranslationService(
            self.router,
            self.coordinator,
            self.activity_log,
            detector=detector,
        )

    @property
    def uptime_seconds(self) -> float:
        return time.time() - self.started_at

    async def startup(self) -> None:
        """Bind the engine runtime and scan the models directory; preload when configured."""
        try:
            self.slot.ensure_runtime()
        except EngineInitFailure as e:
            # Listing and registering models still works; loads fail per request.
            logger.warning("Engine runtime not ready: %s", e.message)
        descriptors = await asyncio.to_thread(self.registry.scan)
        logger.info("Registered %d model(s) at startup", len(descriptors))
        if self.settings.models.preload_artifacts and descriptors:
            loaded = await asyncio.to_thread(self.registry.preload)
            logger.info("Preloaded artifacts for %d model(s)", loaded)

    async def shutdown(self) -> None:
        logger.info("Shutting down: releasing resident engine")
        await self.slot.shutdown()
