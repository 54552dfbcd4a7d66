# =============================================================================
# File: load_coordinator.py
# Date: 2026-10-18
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

"""Deduplicates engine loads and serializes slot transitions.

Concurrent ``acquire`` calls for the same key share one pending load;
loads for different keys queue on the slot's transition lock, so an
install or eviction is never observed half-finished. ``translate``
makes a key resident and runs the engine in one hold of that lock, so a
queued load for another pair cannot slip in between. Requests that
alternate between pairs still reload each time; the slot's ``evictions``
counter makes that visible.
"""

import asyncio
from typing import Dict

from app.exceptions import ModelNotAvailable
from app.logger import get_logger
from app.services.engine_slot import ResidentEngine, ResidentEngineSlot
from app.services.model_registry import ModelRegistry

logger = get_logger("load_coordinator")


class LoadCoordinator:
    def __init__(self, registry: ModelRegistry, slot: ResidentEngineSlot):
        self.registry = registry
        self.slot = slot
        self._pending: Dict[str, "asyncio.Task[ResidentEngine]"] = {}

    @property
    def pending_keys(self):
        return sorted(self._pending)

    async def acquire(self, key: str) -> ResidentEngine:
        """Return the resident engine for ``key``, loading it if needed."""
        descriptor = self.registry.lookup(key)
        if descriptor is None:
            raise ModelNotAvailable(f"Model not available: {key}")

        resident = self.slot.resident
        if resident is not None and resident.key == key and key not in self._pending:
            self.slot.stats.hits += 1
            return resident

        pending = self._pending.get(key)
        if pending is not None:
            logger.info("Waiting for model %s to finish loading...", key)
        else:
            pending = asyncio.ensure_future(self._load(key))
            self._pending[key] = pending
            pending.add_done_callback(self._log_outcome)

        # Waiters being cancelled must not cancel the shared load.
        return await asyncio.shield(pending)

    async def translate(self, key: str, text: str) -> str:
        """Translate ``text`` with ``key``'s engine, loading it first if needed."""
        await self.acquire(key)
        async with self.slot.transition_lock:
            engine = self.slot.resident
            if engine is None or engine.key != key:
                descriptor = self.registry.lookup(key)
                if descriptor is None:
                    raise ModelNotAvailable(f"Model not available: {key}")
                logger.info("Model %s was replaced before use, reloading", key)
                engine = await self.slot.install(descriptor)
            return await self.slot.translate_locked(engine, text)

    async def _load(self, key: str) -> ResidentEngine:
        try:
            descriptor = self.registry.lookup(key)
            if descriptor is None:
                raise ModelNotAvailable(f"Model not available: {key}")
            async with self.slot.transition_lock:
                return await self.slot.install(descriptor)
        finally:
            # Settled either way: the next caller starts a fresh attempt.
            if self._pending.get(key) is asyncio.current_task():
                del self._pending[key]

    @staticmethod
    def _log_outcome(task: "asyncio.Task[ResidentEngine]") -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.warning("Model load failed: %s", exc)
