# =============================================================================
# File: engine_slot.py
# Date: 2026-10-18
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

"""Single-slot holder for the resident translation engine.

At most one engine handle is alive at a time. Installing a different pair
destroys the resident handle first, and every transition happens under the
slot's transition lock, which the load coordinator owns.
"""

import asyncio
import time
from dataclasses import asdict, dataclass
from typing import Any, Callable, Dict, Optional

from app.exceptions import (
    EngineEvicted,
    EngineInitFailure,
    EngineInitTimeout,
    EngineRuntimeError,
    LinguaSparkError,
)
from app.logger import get_logger
from app.services.engine_runtime import DECODING_CONFIG, EngineRuntime, clean_text
from app.services.model_registry import ModelDescriptor
from app.utils.log_sanitizer import sanitize_for_log
from app.utils.performance_tracker import perf_tracker

logger = get_logger("engine_slot")


@dataclass
class SlotStats:
    loads: int = 0
    hits: int = 0
    evictions: int = 0
    load_failures: int = 0
    timeouts: int = 0
    translations: int = 0
    translation_failures: int = 0
    last_load_seconds: Optional[float] = None


class ResidentEngine:
    """The one instantiated engine, bound to a single language pair."""

    def __init__(self, slot: "ResidentEngineSlot", descriptor: ModelDescriptor, handle: Any):
        self._slot = slot
        self.key = descriptor.key
        self.source_lang = descriptor.source_lang
        self.target_lang = descriptor.target_lang
        self.handle = handle
        self.closed = False
        self.loaded_at = time.time()

    async def translate(self, text: str) -> str:
        """Translate through this engine; raises EngineEvicted if it is no longer resident."""
        return await self._slot.run_translation(self, text)

    def __repr__(self) -> str:
        state = "closed" if self.closed else "resident"
        return f"<ResidentEngine {self.key} {state}>"


class ResidentEngineSlot:
    def __init__(
        self,
        runtime: Optional[EngineRuntime] = None,
        runtime_factory: Optional[Callable[[], EngineRuntime]] = None,
        init_timeout: float = 30.0,
        decoding_config: Optional[Dict[str, Any]] = None,
    ):
        self._runtime = runtime
        self._runtime_factory = runtime_factory
        self.init_timeout = init_timeout
        self.decoding_config = dict(decoding_config or DECODING_CONFIG)
        self.transition_lock = asyncio.Lock()
        self._resident: Optional[ResidentEngine] = None
        self.stats = SlotStats()

    @property
    def resident(self) -> Optional[ResidentEngine]:
        return self._resident

    @property
    def resident_key(self) -> Optional[str]:
        return self._resident.key if self._resident is not None else None

    def ensure_runtime(self) -> EngineRuntime:
        """Bind the engine runtime now rather than on the first load."""
        return self._get_runtime()

    def _get_runtime(self) -> EngineRuntime:
        if self._runtime is None:
            if self._runtime_factory is None:
                raise EngineInitFailure("No engine runtime configured")
            try:
                self._runtime = self._runtime_factory()
            except (ImportError, ValueError) as e:
                logger.error("Engine runtime unavailable: %s", sanitize_for_log(str(e)))
                raise EngineInitFailure(f"Engine runtime unavailable: {e}")
        return self._runtime

    async def install(self, descriptor: ModelDescriptor) -> ResidentEngine:
        """Make ``descriptor``'s engine resident. Caller must hold the transition lock."""
        if not self.transition_lock.locked():
            raise RuntimeError("install() requires the slot transition lock")

        resident = self._resident
        if resident is not None and resident.key == descriptor.key:
            self.stats.hits += 1
            return resident

        if resident is not None:
            self._evict(resident)

        start = time.perf_counter()
        try:
            if not descriptor.is_loaded:
                logger.info("Loading model files: %s", descriptor.key)
                artifacts = await asyncio.to_thread(descriptor.load_artifacts)
            else:
                artifacts = descriptor.artifacts
            logger.info("Creating engine instance for model: %s", descriptor.key)
            with perf_tracker.track("engine_load"):
                handle = await self._instantiate(descriptor, artifacts)
        except LinguaSparkError:
            self.stats.load_failures += 1
            raise

        engine = ResidentEngine(self, descriptor, handle)
        self._resident = engine
        self.stats.loads += 1
        self.stats.last_load_seconds = time.perf_counter() - start
        logger.info(
            "Model activated: %s (%.2fs)", descriptor.key, self.stats.last_load_seconds
        )
        return engine

    async def _instantiate(self, descriptor: ModelDescriptor, artifacts: Any) -> Any:
        runtime = self._get_runtime()
        loop = asyncio.get_running_loop()
        future = loop.run_in_executor(
            None,
            runtime.instantiate,
            descriptor.source_lang,
            descriptor.target_lang,
            self.decoding_config,
            artifacts,
        )
        try:
            return await asyncio.wait_for(asyncio.shield(future), self.init_timeout)
        except asyncio.TimeoutError:
            self.stats.timeouts += 1
            future.add_done_callback(self._discard_late_handle(runtime, descriptor.key))
            logger.error(
                "Engine init timeout for %s after %.1fs", descriptor.key, self.init_timeout
            )
            raise EngineInitTimeout(
                f"Engine init timeout for {descriptor.key} after {self.init_timeout}s"
            )
        except LinguaSparkError:
            raise
        except Exception as e:
            logger.error(
                "Engine init failed for %s: %s", descriptor.key, sanitize_for_log(str(e))
            )
            raise EngineInitFailure(f"Engine init failed for {descriptor.key}: {e}") from e

    @staticmethod
    def _discard_late_handle(runtime: EngineRuntime, key: str) -> Callable[[Any], None]:
        def _callback(future: "asyncio.Future[Any]") -> None:
            if future.cancelled() or future.exception() is not None:
                return
            logger.warning("Destroying engine for %s that finished after its timeout", key)
            try:
                runtime.destroy(future.result())
            except Exception as e:
                logger.warning(f"Error destroying late engine for {key}: {e}")

        return _callback

    def _evict(self, resident: ResidentEngine) -> None:
        logger.info("Unloading previous model: %s", resident.key)
        self._resident = None
        resident.closed = True
        self.stats.evictions += 1
        try:
            self._get_runtime().destroy(resident.handle)
        except Exception as e:
            logger.warning(f"Error destroying engine for {resident.key}: {e}")
        resident.handle = None

    async def run_translation(self, engine: ResidentEngine, text: str) -> str:
        async with self.transition_lock:
            return await self.translate_locked(engine, text)

    async def translate_locked(self, engine: ResidentEngine, text: str) -> str:
        """Run ``engine`` on ``text``. Caller must hold the transition lock."""
        if not self.transition_lock.locked():
            raise RuntimeError("translate_locked() requires the slot transition lock")
        if engine.closed or engine is not self._resident:
            raise EngineEvicted(f"Engine for {engine.key} was evicted")
        runtime = self._get_runtime()
        with perf_tracker.track("engine_translate"):
            try:
                result = await self._run_blocking(
                    runtime.translate, engine.handle, clean_text(text)
                )
            except LinguaSparkError:
                self.stats.translation_failures += 1
                raise
            except Exception as e:
                self.stats.translation_failures += 1
                logger.error(
                    "Translation failed on %s: %s", engine.key, sanitize_for_log(str(e))
                )
                raise EngineRuntimeError(f"Translation failed on {engine.key}: {e}") from e
        self.stats.translations += 1
        return result

    @staticmethod
    async def _run_blocking(func: Callable[..., Any], *args: Any) -> Any:
        loop = asyncio.get_running_loop()
        future = loop.run_in_executor(None, func, *args)
        try:
            return await asyncio.shield(future)
        except asyncio.CancelledError:
            # Hold the lock until the engine call returns; the handle is still in use.
            await asyncio.wait({future})
            raise

    async def shutdown(self) -> None:
        async with self.transition_lock:
            if self._resident is not None:
                self._evict(self._resident)

    def get_stats(self) -> Dict[str, Any]:
        stats = asdict(self.stats)
        stats["resident_key"] = self.resident_key
        return stats
