# =============================================================================
# File: pivot_router.py
# Date: 2026-10-18
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

from typing import List, Optional, Tuple

from app.exceptions import RouteNotFound
from app.logger import get_logger
from app.services.model_registry import ModelRegistry
from app.utils.language_codes import model_code, normalize, pair_key

logger = get_logger("pivot_router")

Hop = Tuple[str, str]


class PivotRouter:
    """Chooses direct, pivot (through the hub language) or identity routes."""

    def __init__(self, registry: ModelRegistry, hub_language: str = "en"):
        self.registry = registry
        self.hub = normalize(hub_language)

    def route(self, source_lang: str, target_lang: str) -> List[Hop]:
        """Return the ordered hops for a request; an empty list means identity."""
        source, target = normalize(source_lang), normalize(target_lang)
        if source == target:
            return []

        direct = self._direct(source, target)
        if direct is not None:
            return [direct]

        # Script variants of one language (zh -> zh-Hant) have no shared model,
        # so they pivot like any other pair.
        source_model, target_model = model_code(source), model_code(target)
        hub = self.hub
        if source_model != hub and target_model != hub:
            first = self._direct(source, hub)
            second = self._direct(hub, target)
            if first is not None and second is not None:
                logger.debug("Pivot route %s -> %s via %s", source, target, hub)
                return [first, second]

        raise RouteNotFound(
            f"No translation route from '{source}' to '{target}'"
        )

    def _direct(self, source: str, target: str) -> Optional[Hop]:
        """Exact pair first, then the base-language model for script variants."""
        if self.registry.has(pair_key(source, target)):
            return source, target
        source_model, target_model = model_code(source), model_code(target)
        if (source_model, target_model) != (source, target) and self.registry.has(
            pair_key(source_model, target_model)
        ):
            return source_model, target_model
        return None

    @staticmethod
    def hop_keys(hops: List[Hop]) -> List[str]:
        return [pair_key(source, target) for source, target in hops]
