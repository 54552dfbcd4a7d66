# =============================================================================
# File: translation_service.py
# Date: 2026-10-18
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

"""Request orchestration: normalize, route, acquire, translate, record."""

from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

from app.exceptions import InvalidInputError
from app.logger import get_logger
from app.services.activity_log import ActivityLog
from app.services.language_detector import detect as detect_language
from app.services.load_coordinator import LoadCoordinator
from app.services.pivot_router import PivotRouter
from app.utils.language_codes import is_valid_code, normalize, pair_key
from app.utils.log_sanitizer import sanitize_for_log

logger = get_logger("translation_service")

AUTO_DETECT = "auto"


@dataclass
class TranslationResult:
    text: str
    source_lang: str
    target_lang: str
    hops: List[str] = field(default_factory=list)

    @property
    def pivoted(self) -> bool:
        return len(self.hops) > 1


class TranslationService:
    def __init__(
        self,
        router: PivotRouter,
        coordinator: LoadCoordinator,
        activity_log: ActivityLog,
        detector: Callable[[str], str] = detect_language,
    ):
        self.router = router
        self.coordinator = coordinator
        self.activity_log = activity_log
        self.detector = detector

    def resolve_source(self, source_lang: Optional[str], text: str) -> str:
        if not source_lang or source_lang.strip().lower() == AUTO_DETECT:
            return normalize(self.detector(text))
        return normalize(source_lang)

    async def translate(
        self, text: str, source_lang: Optional[str], target_lang: str
    ) -> TranslationResult:
        if not text or not isinstance(text, str):
            raise InvalidInputError("Missing text")
        target = normalize(target_lang)
        if not target:
            raise InvalidInputError("Missing target language")
        if not is_valid_code(target):
            raise InvalidInputError(f"Invalid target language: {sanitize_for_log(target_lang)}")
        source = self.resolve_source(source_lang, text)
        if not is_valid_code(source):
            raise InvalidInputError(f"Invalid source language: {sanitize_for_log(source_lang)}")

        hops = self.router.route(source, target)
        if not hops:
            result = TranslationResult(text, source, target)
        else:
            current = text
            for hop_source, hop_target in hops:
                current = await self._run_hop(pair_key(hop_source, hop_target), current)
            result = TranslationResult(current, source, target, self.router.hop_keys(hops))

        self.activity_log.record(source, target, text, result.text)
        return result

    async def translate_batch(
        self, texts: Sequence[str], source_lang: Optional[str], target_lang: str
    ) -> List[TranslationResult]:
        if not texts:
            return []
        # One detection for the whole batch, from its first item.
        source = self.resolve_source(source_lang, texts[0] or "")
        results = []
        for text in texts:
            if not text:
                # Blank entries keep their position in the batch.
                results.append(TranslationResult(text or "", source, normalize(target_lang)))
                continue
            results.append(await self.translate(text, source, target_lang))
        return results

    async def _run_hop(self, key: str, text: str) -> str:
        logger.debug("Translating via %s: %s", key, sanitize_for_log(text, 80))
        return await self.coordinator.translate(key, text)
