# =============================================================================
# File: test_translation_service.py
# Date: 2026-10-18
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

"""Tests for request orchestration: route, acquire, translate, record."""

import asyncio
from unittest.mock import AsyncMock, Mock

import pytest
import pytest_asyncio

from app.exceptions import InvalidInputError, RouteNotFound
from app.services.activity_log import ActivityLog
from app.services.model_registry import ModelRegistry
from app.services.pivot_router import PivotRouter
from app.services.translation_service import TranslationService

PAIRS = ("en-zh", "zh-en", "en-ja", "ja-en")


@pytest_asyncio.fixture
async def state(make_state):
    state = make_state(*PAIRS, detector=lambda text: "zh-cn")
    await state.startup()
    yield state
    await state.shutdown()


@pytest.mark.asyncio
async def test_direct_translation_is_logged(state, fake_runtime):
    result = await state.translator.translate("hello", "en", "zh")

    assert result.text == "[en->zh] hello"
    assert (result.source_lang, result.target_lang) == ("en", "zh")
    assert result.hops == ["en-zh"]
    assert not result.pivoted

    (entry,) = state.activity_log.recent()
    assert (entry.source_lang, entry.target_lang) == ("en", "zh")
    assert entry.source == "hello"
    assert entry.translated == "[en->zh] hello"


@pytest.mark.asyncio
async def test_pivot_translation_chains_hops(state, fake_runtime):
    result = await state.translator.translate("你好", "zh", "ja")

    assert result.text == "[en->ja] [zh->en] 你好"
    assert result.hops == ["zh-en", "en-ja"]
    assert result.pivoted
    assert len(fake_runtime.live_handles) == 1
    assert state.slot.resident_key == "en-ja"

    (entry,) = state.activity_log.recent()
    assert (entry.source_lang, entry.target_lang) == ("zh", "ja")


@pytest.mark.asyncio
async def test_traditional_to_simplified_goes_through_english(state):
    result = await state.translator.translate("你好", "zh-TW", "zh-CN")

    assert result.text == "[en->zh] [zh->en] 你好"
    assert (result.source_lang, result.target_lang) == ("zh-Hant", "zh")
    assert result.hops == ["zh-en", "en-zh"]


@pytest.mark.asyncio
async def test_identity_skips_engine(state, fake_runtime):
    result = await state.translator.translate("hello", "en-US", "en")

    assert result.text == "hello"
    assert result.hops == []
    assert fake_runtime.instantiated == []
    assert len(state.activity_log) == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("source", [None, "", "auto", "AUTO"])
async def test_source_is_detected(state, source):
    result = await state.translator.translate("你好世界", source, "en")
    assert result.source_lang == "zh"
    assert result.text == "[zh->en] 你好世界"


@pytest.mark.asyncio
async def test_missing_text_or_target(state):
    with pytest.raises(InvalidInputError):
        await state.translator.translate("", "en", "zh")
    with pytest.raises(InvalidInputError):
        await state.translator.translate("hello", "en", "")
    assert len(state.activity_log) == 0


@pytest.mark.asyncio
@pytest.mark.parametrize("source, target", [("_", "en"), ("en", "_"), ("../etc", "zh")])
async def test_malformed_language_codes_are_invalid_input(state, fake_runtime, source, target):
    with pytest.raises(InvalidInputError):
        await state.translator.translate("hello", source, target)
    assert fake_runtime.instantiated == []


@pytest.mark.asyncio
async def test_route_not_found_is_not_logged(state, fake_runtime):
    with pytest.raises(RouteNotFound):
        await state.translator.translate("bonjour", "fr", "de")
    assert len(state.activity_log) == 0
    assert fake_runtime.instantiated == []


@pytest.mark.asyncio
async def test_batch_detects_once_and_keeps_order(make_state):
    detector = Mock(return_value="ja")
    state = make_state(*PAIRS, detector=detector)
    await state.startup()

    results = await state.translator.translate_batch(["一", "", "三"], "auto", "en")

    assert [r.text for r in results] == ["[ja->en] 一", "", "[ja->en] 三"]
    detector.assert_called_once_with("一")
    assert len(state.activity_log) == 2


@pytest.mark.asyncio
async def test_batch_empty(state):
    assert await state.translator.translate_batch([], "en", "zh") == []


@pytest.mark.asyncio
async def test_concurrent_requests_for_different_pairs(state, fake_runtime):
    requests = [("hello", "en", "zh"), ("你好", "zh", "en"), ("world", "en", "zh")]

    results = await asyncio.gather(
        *(state.translator.translate(text, src, tgt) for text, src, tgt in requests)
    )

    for (text, src, tgt), result in zip(requests, results):
        assert result.text == f"[{src}->{tgt}] {text}"
    assert len(fake_runtime.live_handles) == 1
    assert state.slot.stats.translations == 3
    assert state.slot.stats.translation_failures == 0


@pytest.mark.asyncio
async def test_two_pairs_in_flight_both_complete(state, fake_runtime):
    results = await asyncio.gather(
        state.translator.translate("hello", "en", "zh"),
        state.translator.translate("你好", "zh", "en"),
    )

    assert [r.text for r in results] == ["[en->zh] hello", "[zh->en] 你好"]
    stats = state.slot.get_stats()
    assert stats["translations"] == 2
    # Each request loads its pair at most twice: once queued, once on reload.
    assert stats["loads"] <= 4


@pytest.mark.asyncio
async def test_hops_go_through_coordinator_translate(make_models_dir):
    registry = ModelRegistry(str(make_models_dir("en-zh")))
    registry.scan()
    coordinator = Mock()
    coordinator.translate = AsyncMock(return_value="你好")
    service = TranslationService(PivotRouter(registry), coordinator, ActivityLog())

    result = await service.translate("hello", "en", "zh")

    assert result.text == "你好"
    coordinator.translate.assert_awaited_once_with("en-zh", "hello")
