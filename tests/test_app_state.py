# =============================================================================
# File: test_app_state.py
# Date: 2026-10-18
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

"""Tests for the process-wide translation state lifecycle."""

import pytest

from app.exceptions import EngineInitFailure


@pytest.mark.asyncio
async def test_startup_scans_without_reading(make_state):
    state = make_state("en-zh", "zh-en")
    await state.startup()

    assert [d.key for d in state.registry.list()] == ["en-zh", "zh-en"]
    assert not any(d.is_loaded for d in state.registry.list())


@pytest.mark.asyncio
async def test_startup_preload(make_state):
    state = make_state("en-zh", models={"preload_artifacts": True})
    await state.startup()

    assert state.registry.lookup("en-zh").is_loaded


@pytest.mark.asyncio
async def test_shutdown_releases_engine(make_state, fake_runtime):
    state = make_state("en-zh")
    await state.startup()
    await state.translator.translate("hello", "en", "zh")

    await state.shutdown()

    assert state.slot.resident is None
    assert fake_runtime.live_handles == []


@pytest.mark.asyncio
async def test_unknown_runtime_surfaces_as_init_failure(make_models_dir):
    from app.app_state import TranslationState
    from tests.fakes import make_settings

    settings = make_settings(str(make_models_dir("en-zh")), engine={"runtime": "nope"})
    state = TranslationState(settings)
    await state.startup()

    with pytest.raises(EngineInitFailure):
        await state.translator.translate("hello", "en", "zh")
