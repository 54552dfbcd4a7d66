# =============================================================================
# File: conftest.py
# Date: 2026-10-18
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

import logging
import os
import sys
import tempfile
import types

os.environ.setdefault(
    "LINGUASPARK_LOG_PATH", os.path.join(tempfile.gettempdir(), "linguaspark-test-logs")
)

from tests.fakes import FakeRuntime, make_settings, write_model_dir

# Provide a lightweight `app.app_init` shim at import time to avoid running
# ConfigLoader during test collection.
if "app.app_init" not in sys.modules:
    shim = types.ModuleType("app.app_init")
    shim.APP_SETTINGS = make_settings()
    sys.modules["app.app_init"] = shim

import pytest

from app.app_state import TranslationState


@pytest.fixture(autouse=True, scope="session")
def silence_noisy_loggers():
    """Raise log level for loggers that emit expected warnings during tests."""
    noisy_loggers = [
        "linguaspark.auth",
        "linguaspark.app_init",
        "linguaspark.config_loader",
        "linguaspark.model_registry",
    ]
    previous_levels = {}
    for name in noisy_loggers:
        logger = logging.getLogger(name)
        previous_levels[name] = logger.level
        logger.setLevel(logging.ERROR)

    yield

    for name, level in previous_levels.items():
        logging.getLogger(name).setLevel(level)


@pytest.fixture
def fake_runtime():
    return FakeRuntime()


@pytest.fixture
def make_models_dir(tmp_path):
    """Create a models directory holding the given pair directories."""

    def _make(*names: str):
        root = tmp_path / "models"
        root.mkdir(exist_ok=True)
        for name in names:
            write_model_dir(root, name)
        return root

    return _make


@pytest.fixture
def make_state(make_models_dir, fake_runtime):
    """Build a TranslationState over a temp models dir; call ``await state.startup()``."""

    def _make(*names: str, runtime=None, detector=None, **overrides):
        root = make_models_dir(*names)
        settings = make_settings(str(root), **overrides)
        kwargs = {"runtime": runtime or fake_runtime}
        if detector is not None:
            kwargs["detector"] = detector
        return TranslationState(settings, **kwargs)

    return _make
