# =============================================================================
# File: fakes.py
# Date: 2026-10-18
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

"""Test doubles shared across the suite; imports nothing from `app`."""

import os
import threading
import types
from typing import Any, Dict, Iterable, List, Optional

DEFAULT_FILES = (
    "model.enzh.intgemm8.bin",
    "lex.50.50.enzh.s2t.bin",
    "srcvocab.enzh.spm",
    "trgvocab.enzh.spm",
)


def make_settings(models_dir: str = "./models", **overrides: Any) -> types.SimpleNamespace:
    """Settings object shaped like AppSettings, without running ConfigLoader."""
    settings = types.SimpleNamespace(
        app=types.SimpleNamespace(
            name="LinguaSpark Test",
            description="Test",
            version="0.0.0",
            is_production=False,
            debug=True,
            cors_origins=["*"],
        ),
        server=types.SimpleNamespace(
            host="localhost", port=3000, keepalive_timeout=5, graceful_timeout=5
        ),
        models=types.SimpleNamespace(
            models_dir=models_dir,
            preload_artifacts=False,
            hub_language="en",
            allowed_model_dirs=[],
        ),
        engine=types.SimpleNamespace(runtime="fake", init_timeout_seconds=5.0),
        activity_log=types.SimpleNamespace(
            retention_seconds=1200,
            max_entries=1000,
            excerpt_chars=500,
            default_limit=50,
            max_limit=200,
        ),
        security=types.SimpleNamespace(api_key=None),
        logging=types.SimpleNamespace(
            folder=os.environ.get("LINGUASPARK_LOG_PATH", "logs"),
            app_log_file="linguaspark.log",
            level="INFO",
        ),
    )
    for section, values in overrides.items():
        for key, value in values.items():
            setattr(getattr(settings, section), key, value)
    return settings


class FakeHandle:
    def __init__(self, source_lang: str, target_lang: str):
        self.source_lang = source_lang
        self.target_lang = target_lang
        self.destroyed = False


class FakeRuntime:
    """In-process stand-in for the engine runtime.

    Translation output is ``"[<from>-><to>] <text>"`` so multi-hop chains are
    visible in assertions. ``gate`` (a threading.Event) holds instantiation
    until it is set.
    """

    def __init__(
        self,
        fail_instantiate: Optional[Exception] = None,
        fail_translate: Optional[Exception] = None,
        gate: Optional[threading.Event] = None,
    ):
        self.fail_instantiate = fail_instantiate
        self.fail_translate = fail_translate
        self.gate = gate
        self.instantiated: List[FakeHandle] = []
        self.destroyed: List[FakeHandle] = []
        self.translated: List[str] = []
        self._lock = threading.Lock()

    def instantiate(self, source_lang: str, target_lang: str, config: Dict[str, Any], artifacts):
        if self.gate is not None:
            self.gate.wait(10)
        if self.fail_instantiate is not None:
            raise self.fail_instantiate
        handle = FakeHandle(source_lang, target_lang)
        with self._lock:
            self.instantiated.append(handle)
        return handle

    def translate(self, handle: FakeHandle, text: str) -> str:
        assert not handle.destroyed, "translate on a destroyed handle"
        if self.fail_translate is not None:
            raise self.fail_translate
        with self._lock:
            self.translated.append(text)
        return f"[{handle.source_lang}->{handle.target_lang}] {text}"

    def destroy(self, handle: FakeHandle) -> None:
        handle.destroyed = True
        with self._lock:
            self.destroyed.append(handle)

    @property
    def live_handles(self) -> List[FakeHandle]:
        return [h for h in self.instantiated if not h.destroyed]


def write_model_dir(root, name: str, files: Iterable[str] = DEFAULT_FILES):
    directory = root / name
    directory.mkdir(parents=True, exist_ok=True)
    for filename in files:
        (directory / filename).write_bytes(f"{name}:{filename}".encode("utf-8"))
    return directory
