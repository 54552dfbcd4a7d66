# =============================================================================
# File: engine_runtime.py
# Date: 2026-10-18
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

"""Binding to the external translation engine runtime.

The rest of the service only sees the `EngineRuntime` protocol: instantiate
a handle from a pair's artifacts, translate through it, destroy it. Handles
own native memory and must be destroyed explicitly.
"""

import re
from typing import Any, Dict, Protocol

from app.logger import get_logger
from app.services.model_registry import ArtifactBundle, ArtifactRole

logger = get_logger("engine_runtime")

# Fixed decoding configuration; not tunable per request.
DECODING_CONFIG: Dict[str, Any] = {
    "beam-size": 1,
    "normalize": 1.0,
    "word-penalty": 0,
    "max-length-break": 512,
    "mini-batch-words": 1024,
    "workspace": 128,
    "max-length-factor": 2.0,
    "skip-cost": True,
    "cpu-threads": 0,
    "quiet": True,
    "quiet-translation": True,
    "gemm-precision": "int8shiftAlphaAll",
    "alignment": "soft",
}

_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F\uFFFD]")


def clean_text(text: str) -> str:
    """Strip control characters (tab, LF and CR survive) and U+FFFD."""
    return _CONTROL_CHARS.sub("", text)


def render_config(config: Dict[str, Any]) -> str:
    lines = []
    for key, value in config.items():
        if isinstance(value, bool):
            value = "true" if value else "false"
        lines.append(f"{key}: {value}")
    return "\n".join(lines)


class EngineRuntime(Protocol):
    """Interface of the external engine runtime."""

    def instantiate(
        self,
        source_lang: str,
        target_lang: str,
        config: Dict[str, Any],
        artifacts: ArtifactBundle,
    ) -> Any:
        ...

    def translate(self, handle: Any, text: str) -> str:
        ...

    def destroy(self, handle: Any) -> None:
        ...


class _BergamotHandle:
    def __init__(self, service: Any, model: Any):
        self.service = service
        self.model = model


class BergamotRuntime:
    """Engine runtime backed by the `bergamot` Python bindings.

    The bindings build a model from a YAML configuration that points at
    the artifact files, so the configuration is rendered from the bundle's
    paths plus the fixed decoding options.
    """

    def __init__(self, num_workers: int = 1):
        try:
            import bergamot
        except ImportError as e:
            raise ImportError(
                "The bergamot engine runtime is not installed. "
                "Please install it with `pip install linguaspark[bergamot]`."
            ) from e
        self._bergamot = bergamot
        self._num_workers = num_workers

    @staticmethod
    def build_model_config(config: Dict[str, Any], artifacts: ArtifactBundle) -> str:
        paths = artifacts.paths
        model_files = "\n".join(
            [
                "models:",
                f"  - {paths[ArtifactRole.WEIGHTS]}",
                "vocabs:",
                f"  - {paths[ArtifactRole.SOURCE_VOCAB]}",
                f"  - {paths[ArtifactRole.TARGET_VOCAB]}",
                "shortlist:",
                f"  - {paths[ArtifactRole.LEXICON]}",
                "  - false",
            ]
        )
        return model_files + "\n" + render_config(config)

    def instantiate(
        self,
        source_lang: str,
        target_lang: str,
        config: Dict[str, Any],
        artifacts: ArtifactBundle,
    ) -> _BergamotHandle:
        bergamot = self._bergamot
        logger.info("Creating bergamot model for %s-%s", source_lang, target_lang)
        service = bergamot.Service(
            bergamot.ServiceConfig(numWorkers=self._num_workers, cacheSize=0, logLevel="off")
        )
        model = service.modelFromConfig(self.build_model_config(config, artifacts))
        return _BergamotHandle(service, model)

    def translate(self, handle: _BergamotHandle, text: str) -> str:
        bergamot = self._bergamot
        options = bergamot.ResponseOptions(alignment=False, qualityScores=False, HTML=False)
        responses = handle.service.translate(
            handle.model, bergamot.VectorString([text]), options
        )
        return responses[0].target.text

    def destroy(self, handle: _BergamotHandle) -> None:
        # Dropping the last references releases the native model and service.
        handle.model = None
        handle.service = None


def create_runtime(name: str) -> EngineRuntime:
    if name.lower() == "bergamot":
        return BergamotRuntime()
    raise ValueError(f"Unknown engine runtime: {name}")
