# =============================================================================
# File: models.py
# Date: 2026-10-18
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

import asyncio

from fastapi import APIRouter

from app.app_state import TranslationState
from app.dependencies.state import STATE_DEP
from app.exceptions import InvalidInputError
from app.models.model_request import RegisterModelRequest
from app.models.model_response import ModelInfo, ModelListResponse, RegisterModelResponse
from app.utils.language_codes import normalize, pair_key

router = APIRouter()


@router.get("/models", response_model=ModelListResponse)
async def list_models(state: TranslationState = STATE_DEP) -> ModelListResponse:
    """List registered language pairs (public)."""
    return ModelListResponse(
        models=[ModelInfo(**descriptor.to_dict()) for descriptor in state.registry.list()]
    )


@router.post("/models/load", response_model=RegisterModelResponse)
async def register_model(
    request: RegisterModelRequest, state: TranslationState = STATE_DEP
) -> RegisterModelResponse:
    """Register a model directory for on-demand loading; the engine is not built here."""
    if not request.from_lang or not request.to_lang:
        raise InvalidInputError("Missing from or to")

    key = pair_key(normalize(request.from_lang), normalize(request.to_lang))
    already_registered = state.registry.has(key)
    # Registration reads the artifact files; keep it off the event loop.
    descriptor = await asyncio.to_thread(
        state.registry.register, request.from_lang, request.to_lang, request.model_dir
    )
    return RegisterModelResponse(
        key=descriptor.key,
        from_lang=descriptor.source_lang,
        to_lang=descriptor.target_lang,
        already_registered=already_registered,
        message=None if already_registered else "Model registered for on-demand loading",
    )
