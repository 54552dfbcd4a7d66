# =============================================================================
# File: translation.py
# Date: 2026-10-18
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

from fastapi import APIRouter

from app.app_state import TranslationState
from app.dependencies.state import STATE_DEP
from app.exceptions import InvalidInputError
from app.models.translation_request import DetectRequest, TranslationRequest
from app.models.translation_response import DetectResponse, TranslationResponse

router = APIRouter()


@router.post("/translate", response_model=TranslationResponse)
async def translate(
    request: TranslationRequest, state: TranslationState = STATE_DEP
) -> TranslationResponse:
    """Translate text, directly or through the hub language."""
    if not request.text or not request.to_lang:
        raise InvalidInputError("Missing text or to")
    result = await state.translator.translate(
        request.text, request.from_lang, request.to_lang
    )
    return TranslationResponse(
        text=result.text, from_lang=result.source_lang, to_lang=result.target_lang
    )


@router.post("/detect", response_model=DetectResponse)
async def detect(request: DetectRequest, state: TranslationState = STATE_DEP) -> DetectResponse:
    if not request.text:
        raise InvalidInputError("Missing text")
    return DetectResponse(language=state.detector(request.text))
