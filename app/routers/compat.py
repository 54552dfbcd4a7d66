# =============================================================================
# File: compat.py
# Date: 2026-10-18
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

"""Endpoints mimicking third-party translation APIs.

Kiss Translator, Immersive Translate, HCFY, DeepLX and MTranServer clients
can point at this service unchanged. Every surface goes through the
translation service, so all of them get pivot routing. Errors keep the
``{"error": message}`` shape these clients expect.
"""

import functools
import time
from typing import Any, Awaitable, Callable

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from app.app_state import TranslationState
from app.dependencies.state import STATE_DEP
from app.exceptions import InvalidInputError, LinguaSparkError
from app.logger import get_logger
from app.models.compat_request import (
    DeeplxRequest,
    HcfyRequest,
    ImmeRequest,
    KissRequest,
    MTranServerBatchRequest,
    MTranServerRequest,
)
from app.utils.error_handler import ErrorHandler
from app.utils.language_codes import code_from_name

logger = get_logger("compat")

router = APIRouter()

HCFY_DEFAULT_SOURCE = "english"
HCFY_DEFAULT_DESTINATION = "chinese"


def compat_errors(context: str) -> Callable:
    """Render service errors as ``{"error": message}`` with the mapped status."""

    def decorator(func: Callable[..., Awaitable[Any]]) -> Callable[..., Awaitable[Any]]:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except LinguaSparkError as e:
                ErrorHandler.handle_exception(e, context)
                return JSONResponse(
                    status_code=ErrorHandler.get_http_status(e),
                    content={"error": e.message},
                )

        return wrapper

    return decorator


@router.post("/kiss")
@compat_errors("kiss")
async def kiss(request: KissRequest, state: TranslationState = STATE_DEP):
    if not request.text or not request.to_lang:
        raise InvalidInputError("Missing text or to")
    result = await state.translator.translate(request.text, request.from_lang, request.to_lang)
    return {"text": result.text, "from": result.source_lang, "to": result.target_lang}


@router.post("/imme")
@compat_errors("imme")
async def imme(request: ImmeRequest, state: TranslationState = STATE_DEP):
    """Immersive Translate: one request carries a list of texts."""
    if not request.target_lang or request.text_list is None:
        raise InvalidInputError("Missing target_lang or text_list")
    results = await state.translator.translate_batch(
        request.text_list, request.source_lang, request.target_lang
    )
    return {
        "translations": [
            {"detected_source_lang": result.source_lang, "text": result.text}
            for result in results
        ]
    }


@router.post("/hcfy")
@compat_errors("hcfy")
async def hcfy(request: HcfyRequest, state: TranslationState = STATE_DEP):
    """HCFY: languages arrive as display names, e.g. "英语" or "chinese"."""
    if not request.text or not request.destination:
        raise InvalidInputError("Missing text or destination")
    source_name = request.source or HCFY_DEFAULT_SOURCE
    destination = request.destination[0] or HCFY_DEFAULT_DESTINATION

    result = await state.translator.translate(
        request.text, code_from_name(source_name), code_from_name(destination)
    )
    return {
        "text": request.text,
        "from": source_name,
        "to": destination,
        "result": [result.text],
    }


@router.post("/deeplx")
@compat_errors("deeplx")
async def deeplx(request: DeeplxRequest, state: TranslationState = STATE_DEP):
    if not request.text or not request.source_lang or not request.target_lang:
        raise InvalidInputError("Missing required fields")
    result = await state.translator.translate(
        request.text, request.source_lang, request.target_lang
    )
    return {
        "code": 200,
        "id": int(time.time() * 1000),
        "data": result.text,
        "alternatives": [],
        "source_lang": request.source_lang.upper(),
        "target_lang": request.target_lang.upper(),
        "method": "Free",
    }


@router.post("/translate_mtranserver")
@compat_errors("translate_mtranserver")
async def mtranserver(request: MTranServerRequest, state: TranslationState = STATE_DEP):
    if not request.from_lang or not request.to_lang or not request.text:
        raise InvalidInputError("Missing required fields: from, to, text")
    result = await state.translator.translate(request.text, request.from_lang, request.to_lang)
    return {"result": result.text}


@router.post("/translate_mtranserver/batch")
@compat_errors("translate_mtranserver_batch")
async def mtranserver_batch(
    request: MTranServerBatchRequest, state: TranslationState = STATE_DEP
):
    if not request.from_lang or not request.to_lang or request.texts is None:
        raise InvalidInputError("Missing required fields: from, to, texts[]")
    results = await state.translator.translate_batch(
        request.texts, request.from_lang, request.to_lang
    )
    return {"results": [result.text for result in results]}
