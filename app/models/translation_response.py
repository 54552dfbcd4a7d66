# =============================================================================
# File: translation_response.py
# Date: 2026-10-18
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

from pydantic import BaseModel, ConfigDict, Field


class TranslationResponse(BaseModel):
    """
    Response of the native /translate endpoint. `from` is the resolved
    (possibly detected) source language.
    """

    model_config = ConfigDict(populate_by_name=True)

    text: str = Field(..., description="The translated text.")
    from_lang: str = Field(..., alias="from", description="Resolved source language.")
    to_lang: str = Field(..., alias="to", description="Target language.")


class DetectResponse(BaseModel):
    language: str = Field(..., description="Detected language code.")
