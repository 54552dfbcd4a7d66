# =============================================================================
# File: translation_request.py
# Date: 2026-10-18
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class TranslationRequest(BaseModel):
    """
    Request body for the native /translate endpoint.
    """

    model_config = ConfigDict(populate_by_name=True)

    text: Optional[str] = Field(None, description="The text to translate.")
    from_lang: Optional[str] = Field(
        None,
        alias="from",
        description="Source language code. Omit or pass 'auto' to detect it from the text.",
    )
    to_lang: Optional[str] = Field(
        None, alias="to", description="Target language code."
    )


class DetectRequest(BaseModel):
    text: Optional[str] = Field(None, description="The text whose language is detected.")
