# =============================================================================
# File: compat_request.py
# Date: 2026-10-18
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

"""Request bodies of the third-party client compatible endpoints."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class KissRequest(BaseModel):
    """Kiss Translator: same shape as the native request."""

    model_config = ConfigDict(populate_by_name=True)

    text: Optional[str] = None
    from_lang: Optional[str] = Field(None, alias="from")
    to_lang: Optional[str] = Field(None, alias="to")


class ImmeRequest(BaseModel):
    """Immersive Translate batch request."""

    source_lang: Optional[str] = None
    target_lang: Optional[str] = None
    text_list: Optional[List[str]] = None


class HcfyRequest(BaseModel):
    """HCFY request; languages are given as display names."""

    text: Optional[str] = None
    source: Optional[str] = None
    destination: Optional[List[str]] = None


class DeeplxRequest(BaseModel):
    text: Optional[str] = None
    source_lang: Optional[str] = None
    target_lang: Optional[str] = None


class MTranServerRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_lang: Optional[str] = Field(None, alias="from")
    to_lang: Optional[str] = Field(None, alias="to")
    text: Optional[str] = None
    html: Optional[bool] = Field(False, description="Accepted for compatibility; markup is translated as text.")


class MTranServerBatchRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_lang: Optional[str] = Field(None, alias="from")
    to_lang: Optional[str] = Field(None, alias="to")
    texts: Optional[List[str]] = None
    html: Optional[bool] = Field(False)
